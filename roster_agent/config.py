"""Configuration management for Roster Agent."""

import json
import os
from pathlib import Path
from typing import Optional
from pydantic import BaseModel
from rich.console import Console

console = Console()

# Load environment variables from global .env file, then the project one
try:
    from dotenv import load_dotenv
    global_env_path = Path.home() / ".env"
    if global_env_path.exists():
        load_dotenv(global_env_path)
    local_env_path = Path(__file__).parent.parent / ".env"
    if local_env_path.exists():
        load_dotenv(local_env_path)
except Exception as e:
    console.print(f"[yellow]Warning: Error loading .env file: {e}[/yellow]")


class Config(BaseModel):
    """Application configuration."""

    team_id: Optional[str] = None
    last_roster_id: Optional[str] = None
    default_slot_capacity: int = 5


class BackendConfig:
    """Supabase connection settings read from the environment."""

    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")

    # Optional user JWT; the anon key is used as bearer when unset
    SUPABASE_ACCESS_TOKEN: str = os.getenv("SUPABASE_ACCESS_TOKEN", "")
    SUPABASE_USER_ID: str = os.getenv("SUPABASE_USER_ID", "")

    CACHE_TTL_MINUTES: int = int(os.getenv("ROSTER_CACHE_TTL_MINUTES", "60"))

    REQUEST_TIMEOUT: float = 30.0

    @classmethod
    def validate(cls) -> None:
        """Validate required environment variables are set."""
        missing = []
        if not cls.SUPABASE_URL:
            missing.append("SUPABASE_URL")
        if not cls.SUPABASE_KEY:
            missing.append("SUPABASE_KEY")

        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

    @classmethod
    def rest_url(cls) -> str:
        """Get the PostgREST base URL."""
        return f"{cls.SUPABASE_URL.rstrip('/')}/rest/v1"


class ConfigManager:
    """Manages application configuration persistence."""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or Path.home() / ".roster_agent"
        self.config_file = self.config_dir / "config.json"
        self._ensure_config_dir()

    def _ensure_config_dir(self) -> None:
        """Ensure config directory exists."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

    def load_config(self) -> Config:
        """Load configuration from file."""
        if not self.config_file.exists():
            return Config()

        try:
            with open(self.config_file, 'r') as f:
                data = json.load(f)
                return Config(**data)
        except (json.JSONDecodeError, ValueError) as e:
            console.print(f"[yellow]Warning: Invalid config file, using defaults: {e}[/yellow]")
            return Config()

    def save_config(self, config: Config) -> None:
        """Save configuration to file."""
        try:
            with open(self.config_file, 'w') as f:
                json.dump(config.model_dump(), f, indent=2)
        except OSError as e:
            console.print(f"[yellow]Warning: Could not save config: {e}[/yellow]")

    def get_cache_dir(self) -> Path:
        """Get cache directory path."""
        cache_dir = self.config_dir / "cache"
        cache_dir.mkdir(exist_ok=True)
        return cache_dir

    def get_output_dir(self) -> Path:
        """Get output directory path."""
        output_dir = Path("out")
        output_dir.mkdir(exist_ok=True)
        return output_dir
