"""File management utilities."""

from datetime import datetime
from pathlib import Path
from typing import Optional
from roster_agent.config import ConfigManager


def _safe(value: str) -> str:
    return "".join(c for c in value if c.isalnum() or c in "._-")


class FileManager:
    """Manages file paths and directories."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        self.config_manager = config_manager or ConfigManager()

    def get_output_path(self, filename: str) -> Path:
        """Get output file path."""
        output_dir = self.config_manager.get_output_dir()
        return output_dir / filename

    def get_cache_dir(self) -> Path:
        """Get cache directory."""
        return self.config_manager.get_cache_dir()

    def cache_filename(self, key: str) -> str:
        """Generate offline cache filename for a cache key."""
        return f"{_safe(key)}.json"

    def lineup_filename(self, roster_id: Optional[str]) -> str:
        """Generate lineup CSV filename."""
        # Add timestamp to make filename unique
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return f"lineup_{_safe(roster_id or 'unsaved')}_{timestamp}.csv"

    def ensure_output_dir(self) -> Path:
        """Ensure output directory exists and return path."""
        return self.config_manager.get_output_dir()


# Global file manager instance
file_manager = FileManager()
