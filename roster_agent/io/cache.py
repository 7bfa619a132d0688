"""Offline JSON cache for team data.

Each key is stored as one JSON file holding an envelope:

    {"timestamp": "<ISO-8601 write time>", "ttl_minutes": 60, "data": [...]}

A ttl of 0 never expires. Services write fresh rows after every successful
fetch and read them back only when the backend cannot be reached.
"""

import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, List, Optional
from rich.console import Console

from roster_agent.io.files import FileManager, file_manager

console = Console()

DEFAULT_TTL_MINUTES = 60
_PREFIX = "roster_cache_"


class OfflineCache:
    """Manages cached row lists keyed by name."""

    def __init__(self, files: Optional[FileManager] = None, cache_dir: Optional[Path] = None):
        self.files = files or file_manager
        if cache_dir is not None:
            cache_dir.mkdir(parents=True, exist_ok=True)
            self.cache_dir = cache_dir
        else:
            self.cache_dir = self.files.get_cache_dir()

    def _path(self, key: str) -> Path:
        return self.cache_dir / self.files.cache_filename(f"{_PREFIX}{key}")

    def _read_entry(self, path: Path) -> Optional[Dict]:
        with open(path, 'r') as f:
            entry = json.load(f)
        if not isinstance(entry, dict):
            raise ValueError("cache entry is not an object")
        return entry

    @staticmethod
    def _is_expired(entry: Dict, ttl: int, now: datetime) -> bool:
        if not isinstance(ttl, int):
            ttl = DEFAULT_TTL_MINUTES
        if ttl <= 0:
            return False
        try:
            written = datetime.fromisoformat(entry.get("timestamp") or "")
        except ValueError:
            return False
        return now - written > timedelta(minutes=ttl)

    def write_list(self, key: str, data: List[Dict], ttl_minutes: int = DEFAULT_TTL_MINUTES) -> None:
        """Store a list of rows under key."""
        entry = {
            "timestamp": datetime.now().isoformat(),
            "ttl_minutes": ttl_minutes,
            "data": data
        }
        try:
            with open(self._path(key), 'w') as f:
                json.dump(entry, f, indent=2, default=str)
        except OSError as e:
            console.print(f"[yellow]Warning: Could not write cache '{key}': {e}[/yellow]")

    def read_list(self, key: str, max_age_minutes: Optional[int] = None) -> Optional[List[Dict]]:
        """Get the cached rows for key, or None if absent, expired or invalid."""
        path = self._path(key)
        if not path.exists():
            return None

        try:
            entry = self._read_entry(path)
        except (json.JSONDecodeError, ValueError) as e:
            console.print(f"[yellow]Malformed cache '{key}', removing: {e}[/yellow]")
            path.unlink(missing_ok=True)
            return None

        ttl = max_age_minutes
        if ttl is None:
            ttl = entry.get("ttl_minutes", DEFAULT_TTL_MINUTES)
        if self._is_expired(entry, ttl, datetime.now()):
            console.print(f"[yellow]Cache '{key}' expired (TTL was {ttl}m)[/yellow]")
            return None

        data = entry.get("data")
        if not isinstance(data, list):
            return None
        return [row for row in data if isinstance(row, dict)]

    def last_updated(self, key: str) -> Optional[datetime]:
        """Get the time of the last write for key."""
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return datetime.fromisoformat(self._read_entry(path).get("timestamp") or "")
        except (json.JSONDecodeError, ValueError):
            return None

    def invalidate(self, key: str) -> None:
        """Remove one cache entry."""
        self._path(key).unlink(missing_ok=True)

    def _entries(self) -> List[Path]:
        return sorted(self.cache_dir.glob(f"{_PREFIX}*.json"))

    def clear_all(self) -> None:
        """Remove every entry written by this cache."""
        for path in self._entries():
            path.unlink(missing_ok=True)

    def evict_expired(self) -> int:
        """Remove expired and malformed entries, returning how many."""
        now = datetime.now()
        removed = 0
        for path in self._entries():
            try:
                entry = self._read_entry(path)
                expired = self._is_expired(entry, entry.get("ttl_minutes", DEFAULT_TTL_MINUTES), now)
            except (json.JSONDecodeError, ValueError):
                expired = True
            if expired:
                path.unlink(missing_ok=True)
                removed += 1

        if removed:
            console.print(f"[blue]Evicted {removed} expired cache entries[/blue]")
        return removed

    @staticmethod
    def players_key(team_id: str) -> str:
        return f"players_{team_id}"

    @staticmethod
    def game_rosters_key(team_id: str) -> str:
        return f"game_rosters_{team_id}"
