"""Saved game roster persistence."""

from typing import Any, Dict, List, Optional
from rich.console import Console

from roster_agent.config import BackendConfig
from roster_agent.io.cache import OfflineCache
from roster_agent.lineup.slots import DEFAULT_SLOTS, clamp_capacity
from roster_agent.models.game_roster import GameRosterSummary, RosterRecord
from roster_agent.services.api import (
    get_json,
    post_json,
    patch_json,
    delete as delete_rows,
    BackendAPIError
)

console = Console()

TABLE = "game_rosters"

_UNSET: Any = object()


class GameRosterGateway:
    """Reads and writes game_rosters rows.

    A save replaces the lineup, slot count, title and game date in one
    request. There is no version check, so the last save wins.
    """

    def __init__(self, cache: Optional[OfflineCache] = None):
        self.cache = cache or OfflineCache()

    @staticmethod
    def _by_id(roster_id: str) -> Dict[str, str]:
        return {"id": f"eq.{roster_id}"}

    def load(self, roster_id: str) -> Optional[Dict[str, Any]]:
        """Get a stored roster row, or None if it does not exist."""
        try:
            rows = get_json(TABLE, params={**self._by_id(roster_id), "select": "*"})
        except BackendAPIError as e:
            if e.status_code == 404:
                return None
            raise

        if not rows:
            console.print(f"[yellow]Roster {roster_id} not found[/yellow]")
            return None
        if isinstance(rows, list):
            return rows[0]
        return rows

    def save(self, roster_id: str, record: RosterRecord) -> None:
        """Replace the stored roster with record."""
        patch_json(TABLE, record.to_update_payload(), params=self._by_id(roster_id))
        console.print(
            f"[green]Roster saved: {len(record.starters)} starters, "
            f"{len(record.substitutes)} substitutes[/green]"
        )

    def create(
        self,
        team_id: str,
        title: str,
        game_date: Optional[str] = None,
        slot_capacity: int = DEFAULT_SLOTS
    ) -> str:
        """Insert an empty roster and return its id."""
        title = (title or "").strip()
        if not title:
            raise ValueError("Please enter a title")

        row = {
            "team_id": team_id,
            "title": title,
            "game_date": game_date,
            "starter_slots": clamp_capacity(slot_capacity),
            "starters": [],
            "substitutes": []
        }
        if BackendConfig.SUPABASE_USER_ID:
            row["created_by"] = BackendConfig.SUPABASE_USER_ID

        result = post_json(TABLE, row, params={"select": "id"})
        if isinstance(result, list):
            result = result[0] if result else None
        if not isinstance(result, dict) or not result.get("id"):
            raise BackendAPIError(500, "Roster insert returned no id")

        console.print(f"[green]Created roster '{title}' ({result['id']})[/green]")
        return result["id"]

    def list_for_team(self, team_id: str) -> List[GameRosterSummary]:
        """Get saved rosters of a team, newest first."""
        key = OfflineCache.game_rosters_key(team_id)
        try:
            rows = get_json(TABLE, params={
                "select": "*",
                "team_id": f"eq.{team_id}",
                "order": "created_at.desc"
            })
        except BackendAPIError as e:
            if not e.is_network_error:
                raise
            rows = self.cache.read_list(key)
            if rows is None:
                raise
            console.print(f"[yellow]Offline: showing {len(rows)} cached rosters[/yellow]")
        else:
            rows = rows or []
            self.cache.write_list(key, rows, ttl_minutes=BackendConfig.CACHE_TTL_MINUTES)

        return [GameRosterSummary.from_api_response(row) for row in rows]

    def update_meta(self, roster_id: str, title: Optional[str] = None, game_date: Any = _UNSET) -> None:
        """Update only the title and/or game date of a roster.

        Pass game_date=None to clear the date.
        """
        payload: Dict[str, Any] = {}
        if title is not None:
            if not title.strip():
                raise ValueError("Please enter a title")
            payload["title"] = title.strip()
        if game_date is not _UNSET:
            payload["game_date"] = game_date
        if not payload:
            return
        patch_json(TABLE, payload, params=self._by_id(roster_id))

    def delete(self, roster_id: str) -> None:
        """Delete a saved roster."""
        delete_rows(TABLE, params=self._by_id(roster_id))
        console.print(f"[green]Deleted roster {roster_id}[/green]")
