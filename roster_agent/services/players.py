"""Team player directory with offline cache fallback."""

from typing import Dict, List, Optional
from rich.console import Console

from roster_agent.config import BackendConfig
from roster_agent.io.cache import OfflineCache
from roster_agent.models.player import Player
from roster_agent.services.api import get_json, BackendAPIError

console = Console()

PLAYER_COLUMNS = "id, team_id, name, jersey_number, nickname, position, status, created_at"


class PlayerDirectory:
    """Supplies the authoritative player list of a team."""

    def __init__(self, cache: Optional[OfflineCache] = None):
        self.cache = cache or OfflineCache()
        self._players: Dict[str, List[Player]] = {}

    def _fetch_from_api(self, team_id: str) -> List[Player]:
        data = get_json("players", params={
            "select": PLAYER_COLUMNS,
            "team_id": f"eq.{team_id}",
            "order": "name.asc"
        })

        if not isinstance(data, list):
            raise ValueError("Invalid API response format")

        return [Player.from_api_response(row) for row in data if isinstance(row, dict)]

    def list_players(self, team_id: str, refresh: bool = False) -> List[Player]:
        """Get all players of a team, ordered by name.

        Falls back to the offline cache when the backend is unreachable.
        """
        if not refresh and team_id in self._players:
            return list(self._players[team_id])

        key = OfflineCache.players_key(team_id)
        try:
            players = self._fetch_from_api(team_id)
        except BackendAPIError as e:
            if not e.is_network_error:
                raise
            cached = self.cache.read_list(key)
            if cached is None:
                console.print(f"[red]Failed to fetch players and no cached copy: {e}[/red]")
                raise
            console.print(f"[yellow]Offline: using {len(cached)} cached players for team {team_id}[/yellow]")
            players = [Player.from_api_response(row) for row in cached]
        else:
            self.cache.write_list(
                key,
                [player.to_cache_dict() for player in players],
                ttl_minutes=BackendConfig.CACHE_TTL_MINUTES
            )
            console.print(f"[green]Loaded {len(players)} players for team {team_id}[/green]")

        self._players[team_id] = players
        return list(players)

    def lookup_player(self, team_id: str, player_id: str) -> Optional[Player]:
        """Look up a player of a team by id."""
        for player in self.list_players(team_id):
            if player.id == player_id:
                return player
        return None
