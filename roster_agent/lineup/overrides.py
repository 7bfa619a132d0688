"""Per-game position overrides."""

from typing import Dict, Iterator, Optional

from roster_agent.models.player import Player


class PositionOverrides:
    """Maps player ids to a position label for one game roster.

    Overrides are a display annotation only. They do not follow the player
    between starters, substitutes and available; they are removed only by
    clear_override() or clear().
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._overrides: Dict[str, str] = {}
        for player_id, text in (initial or {}).items():
            self.set_override(player_id, text)

    def set_override(self, player_id: str, text: Optional[str]) -> None:
        """Store an override, or clear it when text is blank."""
        value = (text or "").strip()
        if not value:
            self.clear_override(player_id)
            return
        self._overrides[player_id] = value

    def clear_override(self, player_id: str) -> None:
        """Remove an override if present."""
        self._overrides.pop(player_id, None)

    def get(self, player_id: str) -> Optional[str]:
        """Get the override for a player, if any."""
        return self._overrides.get(player_id)

    def has_override(self, player_id: str) -> bool:
        return player_id in self._overrides

    def effective_position(self, player: Player) -> Optional[str]:
        """Get the override, else the default position, else None."""
        override = self._overrides.get(player.id)
        if override is not None:
            return override
        return player.position or None

    def clear(self) -> None:
        self._overrides.clear()

    def as_dict(self) -> Dict[str, str]:
        return dict(self._overrides)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._overrides

    def __iter__(self) -> Iterator[str]:
        return iter(self._overrides)

    def __len__(self) -> int:
        return len(self._overrides)
