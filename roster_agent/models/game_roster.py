"""Game roster data models."""

from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel, Field, StrictInt, StrictStr


class RosterSlot(BaseModel):
    """One starter or substitute entry of a saved roster."""

    player_id: StrictStr
    slot_number: StrictInt
    position_override: Optional[str] = None

    def to_wire(self) -> dict:
        """Serialize, omitting position_override when unset."""
        return self.model_dump(exclude_none=True)


class RosterMeta(BaseModel):
    """Descriptive fields of a game roster."""

    roster_id: Optional[str] = None
    team_id: str = ""
    title: str = ""
    game_date: Optional[str] = None


class RosterRecord(BaseModel):
    """A game_rosters row as stored by the backend."""

    id: Optional[str] = None
    team_id: str = ""
    title: str = ""
    game_date: Optional[str] = None
    starter_slots: Any = None  # validated by the serializer, not here
    starters: List[RosterSlot] = Field(default_factory=list)
    substitutes: List[RosterSlot] = Field(default_factory=list)
    created_at: Optional[str] = None
    created_by: Optional[str] = None

    @property
    def meta(self) -> RosterMeta:
        """Get the descriptive fields of this record."""
        return RosterMeta(
            roster_id=self.id,
            team_id=self.team_id,
            title=self.title,
            game_date=self.game_date
        )

    def lineup_payload(self) -> dict:
        """Get the lineup fields in wire shape."""
        return {
            "starter_slots": self.starter_slots,
            "starters": [slot.to_wire() for slot in self.starters],
            "substitutes": [slot.to_wire() for slot in self.substitutes]
        }

    def to_update_payload(self) -> dict:
        """Get the whole-record replace body sent on save."""
        payload = self.lineup_payload()
        payload["title"] = self.title
        payload["game_date"] = self.game_date
        return payload


class GameRosterSummary(BaseModel):
    """Saved roster entry shown in roster listings."""

    id: Optional[str] = None
    title: str
    game_date: Optional[str] = None
    starter_slots: int = 5
    created_at: Optional[datetime] = None

    @classmethod
    def from_api_response(cls, data: dict) -> "GameRosterSummary":
        """Create GameRosterSummary from a game_rosters row."""
        slots = data.get("starter_slots")
        return cls(
            id=data.get("id"),
            title=data.get("title") or "",
            game_date=data.get("game_date"),
            starter_slots=slots if isinstance(slots, int) and not isinstance(slots, bool) else 5,
            created_at=data.get("created_at")
        )

    @property
    def subtitle(self) -> str:
        """Get the listing subtitle."""
        if self.game_date:
            return f"{self.game_date} • {self.starter_slots} starters"
        return f"{self.starter_slots} starters"
