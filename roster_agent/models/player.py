"""Player data models."""

from typing import Optional
from pydantic import BaseModel, ConfigDict


class Player(BaseModel):
    """Team player model."""

    model_config = ConfigDict(frozen=True)

    id: str
    team_id: str = ""
    name: str
    position: Optional[str] = None
    jersey_number: Optional[str] = None
    nickname: Optional[str] = None
    status: str = "present"

    @classmethod
    def from_api_response(cls, data: dict) -> "Player":
        """Create Player from a players table row."""
        jersey = data.get("jersey_number")
        return cls(
            id=data.get("id") or "",
            team_id=data.get("team_id") or "",
            name=data.get("name") or "",
            position=data.get("position"),
            jersey_number=str(jersey) if jersey is not None else None,
            nickname=data.get("nickname"),
            status=data.get("status") or "present"
        )

    def to_cache_dict(self) -> dict:
        """Row shape used for the offline cache."""
        return {
            "id": self.id,
            "team_id": self.team_id,
            "name": self.name,
            "position": self.position,
            "jersey_number": self.jersey_number,
            "nickname": self.nickname,
            "status": self.status
        }

    @property
    def display_name(self) -> str:
        """Get name with nickname appended when present."""
        if self.nickname:
            return f"{self.name} ({self.nickname})"
        return self.name

    @property
    def display_jersey(self) -> str:
        """Get display-friendly jersey number."""
        return self.jersey_number or "-"

    @property
    def status_label(self) -> str:
        """Get capitalised attendance status."""
        return self.status[:1].upper() + self.status[1:]
