"""Starter slot capacity and save validation."""

from typing import Optional
from pydantic import BaseModel

from roster_agent.lineup.errors import InvalidCapacity

MIN_SLOTS = 1
MAX_SLOTS = 50
DEFAULT_SLOTS = 5

TOO_MANY_STARTERS = "too many starters"


def is_valid_capacity(value) -> bool:
    """Check that a value is an integer slot count within 1-50."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return MIN_SLOTS <= value <= MAX_SLOTS


def clamp_capacity(value: int) -> int:
    """Clamp a slot count into 1-50."""
    return max(MIN_SLOTS, min(MAX_SLOTS, value))


class SaveValidation(BaseModel):
    """Outcome of checking a lineup before save."""

    ok: bool
    message: Optional[str] = None
    starters: int = 0
    slot_capacity: int = DEFAULT_SLOTS

    @property
    def detail(self) -> str:
        """Get a coach-facing explanation of a failed check."""
        if self.ok:
            return "Lineup is ready to save"
        return (
            f"{self.starters} starters exceed the roster size of {self.slot_capacity}. "
            "Bench or remove a starter, or increase the roster size before saving."
        )


class SlotPolicy:
    """Holds the starter capacity for one game roster.

    Lowering the capacity never evicts starters; an over-full lineup is
    instead rejected by validate_for_save().
    """

    def __init__(self, slot_capacity: int = DEFAULT_SLOTS):
        if not is_valid_capacity(slot_capacity):
            raise InvalidCapacity(slot_capacity)
        self._slot_capacity = slot_capacity

    @property
    def slot_capacity(self) -> int:
        return self._slot_capacity

    def set_slot_capacity(self, value: int) -> None:
        """Change the starter capacity."""
        if not is_valid_capacity(value):
            raise InvalidCapacity(value)
        self._slot_capacity = value


def validate_for_save(partition, slot_capacity: int) -> SaveValidation:
    """Check that the lineup fits within the starter capacity."""
    count = len(partition.starters)
    if count > slot_capacity:
        return SaveValidation(
            ok=False,
            message=TOO_MANY_STARTERS,
            starters=count,
            slot_capacity=slot_capacity
        )
    return SaveValidation(ok=True, starters=count, slot_capacity=slot_capacity)
