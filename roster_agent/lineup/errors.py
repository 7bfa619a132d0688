"""Exceptions raised by the lineup engine."""

from typing import Optional


class RosterError(Exception):
    """Base exception for lineup errors."""
    pass


class CapacityExceeded(RosterError):
    """Raised when the starting lineup is already full."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"Lineup full ({capacity} spots). Adjust or bench a starter.")


class InvalidCapacity(RosterError):
    """Raised when a starter slot count is outside 1-50."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Starter slots must be between 1 and 50, got {value!r}")


class IndexOutOfRange(RosterError):
    """Raised when a reorder index is not a valid list position."""

    def __init__(self, list_name: str, index: int, length: int):
        self.list_name = list_name
        self.index = index
        self.length = length
        super().__init__(f"Index {index} is out of range for {list_name} (length {length})")


class DuplicateAssignment(RosterError):
    """Raised when a player is already a starter or substitute."""

    def __init__(self, player_id: str, current: str):
        self.player_id = player_id
        self.current = current
        super().__init__(f"Player {player_id} is already in {current}")


class PlayerNotAssigned(RosterError):
    """Raised when a player is not in the list an operation expects."""

    def __init__(self, player_id: str, list_name: str):
        self.player_id = player_id
        self.list_name = list_name
        super().__init__(f"Player {player_id} is not in {list_name}")


class MalformedRecord(RosterError):
    """Raised when a stored roster record has an invalid structure."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(f"Malformed roster record: {message}")


class RosterValidationError(RosterError):
    """Raised when a lineup cannot be saved in its current state."""

    def __init__(self, message: str = "too many starters"):
        self.message = message
        super().__init__(message)


class UnknownPlayer(RosterError):
    """Raised when a player is not on the team the lineup was built from."""

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"Player {player_id} is not on this team")
