"""Starters / substitutes / available partition of a team's players."""

from typing import Iterable, List, Optional

from roster_agent.models.player import Player

from roster_agent.lineup.errors import (
    CapacityExceeded,
    DuplicateAssignment,
    IndexOutOfRange,
    PlayerNotAssigned,
    UnknownPlayer,
)
from roster_agent.lineup.overrides import PositionOverrides
from roster_agent.lineup.slots import SlotPolicy

STARTERS = "starters"
SUBSTITUTES = "substitutes"
AVAILABLE = "available"


class RosterPartition:
    """Assignment of a team's players to one game roster.

    Starters and substitutes are ordered lists and a player id is in at most
    one of them. Available players are whatever remains of the team list and
    are computed on every access.

    Every mutator either completes or raises a RosterError with the state
    left untouched.
    """

    def __init__(
        self,
        players: Iterable[Player],
        slot_policy: Optional[SlotPolicy] = None,
        overrides: Optional[PositionOverrides] = None
    ):
        self._players: List[Player] = list(players)
        self.slot_policy = slot_policy or SlotPolicy()
        self.overrides = overrides if overrides is not None else PositionOverrides()
        self._starters: List[Player] = []
        self._substitutes: List[Player] = []

    @classmethod
    def restore(
        cls,
        players: Iterable[Player],
        starters: Iterable[Player],
        substitutes: Iterable[Player],
        slot_policy: Optional[SlotPolicy] = None,
        overrides: Optional[PositionOverrides] = None
    ) -> "RosterPartition":
        """Rebuild a partition from previously saved lists.

        Capacity is not enforced here: a saved lineup larger than its slot
        count is kept as-is and blocks the next save instead. Repeated ids
        keep their first occurrence, starters before substitutes.
        """
        partition = cls(players, slot_policy=slot_policy, overrides=overrides)
        seen = set()
        for target, source in ((partition._starters, starters),
                               (partition._substitutes, substitutes)):
            for player in source:
                if player.id in seen:
                    continue
                seen.add(player.id)
                target.append(player)
        return partition

    # Views

    @property
    def players(self) -> List[Player]:
        return list(self._players)

    @property
    def starters(self) -> List[Player]:
        return list(self._starters)

    @property
    def substitutes(self) -> List[Player]:
        return list(self._substitutes)

    @property
    def available(self) -> List[Player]:
        """Team players that are neither starters nor substitutes."""
        assigned = self._assigned_ids()
        return [p for p in self._players if p.id not in assigned]

    @property
    def slot_capacity(self) -> int:
        return self.slot_policy.slot_capacity

    @property
    def is_full(self) -> bool:
        return len(self._starters) >= self.slot_capacity

    @property
    def is_empty(self) -> bool:
        return not self._starters and not self._substitutes

    def is_assigned(self, player_id: str) -> bool:
        return player_id in self._assigned_ids()

    def status_of(self, player_id: str) -> str:
        """Get which group a player belongs to."""
        if self._index_of(self._starters, player_id) is not None:
            return STARTERS
        if self._index_of(self._substitutes, player_id) is not None:
            return SUBSTITUTES
        return AVAILABLE

    def find_player(self, player_id: str) -> Optional[Player]:
        """Look up a team player by id."""
        for player in self._players:
            if player.id == player_id:
                return player
        return None

    # Mutators

    def add_to_starters(self, player: Player) -> None:
        """Append a player to the starting lineup."""
        self._ensure_unassigned(player)
        if self.is_full:
            raise CapacityExceeded(self.slot_capacity)
        self._starters.append(player)

    def add_to_substitutes(self, player: Player) -> None:
        """Append a player to the bench."""
        self._ensure_unassigned(player)
        self._substitutes.append(player)

    def remove_from_starters(self, player: Player) -> None:
        self._remove(self._starters, player, STARTERS)

    def remove_from_substitutes(self, player: Player) -> None:
        self._remove(self._substitutes, player, SUBSTITUTES)

    def promote(self, player: Player) -> None:
        """Move a substitute to the end of the starting lineup."""
        index = self._index_of(self._substitutes, player.id)
        if index is None:
            raise PlayerNotAssigned(player.id, SUBSTITUTES)
        if self.is_full:
            raise CapacityExceeded(self.slot_capacity)
        self._starters.append(self._substitutes.pop(index))

    def demote(self, player: Player) -> None:
        """Move a starter to the end of the bench."""
        index = self._index_of(self._starters, player.id)
        if index is None:
            raise PlayerNotAssigned(player.id, STARTERS)
        self._substitutes.append(self._starters.pop(index))

    def reorder(self, list_name: str, from_index: int, to_index: int) -> None:
        """Move the entry at from_index to to_index, shifting the others."""
        target = self._list_for(list_name)
        for index in (from_index, to_index):
            if not 0 <= index < len(target):
                raise IndexOutOfRange(list_name, index, len(target))
        target.insert(to_index, target.pop(from_index))

    def clear_all(self) -> None:
        """Unassign every player and drop all position overrides."""
        self._starters.clear()
        self._substitutes.clear()
        self.overrides.clear()

    # Internal helpers

    def _assigned_ids(self) -> set:
        return {p.id for p in self._starters} | {p.id for p in self._substitutes}

    def _ensure_unassigned(self, player: Player) -> None:
        if self.find_player(player.id) is None:
            raise UnknownPlayer(player.id)
        current = self.status_of(player.id)
        if current != AVAILABLE:
            raise DuplicateAssignment(player.id, current)

    def _list_for(self, list_name: str) -> List[Player]:
        if list_name == STARTERS:
            return self._starters
        if list_name == SUBSTITUTES:
            return self._substitutes
        raise ValueError(f"Unknown lineup list: {list_name}")

    @staticmethod
    def _index_of(players: List[Player], player_id: str) -> Optional[int]:
        for index, player in enumerate(players):
            if player.id == player_id:
                return index
        return None

    def _remove(self, players: List[Player], player: Player, list_name: str) -> None:
        index = self._index_of(players, player.id)
        if index is None:
            raise PlayerNotAssigned(player.id, list_name)
        players.pop(index)
