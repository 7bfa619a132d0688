"""Conversion between an in-memory lineup and a stored roster record."""

from typing import Any, Dict, Iterable, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from roster_agent.models.game_roster import RosterMeta, RosterRecord, RosterSlot
from roster_agent.models.player import Player

from roster_agent.lineup.errors import MalformedRecord
from roster_agent.lineup.overrides import PositionOverrides
from roster_agent.lineup.partition import RosterPartition
from roster_agent.lineup.slots import DEFAULT_SLOTS, SlotPolicy, is_valid_capacity

LINEUP_FIELDS = ("starters", "substitutes")


class RestoredRoster(BaseModel):
    """Lineup state rebuilt from a stored record."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    partition: RosterPartition
    meta: RosterMeta
    dropped_player_ids: List[str] = Field(default_factory=list)

    @property
    def overrides(self) -> PositionOverrides:
        return self.partition.overrides

    @property
    def slot_policy(self) -> SlotPolicy:
        return self.partition.slot_policy

    @property
    def slot_capacity(self) -> int:
        return self.partition.slot_capacity

    @property
    def dropped_count(self) -> int:
        return len(self.dropped_player_ids)


def _build_slots(players: List[Player], overrides: PositionOverrides) -> List[RosterSlot]:
    return [
        RosterSlot(
            player_id=player.id,
            slot_number=index + 1,
            position_override=overrides.get(player.id)
        )
        for index, player in enumerate(players)
    ]


def to_record(
    partition: RosterPartition,
    overrides: PositionOverrides,
    slot_capacity: int,
    meta: Optional[RosterMeta] = None
) -> RosterRecord:
    """Snapshot a lineup into a record ready to store.

    Slot numbers are rebuilt from list order, 1-based and independent for
    starters and substitutes. Callers must have passed validate_for_save().
    """
    meta = meta or RosterMeta()
    return RosterRecord(
        id=meta.roster_id,
        team_id=meta.team_id,
        title=meta.title,
        game_date=meta.game_date,
        starter_slots=slot_capacity,
        starters=_build_slots(partition.starters, overrides),
        substitutes=_build_slots(partition.substitutes, overrides)
    )


def parse_record(data: Any) -> RosterRecord:
    """Validate the structure of a stored roster row.

    Raises:
        MalformedRecord: if the lineup arrays or their entries are not shaped
            as {player_id: str, slot_number: int, position_override?: str}
    """
    if isinstance(data, RosterRecord):
        return data
    if not isinstance(data, dict):
        raise MalformedRecord(f"expected an object, got {type(data).__name__}")

    cleaned = dict(data)
    for field in LINEUP_FIELDS:
        entries = cleaned.get(field)
        if entries is None:
            cleaned[field] = []
            continue
        if not isinstance(entries, list):
            raise MalformedRecord(f"'{field}' must be an array", field=field)
        for position, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise MalformedRecord(f"{field}[{position}] must be an object", field=field)
            if "slot_number" not in entry:
                raise MalformedRecord(f"{field}[{position}] is missing slot_number", field=field)

    for key in ("title", "team_id"):
        if cleaned.get(key) is None:
            cleaned.pop(key, None)

    try:
        return RosterRecord(**cleaned)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise MalformedRecord(f"{location}: {first['msg']}", field=str(first["loc"][0]))


def _resolve(
    slots: List[RosterSlot],
    lookup: Dict[str, Player],
    overrides: PositionOverrides
) -> Tuple[List[Player], List[str]]:
    resolved: List[Player] = []
    dropped: List[str] = []
    # sorted() is stable, so equal slot numbers keep stored order
    for slot in sorted(slots, key=lambda s: s.slot_number):
        player = lookup.get(slot.player_id)
        if player is None:
            dropped.append(slot.player_id)
            continue
        resolved.append(player)
        if slot.position_override:
            overrides.set_override(player.id, slot.position_override)
    return resolved, dropped


def from_record(
    record: Any,
    players: Iterable[Player],
    default_slot_capacity: int = DEFAULT_SLOTS
) -> RestoredRoster:
    """Rebuild a lineup from a stored record and the current team players.

    Entries whose player is no longer on the team are skipped and reported in
    dropped_player_ids. Slot numbers only order the entries; they are not
    positions in the rebuilt lists.
    """
    parsed = parse_record(record)
    team = list(players)
    lookup = {player.id: player for player in team}

    overrides = PositionOverrides()
    starters, dropped_starters = _resolve(parsed.starters, lookup, overrides)
    substitutes, dropped_subs = _resolve(parsed.substitutes, lookup, overrides)

    if is_valid_capacity(parsed.starter_slots):
        capacity = parsed.starter_slots
    else:
        capacity = default_slot_capacity

    partition = RosterPartition.restore(
        team,
        starters,
        substitutes,
        slot_policy=SlotPolicy(capacity),
        overrides=overrides
    )
    return RestoredRoster(
        partition=partition,
        meta=parsed.meta,
        dropped_player_ids=dropped_starters + dropped_subs
    )
