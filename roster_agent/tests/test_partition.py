"""Tests for the starters / substitutes / available partition."""

import pytest

from roster_agent.lineup.errors import (
    CapacityExceeded,
    DuplicateAssignment,
    IndexOutOfRange,
    PlayerNotAssigned,
    UnknownPlayer,
)
from roster_agent.lineup.overrides import PositionOverrides
from roster_agent.lineup.partition import RosterPartition, STARTERS, SUBSTITUTES, AVAILABLE
from roster_agent.lineup.slots import SlotPolicy
from roster_agent.models.player import Player


def make_players(*names):
    return [Player(id=f"p{i}", team_id="team1", name=name) for i, name in enumerate(names, start=1)]


def ids(players):
    return [p.id for p in players]


def assert_disjoint(partition):
    starters = set(ids(partition.starters))
    subs = set(ids(partition.substitutes))
    available = set(ids(partition.available))
    assert not starters & subs
    assert not starters & available
    assert not subs & available
    assert starters | subs | available == set(ids(partition.players))


class TestAssignment:
    """Test adding and removing players."""

    def setup_method(self):
        self.players = make_players("Ava", "Ben", "Cal")
        self.p1, self.p2, self.p3 = self.players
        self.partition = RosterPartition(self.players, SlotPolicy(2))

    def test_new_partition_has_everyone_available(self):
        """Test a fresh partition starts empty."""
        assert self.partition.starters == []
        assert self.partition.substitutes == []
        assert ids(self.partition.available) == ["p1", "p2", "p3"]
        assert self.partition.is_empty

    def test_capacity_enforcement(self):
        """Test the third starter is rejected when two slots exist."""
        self.partition.add_to_starters(self.p1)
        self.partition.add_to_starters(self.p2)

        with pytest.raises(CapacityExceeded) as exc_info:
            self.partition.add_to_starters(self.p3)

        assert exc_info.value.capacity == 2
        assert ids(self.partition.starters) == ["p1", "p2"]
        assert ids(self.partition.available) == ["p3"]

    def test_substitutes_are_unbounded(self):
        """Test the bench accepts more players than starter slots."""
        for player in self.players:
            self.partition.add_to_substitutes(player)

        assert ids(self.partition.substitutes) == ["p1", "p2", "p3"]
        assert self.partition.available == []

    def test_duplicate_assignment_rejected(self):
        """Test a player cannot be in both lists."""
        self.partition.add_to_starters(self.p1)

        with pytest.raises(DuplicateAssignment):
            self.partition.add_to_substitutes(self.p1)
        with pytest.raises(DuplicateAssignment):
            self.partition.add_to_starters(self.p1)

        assert ids(self.partition.starters) == ["p1"]
        assert self.partition.substitutes == []

    def test_player_from_another_team_rejected(self):
        """Test only players from the team list can be assigned."""
        outsider = Player(id="ghost", team_id="team2", name="Gus")

        with pytest.raises(UnknownPlayer) as exc_info:
            self.partition.add_to_starters(outsider)
        with pytest.raises(UnknownPlayer):
            self.partition.add_to_substitutes(outsider)

        assert exc_info.value.player_id == "ghost"
        assert self.partition.is_empty
        assert ids(self.partition.available) == ["p1", "p2", "p3"]
        assert_disjoint(self.partition)

    def test_remove_returns_player_to_available(self):
        """Test removing makes the player available again."""
        self.partition.add_to_starters(self.p1)
        self.partition.add_to_substitutes(self.p2)

        self.partition.remove_from_starters(self.p1)
        self.partition.remove_from_substitutes(self.p2)

        assert ids(self.partition.available) == ["p1", "p2", "p3"]

    def test_remove_from_wrong_list(self):
        """Test removing a player that is not in the list."""
        self.partition.add_to_substitutes(self.p1)

        with pytest.raises(PlayerNotAssigned):
            self.partition.remove_from_starters(self.p1)

        assert ids(self.partition.substitutes) == ["p1"]

    def test_available_keeps_team_order(self):
        """Test available players follow the team list order."""
        self.partition.add_to_starters(self.p2)

        assert ids(self.partition.available) == ["p1", "p3"]

    def test_status_of(self):
        """Test group lookup by player id."""
        self.partition.add_to_starters(self.p1)
        self.partition.add_to_substitutes(self.p2)

        assert self.partition.status_of("p1") == STARTERS
        assert self.partition.status_of("p2") == SUBSTITUTES
        assert self.partition.status_of("p3") == AVAILABLE
        assert self.partition.is_assigned("p1")
        assert not self.partition.is_assigned("p3")


class TestPromoteDemote:
    """Test moving players between starters and substitutes."""

    def setup_method(self):
        self.a, self.b, self.c = make_players("A", "B", "C")
        self.partition = RosterPartition([self.a, self.b, self.c], SlotPolicy(1))

    def test_promote_blocked_when_full(self):
        """Test promote fails without changing state when starters are full."""
        self.partition.add_to_starters(self.a)
        self.partition.add_to_substitutes(self.b)

        with pytest.raises(CapacityExceeded):
            self.partition.promote(self.b)

        assert ids(self.partition.starters) == ["p1"]
        assert ids(self.partition.substitutes) == ["p2"]

    def test_promote_appends_to_starters(self):
        """Test promote moves a substitute to the end of starters."""
        self.partition.slot_policy.set_slot_capacity(3)
        self.partition.add_to_starters(self.a)
        self.partition.add_to_substitutes(self.b)
        self.partition.add_to_substitutes(self.c)

        self.partition.promote(self.c)

        assert ids(self.partition.starters) == ["p1", "p3"]
        assert ids(self.partition.substitutes) == ["p2"]

    def test_promote_requires_substitute(self):
        """Test promoting an available player."""
        with pytest.raises(PlayerNotAssigned):
            self.partition.promote(self.a)

    def test_demote_appends_to_substitutes(self):
        """Test demote always succeeds and benches at the end."""
        self.partition.add_to_substitutes(self.b)
        self.partition.add_to_starters(self.a)

        self.partition.demote(self.a)

        assert self.partition.starters == []
        assert ids(self.partition.substitutes) == ["p2", "p1"]

    def test_demote_requires_starter(self):
        """Test demoting a player that is not a starter."""
        self.partition.add_to_substitutes(self.b)

        with pytest.raises(PlayerNotAssigned):
            self.partition.demote(self.b)


class TestReorder:
    """Test reordering within a list."""

    def setup_method(self):
        self.a, self.b, self.c = make_players("A", "B", "C")
        self.partition = RosterPartition([self.a, self.b, self.c], SlotPolicy(5))
        for player in (self.a, self.b, self.c):
            self.partition.add_to_starters(player)

    def test_move_first_to_last(self):
        """Test [A,B,C] moving 0 to 2 gives [B,C,A]."""
        self.partition.reorder(STARTERS, 0, 2)

        assert ids(self.partition.starters) == ["p2", "p3", "p1"]

    def test_move_last_to_first(self):
        """Test moving backwards shifts the others down."""
        self.partition.reorder(STARTERS, 2, 0)

        assert ids(self.partition.starters) == ["p3", "p1", "p2"]

    def test_same_index_is_noop(self):
        self.partition.reorder(STARTERS, 1, 1)

        assert ids(self.partition.starters) == ["p1", "p2", "p3"]

    @pytest.mark.parametrize("from_index,to_index", [(3, 0), (0, 3), (-1, 0), (0, -1)])
    def test_invalid_index(self, from_index, to_index):
        """Test out-of-range indices leave the list unchanged."""
        with pytest.raises(IndexOutOfRange):
            self.partition.reorder(STARTERS, from_index, to_index)

        assert ids(self.partition.starters) == ["p1", "p2", "p3"]

    def test_reorder_empty_substitutes(self):
        """Test any index is invalid for an empty list."""
        with pytest.raises(IndexOutOfRange):
            self.partition.reorder(SUBSTITUTES, 0, 0)

    def test_unknown_list(self):
        with pytest.raises(ValueError):
            self.partition.reorder("available", 0, 1)


class TestCapacityChanges:
    """Test slot changes against an existing lineup."""

    def test_lowering_capacity_keeps_starters(self):
        """Test lowering slots does not evict anyone."""
        players = make_players("A", "B", "C", "D", "E")
        partition = RosterPartition(players, SlotPolicy(5))
        for player in players:
            partition.add_to_starters(player)

        partition.slot_policy.set_slot_capacity(3)

        assert len(partition.starters) == 5
        assert partition.slot_capacity == 3
        assert partition.is_full

    def test_over_full_lineup_blocks_new_starters(self):
        players = make_players("A", "B", "C")
        partition = RosterPartition(players, SlotPolicy(2))
        partition.add_to_starters(players[0])
        partition.add_to_starters(players[1])
        partition.slot_policy.set_slot_capacity(1)

        with pytest.raises(CapacityExceeded):
            partition.add_to_starters(players[2])


class TestClearAll:
    """Test clearing the lineup."""

    def test_clear_all_resets_lineup_and_overrides(self):
        """Test clear_all empties both lists and the override store."""
        players = make_players("A", "B")
        overrides = PositionOverrides()
        partition = RosterPartition(players, SlotPolicy(2), overrides)
        partition.add_to_starters(players[0])
        partition.add_to_substitutes(players[1])
        overrides.set_override("p1", "Catcher")

        partition.clear_all()

        assert partition.is_empty
        assert ids(partition.available) == ["p1", "p2"]
        assert len(overrides) == 0


class TestPartitionInvariant:
    """Test membership stays disjoint across operation sequences."""

    def test_mixed_sequence(self):
        players = make_players("A", "B", "C", "D", "E")
        a, b, c, d, e = players
        partition = RosterPartition(players, SlotPolicy(2))

        steps = [
            lambda: partition.add_to_starters(a),
            lambda: partition.add_to_substitutes(b),
            lambda: partition.add_to_starters(c),
            lambda: partition.add_to_starters(d),
            lambda: partition.promote(b),
            lambda: partition.demote(a),
            lambda: partition.promote(b),
            lambda: partition.add_to_substitutes(e),
            lambda: partition.add_to_substitutes(c),
            lambda: partition.reorder(SUBSTITUTES, 0, 1),
            lambda: partition.remove_from_starters(c),
            lambda: partition.promote(e),
        ]
        for step in steps:
            try:
                step()
            except (CapacityExceeded, DuplicateAssignment, PlayerNotAssigned, IndexOutOfRange):
                pass
            assert_disjoint(partition)
            assert len(partition.starters) <= 2

    def test_restore_skips_repeated_ids(self):
        """Test restoring keeps the first occurrence of a repeated player."""
        a, b = make_players("A", "B")

        partition = RosterPartition.restore([a, b], [a, a], [a, b])

        assert ids(partition.starters) == ["p1"]
        assert ids(partition.substitutes) == ["p2"]
        assert_disjoint(partition)
