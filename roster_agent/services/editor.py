"""Game roster editing session."""

from typing import List, Optional
from rich.console import Console

from roster_agent.lineup.errors import RosterValidationError
from roster_agent.lineup.overrides import PositionOverrides
from roster_agent.lineup.partition import RosterPartition
from roster_agent.lineup.serializer import from_record, to_record
from roster_agent.lineup.slots import DEFAULT_SLOTS, SaveValidation, SlotPolicy, validate_for_save
from roster_agent.models.game_roster import RosterMeta, RosterRecord
from roster_agent.models.player import Player
from roster_agent.services.game_rosters import GameRosterGateway
from roster_agent.services.players import PlayerDirectory

console = Console()


class EditorSession:
    """One open game roster editor.

    Owns the lineup partition, position overrides and slot policy for a
    single roster. Nothing is written until save(); dropping the session
    discards every change.
    """

    def __init__(
        self,
        team_id: str,
        directory: Optional[PlayerDirectory] = None,
        gateway: Optional[GameRosterGateway] = None,
        default_slot_capacity: int = DEFAULT_SLOTS
    ):
        self.team_id = team_id
        self.directory = directory or PlayerDirectory()
        self.gateway = gateway or GameRosterGateway()
        self.default_slot_capacity = default_slot_capacity
        self.meta = RosterMeta(team_id=team_id)
        self.partition = RosterPartition([], SlotPolicy(default_slot_capacity))
        self.dropped_player_ids: List[str] = []

    @property
    def overrides(self) -> PositionOverrides:
        return self.partition.overrides

    @property
    def slot_policy(self) -> SlotPolicy:
        return self.partition.slot_policy

    @property
    def roster_id(self) -> Optional[str]:
        return self.meta.roster_id

    def open(self, roster_id: Optional[str] = None, title: str = "", game_date: Optional[str] = None) -> None:
        """Load team players and, when roster_id is given, the saved lineup."""
        players = self.directory.list_players(self.team_id)
        self.dropped_player_ids = []

        if roster_id is None:
            self.meta = RosterMeta(team_id=self.team_id, title=title, game_date=game_date)
            self.partition = RosterPartition(players, SlotPolicy(self.default_slot_capacity))
            return

        row = self.gateway.load(roster_id)
        if row is None:
            raise ValueError(f"Roster {roster_id} not found")

        restored = from_record(row, players, default_slot_capacity=self.default_slot_capacity)
        self.partition = restored.partition
        self.meta = restored.meta.model_copy(update={
            "roster_id": restored.meta.roster_id or roster_id,
            "team_id": restored.meta.team_id or self.team_id
        })
        self.dropped_player_ids = restored.dropped_player_ids

        if restored.dropped_count:
            console.print(
                f"[yellow]{restored.dropped_count} saved player(s) are no longer on the team "
                f"and were left out of the lineup[/yellow]"
            )
        console.print(
            f"[green]Opened '{self.meta.title}': {len(self.partition.starters)} starters, "
            f"{len(self.partition.substitutes)} substitutes[/green]"
        )

    def player(self, player_id: str) -> Player:
        """Get a team player by id."""
        player = self.partition.find_player(player_id)
        if player is None:
            raise ValueError(f"Player {player_id} is not on this team")
        return player

    def effective_position(self, player: Player) -> Optional[str]:
        return self.overrides.effective_position(player)

    def set_slot_capacity(self, value: int) -> None:
        self.slot_policy.set_slot_capacity(value)

    def set_title(self, title: str) -> None:
        title = (title or "").strip()
        if not title:
            raise ValueError("Please enter a title")
        self.meta = self.meta.model_copy(update={"title": title})

    def set_game_date(self, game_date: Optional[str]) -> None:
        """Set or clear the game date."""
        self.meta = self.meta.model_copy(update={"game_date": game_date or None})

    def validate(self) -> SaveValidation:
        return validate_for_save(self.partition, self.slot_policy.slot_capacity)

    def to_record(self) -> RosterRecord:
        return to_record(self.partition, self.overrides, self.slot_policy.slot_capacity, self.meta)

    def save(self) -> str:
        """Write the whole roster to the backend and return its id.

        Raises:
            RosterValidationError: if there are more starters than slots; no
                request is sent in that case
        """
        validation = self.validate()
        if not validation.ok:
            console.print(f"[red]❌ {validation.detail}[/red]")
            raise RosterValidationError(validation.message)

        if self.roster_id is None:
            roster_id = self.gateway.create(
                self.team_id,
                self.meta.title,
                self.meta.game_date,
                self.slot_policy.slot_capacity
            )
            self.meta = self.meta.model_copy(update={"roster_id": roster_id})

        self.gateway.save(self.roster_id, self.to_record())
        return self.roster_id

    def summary(self) -> str:
        """Get a short text summary of the lineup."""
        starters = self.partition.starters
        substitutes = self.partition.substitutes
        return (
            f"Starters ({len(starters)}): {', '.join(p.name for p in starters)}\n\n"
            f"Subs ({len(substitutes)}): {', '.join(p.name for p in substitutes)}"
        )
