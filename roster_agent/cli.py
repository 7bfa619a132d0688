"""Main CLI application for Roster Agent."""

from typing import List, Optional
import typer
from rich.console import Console
from rich.prompt import Prompt, Confirm, IntPrompt
from rich.table import Table
from rich.panel import Panel

from roster_agent.config import ConfigManager
from roster_agent.io.csv_export import LineupExporter
from roster_agent.lineup.errors import RosterError
from roster_agent.lineup.partition import STARTERS, SUBSTITUTES
from roster_agent.models.player import Player
from roster_agent.services.api import BackendAPIError
from roster_agent.services.editor import EditorSession
from roster_agent.services.game_rosters import GameRosterGateway

app = typer.Typer(
    name="roster-agent",
    help="Game roster builder for coaches",
    add_completion=False
)
console = Console()

MENU = [
    ("1", "add-starter", "Add an available player to the starters"),
    ("2", "add-sub", "Add an available player to the substitutes"),
    ("3", "remove", "Remove a starter or substitute"),
    ("4", "promote", "Promote a substitute to starter"),
    ("5", "demote", "Bench a starter"),
    ("6", "reorder", "Move a player within starters or substitutes"),
    ("7", "position", "Set or clear a position override"),
    ("8", "slots", "Change the number of starter slots"),
    ("9", "details", "Change title or game date"),
    ("c", "clear", "Clear all assignments and overrides"),
    ("s", "save", "Save roster"),
    ("e", "export", "Export lineup to CSV"),
    ("q", "quit", "Quit without saving")
]


def render_players(title: str, players: List[Player], session: EditorSession) -> Table:
    """Build a numbered table of players."""
    table = Table(title=title)
    table.add_column("#", style="cyan")
    table.add_column("Player", style="green")
    table.add_column("Jersey", style="blue")
    table.add_column("Position", style="yellow")

    for index, player in enumerate(players, start=1):
        position = session.effective_position(player)
        if position is None:
            position = "[dim]Set position[/dim]"
        elif session.overrides.has_override(player.id):
            position = f"{position} *"
        table.add_row(str(index), player.display_name, player.display_jersey, position)

    return table


def show_lineup(session: EditorSession) -> None:
    """Print starters, substitutes and available players."""
    partition = session.partition
    header = session.meta.title or "New roster"
    if session.meta.game_date:
        header += f" • {session.meta.game_date}"
    console.print(Panel(header, border_style="blue"))
    console.print(render_players(
        f"Starters ({len(partition.starters)}/{partition.slot_capacity})", partition.starters, session
    ))
    console.print(render_players(f"Substitutes ({len(partition.substitutes)})", partition.substitutes, session))
    console.print(render_players(f"Available ({len(partition.available)})", partition.available, session))


class RosterEditorCLI:
    """Interactive game roster editor."""

    def __init__(self, team_id: Optional[str] = None):
        self.config_manager = ConfigManager()
        self.config = self.config_manager.load_config()
        self.team_id: Optional[str] = team_id or self.config.team_id
        self.gateway = GameRosterGateway()
        self.session: Optional[EditorSession] = None

    def setup_team(self) -> bool:
        """Ask for the team id unless one is already known."""
        if self.team_id:
            console.print(f"[blue]Using team: {self.team_id}[/blue]")
        else:
            team_id = Prompt.ask("Enter team_id")
            if not team_id:
                console.print("[red]Team ID cannot be empty[/red]")
                return False
            self.team_id = team_id

        self.config.team_id = self.team_id
        self.config_manager.save_config(self.config)
        return True

    def choose_roster(self) -> Optional[str]:
        """Pick a saved roster, or None for a new one."""
        rosters = self.gateway.list_for_team(self.team_id)

        table = Table()
        table.add_column("Choice", style="cyan")
        table.add_column("Title", style="green")
        table.add_column("Details", style="blue")
        table.add_row("0", "New roster", "")
        for index, roster in enumerate(rosters, start=1):
            table.add_row(str(index), roster.title, roster.subtitle)
        console.print(table)

        choice = IntPrompt.ask("Select a roster", choices=[str(i) for i in range(len(rosters) + 1)])
        if choice == 0:
            return None
        return rosters[choice - 1].id

    def open_session(self, roster_id: Optional[str]) -> None:
        self.session = EditorSession(
            self.team_id,
            gateway=self.gateway,
            default_slot_capacity=self.config.default_slot_capacity
        )
        if roster_id is None:
            title = Prompt.ask("Roster title", default=f"{self.team_id} vs. ")
            game_date = Prompt.ask("Game date (YYYY-MM-DD, blank for none)", default="")
            self.session.open(title=title.strip(), game_date=game_date.strip() or None)
        else:
            self.session.open(roster_id)
            self.config.last_roster_id = roster_id
            self.config_manager.save_config(self.config)

    def pick(self, players: List[Player], label: str) -> Optional[Player]:
        """Ask for a player by table number."""
        if not players:
            console.print(f"[yellow]No {label} players[/yellow]")
            return None
        console.print(render_players(label.capitalize(), players, self.session))
        choice = IntPrompt.ask(f"Choose a player (1-{len(players)})",
                               choices=[str(i) for i in range(1, len(players) + 1)])
        return players[choice - 1]

    def show_main_menu(self) -> Optional[str]:
        """Show main menu and get user choice."""
        menu_table = Table(show_header=False, box=None, padding=(0, 2))
        menu_table.add_column("Option", style="bold cyan")
        menu_table.add_column("Description")
        for key, _, description in MENU:
            menu_table.add_row(key, description)
        console.print(menu_table)

        choice = Prompt.ask("\nSelect an option", choices=[key for key, _, _ in MENU])
        for key, action, _ in MENU:
            if key == choice:
                return action
        return None

    def handle(self, action: str) -> bool:
        """Run one menu action. Returns False when the editor should close."""
        session = self.session
        partition = session.partition

        if action == "add-starter":
            player = self.pick(partition.available, "available")
            if player:
                partition.add_to_starters(player)
        elif action == "add-sub":
            player = self.pick(partition.available, "available")
            if player:
                partition.add_to_substitutes(player)
        elif action == "remove":
            player = self.pick(partition.starters + partition.substitutes, "assigned")
            if player:
                if partition.status_of(player.id) == STARTERS:
                    partition.remove_from_starters(player)
                else:
                    partition.remove_from_substitutes(player)
        elif action == "promote":
            player = self.pick(partition.substitutes, "substitute")
            if player:
                partition.promote(player)
        elif action == "demote":
            player = self.pick(partition.starters, "starter")
            if player:
                partition.demote(player)
        elif action == "reorder":
            list_name = Prompt.ask("Which list", choices=[STARTERS, SUBSTITUTES])
            from_slot = IntPrompt.ask("Move from slot")
            to_slot = IntPrompt.ask("Move to slot")
            partition.reorder(list_name, from_slot - 1, to_slot - 1)
        elif action == "position":
            player = self.pick(partition.players, "team")
            if player:
                current = session.effective_position(player) or ""
                text = Prompt.ask(f"Position override for {player.name} (blank to clear)", default=current)
                session.overrides.set_override(player.id, text)
        elif action == "slots":
            session.set_slot_capacity(IntPrompt.ask("Starter slots (1-50)", default=partition.slot_capacity))
        elif action == "details":
            session.set_title(Prompt.ask("Title", default=session.meta.title))
            game_date = Prompt.ask("Game date (blank to clear)", default=session.meta.game_date or "")
            session.set_game_date(game_date.strip() or None)
        elif action == "clear":
            if Confirm.ask("Clear all starters, substitutes and position overrides?", default=False):
                partition.clear_all()
        elif action == "save":
            roster_id = session.save()
            console.print(f"[bold green]✅ Roster saved ({roster_id})[/bold green]")
            console.print(Panel(session.summary(), title="Roster Summary", border_style="green"))
        elif action == "export":
            LineupExporter.export_lineup(session)
        elif action == "quit":
            if partition.is_empty or Confirm.ask("Discard unsaved changes?", default=True):
                return False
        return True

    def run(self) -> None:
        """Run the interactive editor."""
        try:
            if not self.setup_team():
                console.print("[red]❌ Setup cancelled[/red]")
                return

            self.open_session(self.choose_roster())

            while True:
                show_lineup(self.session)
                action = self.show_main_menu()
                try:
                    if not self.handle(action):
                        console.print("[blue]👋 Goodbye![/blue]")
                        break
                except (RosterError, ValueError) as e:
                    console.print(f"[red]❌ {e}[/red]")
                except BackendAPIError as e:
                    console.print(f"[red]❌ Backend error: {e}[/red]")

        except KeyboardInterrupt:
            console.print("\n[yellow]❌ Interrupted by user[/yellow]")
        except (BackendAPIError, RosterError, ValueError) as e:
            console.print(f"[red]❌ Error: {e}[/red]")


def _resolve_team(team_id: Optional[str]) -> str:
    target = team_id or ConfigManager().load_config().team_id
    if not target:
        console.print("[red]❌ No team ID provided. Use --team-id or run interactive mode first.[/red]")
        raise typer.Exit(1)
    return target


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    team_id: Optional[str] = typer.Option(None, "--team-id", "-t", help="Team ID to use")
) -> None:
    """Run the interactive roster editor."""
    # If a subcommand is invoked, don't run the interactive mode
    if ctx.invoked_subcommand is not None:
        return

    RosterEditorCLI(team_id).run()


@app.command("list")
def list_rosters(
    team_id: Optional[str] = typer.Option(None, "--team-id", "-t", help="Team ID to use")
) -> None:
    """List saved game rosters, newest first."""
    target = _resolve_team(team_id)
    try:
        rosters = GameRosterGateway().list_for_team(target)
    except (BackendAPIError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    if not rosters:
        console.print("[yellow]No saved rosters yet[/yellow]")
        return

    table = Table(title="Saved Rosters")
    table.add_column("ID", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Details", style="blue")
    for roster in rosters:
        table.add_row(roster.id or "", roster.title, roster.subtitle)
    console.print(table)


@app.command("create")
def create_roster(
    title: str = typer.Option(..., help="Roster title"),
    game_date: Optional[str] = typer.Option(None, "--game-date", help="Game date (YYYY-MM-DD)"),
    slots: int = typer.Option(5, "--slots", help="Starter slots (1-50)"),
    team_id: Optional[str] = typer.Option(None, "--team-id", "-t", help="Team ID to use")
) -> None:
    """Create an empty game roster."""
    target = _resolve_team(team_id)
    try:
        roster_id = GameRosterGateway().create(target, title, game_date, slots)
    except (BackendAPIError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)
    console.print(roster_id)


@app.command("show")
def show_roster(
    roster_id: str = typer.Argument(..., help="Saved roster ID"),
    team_id: Optional[str] = typer.Option(None, "--team-id", "-t", help="Team ID to use")
) -> None:
    """Show a saved roster."""
    session = EditorSession(_resolve_team(team_id))
    try:
        session.open(roster_id)
    except (BackendAPIError, RosterError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    show_lineup(session)
    validation = session.validate()
    if not validation.ok:
        console.print(f"[yellow]⚠️  {validation.detail}[/yellow]")


@app.command("export")
def export_roster(
    roster_id: str = typer.Argument(..., help="Saved roster ID"),
    team_id: Optional[str] = typer.Option(None, "--team-id", "-t", help="Team ID to use")
) -> None:
    """Export a saved roster lineup to CSV."""
    session = EditorSession(_resolve_team(team_id))
    try:
        session.open(roster_id)
        output_path = LineupExporter.export_lineup(session)
    except (BackendAPIError, RosterError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold green]✅ Lineup exported to: {output_path}[/bold green]")


@app.command("delete")
def delete_roster(
    roster_id: str = typer.Argument(..., help="Saved roster ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation")
) -> None:
    """Delete a saved roster."""
    if not yes and not Confirm.ask(f"Delete roster {roster_id}? This cannot be undone.", default=False):
        raise typer.Exit(0)
    try:
        GameRosterGateway().delete(roster_id)
    except BackendAPIError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
