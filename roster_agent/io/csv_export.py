"""CSV export utilities for game lineups."""

from pathlib import Path
from typing import Optional
import pandas as pd
from rich.console import Console

from roster_agent.io.files import FileManager, file_manager
from roster_agent.services.editor import EditorSession

console = Console()

LINEUP_COLUMNS = [
    "section",
    "slot_number",
    "player_id",
    "player_name",
    "jersey_number",
    "position",
    "has_override"
]


class LineupExporter:
    """Handles lineup CSV export operations."""

    @staticmethod
    def build_lineup_dataframe(session: EditorSession) -> pd.DataFrame:
        """Build one row per starter and substitute, in slot order."""
        rows = []
        for section, players in (("starter", session.partition.starters),
                                 ("substitute", session.partition.substitutes)):
            for index, player in enumerate(players):
                rows.append({
                    "section": section,
                    "slot_number": index + 1,
                    "player_id": player.id,
                    "player_name": player.display_name,
                    "jersey_number": player.display_jersey,
                    "position": session.effective_position(player) or "",
                    "has_override": session.overrides.has_override(player.id)
                })
        return pd.DataFrame(rows, columns=LINEUP_COLUMNS)

    @staticmethod
    def export_lineup(session: EditorSession, files: Optional[FileManager] = None) -> Path:
        """Export the session lineup to CSV."""
        files = files or file_manager
        df = LineupExporter.build_lineup_dataframe(session)
        if df.empty:
            raise ValueError("No lineup data to export")

        output_path = files.get_output_path(files.lineup_filename(session.roster_id))

        # Ensure output directory exists
        files.ensure_output_dir()

        df.to_csv(output_path, index=False, encoding='utf-8')

        console.print(f"[green]✅ Lineup exported: {output_path}[/green]")
        console.print(f"[blue]📊 {len(df)} players exported[/blue]")

        return output_path
