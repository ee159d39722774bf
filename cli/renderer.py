"""Match and execution output renderer."""

from typing import List

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from launcher.plugins.types import MatchResult
from launcher.services.search_service import ExecutionOutcome

console = Console(
    legacy_windows=False,
    force_terminal=True,
    force_interactive=False,
    no_color=False,
    tab_size=4
)


class MatchRenderer:
    """Prints ranked matches and execution outcomes."""

    def show_matches(self, query: str, matches: List[MatchResult], selected_index: int = 0):
        """Print the ranked match list.

        Args:
            query: Query the matches belong to
            matches: Ranked matches
            selected_index: Row to highlight
        """
        if not matches:
            console.print(f"[dim]No plugin matches '{escape(query)}'[/dim]\n")
            return

        table = Table(title=f"Matches for '{escape(query)}'")
        table.add_column("#", justify="right")
        table.add_column("Score", justify="right", style="cyan")
        table.add_column("Type")
        table.add_column("Plugin", style="bold")
        table.add_column("Input")
        table.add_column("Preview", style="dim")

        for i, m in enumerate(matches):
            marker = "▶" if i == selected_index else str(i)
            table.add_row(
                marker,
                str(m.score),
                m.match_type.value,
                escape(f"{m.plugin.name} ({m.plugin.id})"),
                escape(m.extracted_input) or "[dim](empty)[/dim]",
                escape(m.plugin.preview(m.extracted_input) or ""),
            )

        console.print(table)
        console.print("[dim]/run to execute the selected match, /next and /prev to move[/dim]\n")

    def show_outcome(self, outcome: ExecutionOutcome, effects: dict):
        if outcome.ok:
            console.print(f"[green]✓ {escape(outcome.plugin_name)} done[/green]")
        else:
            console.print(f"[red]✗ {escape(outcome.plugin_name)} failed: {escape(str(outcome.error))}[/red]")

        for message in effects["notifications"]:
            console.print(f"  [yellow]🔔 {escape(message)}[/yellow]")
        for url in effects["opened_urls"]:
            console.print(f"  [blue]↗ {escape(url)}[/blue]")
        if effects["clipboard"] is not None:
            console.print(f"  [magenta]📋 clipboard: {escape(effects['clipboard'])}[/magenta]")
        if outcome.result.content is not None:
            console.print(f"  {escape(str(outcome.result.content))}")
        console.print()

    def show_error(self, message: str):
        console.print(f"[red]✗ {escape(message)}[/red]\n")
