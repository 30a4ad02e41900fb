"""
Context Keeper - CLI Inspector
Rich terminal rendering of context analysis for a conversation turn
"""

from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from context.analysis import ContextAnalysis
from context.models import TopicTransition
from core.temporal import format_fuzzy_relative_time


TRANSITION_STYLES = {
    TopicTransition.NEW_CONVERSATION: "blue",
    TopicTransition.CONTINUATION: "green",
    TopicTransition.RELATED: "yellow",
    TopicTransition.NEW_TOPIC: "red",
}

CATEGORY_STYLES = {
    "Bridge": "yellow",
    "Recent": "green",
    "Early": "blue",
    "Topic": "magenta",
    "History": "white",
}


class ContextInspector:
    """
    Renders a ContextAnalysis to the terminal.

    Sections:
    - Query analysis (transition, original vs enhanced query)
    - Window summary (per-tier counts)
    - Context messages (one row per window entry)
    - Conversation summary, when one was produced
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, analysis: ContextAnalysis) -> None:
        """Print every section of the analysis."""
        self.render_query_analysis(analysis)
        self.render_window_summary(analysis)
        self.render_messages(analysis)
        if analysis.summary:
            self.render_summary(analysis)

    def render_query_analysis(self, analysis: ContextAnalysis) -> None:
        style = TRANSITION_STYLES[analysis.transition]
        lines = [f"[bold]Topic Transition:[/bold] [{style}]{analysis.transition_label}[/{style}]"]

        if analysis.was_enhanced:
            lines.append(f"[bold]Original Query:[/bold] {escape(analysis.original_query)}")
            lines.append(f"[bold]Enhanced Query:[/bold] {escape(analysis.enhanced_query)}")
        else:
            lines.append(f"[bold]Query:[/bold] {escape(analysis.original_query)} [dim](unchanged)[/dim]")

        panel = Panel(
            "\n".join(lines),
            title=f"[bold {style}]Query Analysis[/bold {style}]",
            title_align="left",
            border_style=style,
            padding=(0, 1)
        )
        self.console.print(panel)

    def render_window_summary(self, analysis: ContextAnalysis) -> None:
        table = Table(title="Context Window Summary", show_header=True)
        table.add_column("Metric", style="cyan")
        table.add_column("Value")

        table.add_row("Total Messages in Context", f"{analysis.window_size}/{analysis.history_size}")
        for category, count in analysis.tier_counts.items():
            table.add_row(f"{category} Messages", str(count))

        self.console.print(table)

    def render_messages(self, analysis: ContextAnalysis) -> None:
        if not analysis.entries:
            self.console.print("[dim]Context window is empty[/dim]")
            return

        table = Table(title="Context Messages", show_header=True)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Source", justify="right", style="dim")
        table.add_column("Tier")
        table.add_column("Role")
        table.add_column("Age", style="dim")
        table.add_column("Content")

        now = datetime.now()
        for entry in analysis.entries:
            style = CATEGORY_STYLES.get(entry.category, "white")
            source = "-" if entry.source_index is None else str(entry.source_index)
            role = f"{entry.role_label} 🖼" if entry.has_images else entry.role_label
            table.add_row(
                str(entry.position),
                source,
                f"[{style}]{entry.category}[/{style}]",
                role,
                format_fuzzy_relative_time(entry.timestamp, now=now),
                escape(entry.preview),
            )

        self.console.print(table)

    def render_summary(self, analysis: ContextAnalysis) -> None:
        panel = Panel(
            escape(analysis.summary),
            title="[bold magenta]Conversation Summary[/bold magenta]",
            title_align="left",
            border_style="magenta",
            padding=(0, 1)
        )
        self.console.print(panel)
