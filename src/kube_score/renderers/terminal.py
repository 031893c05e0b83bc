"""Terminal renderer for scorecards."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from kube_score.models.scorecard import Grade, Outcome, ScoredObject, Scorecard
from kube_score.renderers.base import BaseRenderer, OutputFormat, RenderContext

GRADE_STYLES = {
    Grade.CRITICAL: "bold red",
    Grade.WARNING: "yellow",
    Grade.ALL_OK: "green",
    Grade.SKIPPED: "dim",
}

GRADE_LABELS = {
    Grade.CRITICAL: "CRITICAL",
    Grade.WARNING: "WARNING",
    Grade.ALL_OK: "OK",
    Grade.SKIPPED: "SKIPPED",
}


class TerminalRenderer(BaseRenderer):
    """Renderer for rich terminal output.

    Prints one panel per scored object. Passing and skipped outcomes are only
    shown in verbose mode.

    Note: render() prints to the console and returns an empty string. Use
    render_to_file() or Console.capture() to collect the output.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.TERMINAL

    def render(self, scorecard: Scorecard, context: RenderContext) -> str:
        for scored, outcomes in self.visible_outcomes(scorecard, context):
            self._render_object(scored, outcomes)

        self._render_summary(scorecard)
        return ""

    def render_to_file(self, scorecard: Scorecard, context: RenderContext) -> None:
        if context.output_path is None:
            raise ValueError("output_path must be set in context for file rendering")

        file_console = Console(record=True, force_terminal=context.color, width=120)
        original_console = self._console
        self._console = file_console

        try:
            self.render(scorecard, context)
            context.output_path.write_text(file_console.export_text(styles=context.color))
        finally:
            self._console = original_console

    def _render_object(self, scored: ScoredObject, outcomes: list[Outcome]) -> None:
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column("Grade", no_wrap=True)
        table.add_column("Check")

        for outcome in outcomes:
            style = GRADE_STYLES[outcome.grade]
            label = GRADE_LABELS[outcome.grade]
            if outcome.skipped and outcome.grade != Grade.SKIPPED:
                label = f"{label} (skipped)"
            table.add_row(f"[{style}]{label}[/{style}]", f"[bold]{outcome.check.name}[/bold]")

            for comment in outcome.comments:
                prefix = f"{comment.path}: " if comment.path else ""
                text = f"  {prefix}{comment.summary}"
                if comment.description:
                    text += f"\n      [dim]{comment.description}[/dim]"
                table.add_row("", text)

        self._console.print(Panel(table, title=scored.human_name, title_align="left"))

    def _render_summary(self, scorecard: Scorecard) -> None:
        counts = {grade: 0 for grade in Grade}
        skipped = 0
        for outcome in scorecard.outcomes():
            if outcome.skipped:
                skipped += 1
            else:
                counts[outcome.grade] += 1

        table = Table(title="Summary", show_header=False)
        table.add_column("Metric", style="bold")
        table.add_column("Count")
        table.add_row("Objects", str(len(scorecard)))
        table.add_row("Critical", f"[red]{counts[Grade.CRITICAL]}[/red]")
        table.add_row("Warning", f"[yellow]{counts[Grade.WARNING]}[/yellow]")
        table.add_row("OK", f"[green]{counts[Grade.ALL_OK]}[/green]")
        table.add_row("Skipped", str(skipped))
        self._console.print(table)
