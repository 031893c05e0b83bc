"""Shared utilities for CLI commands."""

from __future__ import annotations

import typer
from rich.console import Console

from kube_score.models.scorecard import Grade, Scorecard
from kube_score.utils.errors import KubeScoreError

# Shared console instance
console = Console()
err_console = Console(stderr=True)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INPUT_ERROR = 2


def fail(error: KubeScoreError) -> None:
    """Print an input error and exit with the input-error code."""
    err_console.print(f"[red]Error:[/red] {error.message}")
    raise typer.Exit(EXIT_INPUT_ERROR)


def exit_code_for(scorecard: Scorecard, exit_one_on_warning: bool = False) -> int:
    """Process exit code for a finished scorecard.

    Skipped outcomes never fail a run.
    """
    failing = {Grade.CRITICAL}
    if exit_one_on_warning:
        failing.add(Grade.WARNING)

    for outcome in scorecard.outcomes():
        if not outcome.skipped and outcome.grade in failing:
            return EXIT_FAILED
    return EXIT_OK
