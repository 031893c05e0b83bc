"""Main CLI entry point for kube-score."""

import typer
from rich.console import Console

from kube_score.cli import list as list_module
from kube_score.cli import score

app = typer.Typer(
    name="kube-score",
    help="Static analysis of Kubernetes object definitions.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register subcommands
app.command(name="score")(score.score_cmd)
app.command(name="list")(list_module.list_cmd)


@app.callback()
def main(
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="Log more (-v info, -vv debug)"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
) -> None:
    """
    kube-score: Static analysis of Kubernetes object definitions.

    - [bold]score[/bold]: Grade manifests against best practices
    - [bold]list[/bold]: Show the check catalogue
    """
    from kube_score.utils.logging import configure_logging, level_for

    configure_logging(level=level_for(verbose, quiet))


@app.command()
def version() -> None:
    """Show the kube-score version."""
    from kube_score import __version__

    console.print(f"kube-score version {__version__}")


if __name__ == "__main__":
    app()
