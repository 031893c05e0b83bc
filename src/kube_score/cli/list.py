"""CLI command for listing the check catalogue."""

import typer
from rich.table import Table

from kube_score.cli.utils import console


def list_cmd(
    format: str = typer.Option(
        "terminal",
        "--format",
        "-f",
        help="Output format (terminal, json)",
    ),
) -> None:
    """
    List all built-in checks.

    Optional checks only run when enabled with --enable-optional-test.
    """
    from kube_score.checks import register_default_checks

    registry = register_default_checks()

    if format == "json":
        import json

        data = [check.model_dump(mode="json") for check in registry]
        typer.echo(json.dumps(data, indent=2))
        return

    table = Table(title="Checks")
    table.add_column("ID", style="bold", no_wrap=True)
    table.add_column("Name")
    table.add_column("Target")
    table.add_column("Optional")
    table.add_column("Description", max_width=60)

    for check in registry:
        target = check.target.value
        if check.kinds:
            target += f" ({', '.join(sorted(check.kinds))})"
        table.add_row(
            check.id,
            check.name,
            target,
            "yes" if check.optional else "",
            check.description or "-",
        )

    console.print(table)
