"""CLI command for scoring manifests."""

from pathlib import Path
from typing import List, Optional

import typer

from kube_score.cli.utils import EXIT_INPUT_ERROR, console, exit_code_for, fail
from kube_score.utils.errors import KubeScoreError


def score_cmd(
    files: List[str] = typer.Argument(
        ...,
        help="Manifest files to score, '-' reads from stdin",
    ),
    ignore_namespace: Optional[List[str]] = typer.Option(
        None,
        "--ignore-namespace",
        help="Namespace whose resources are not graded (repeatable)",
    ),
    ignore_test: Optional[List[str]] = typer.Option(
        None,
        "--ignore-test",
        help="Check id to skip (repeatable)",
    ),
    enable_optional_test: Optional[List[str]] = typer.Option(
        None,
        "--enable-optional-test",
        help="Optional check id to enable (repeatable)",
    ),
    ignore_container_cpu_limit: Optional[bool] = typer.Option(
        None,
        "--ignore-container-cpu-limit",
        help="Do not require containers to set a CPU limit",
    ),
    ignore_container_memory_limit: Optional[bool] = typer.Option(
        None,
        "--ignore-container-memory-limit",
        help="Do not require containers to set a memory limit",
    ),
    output_format: str = typer.Option(
        "terminal",
        "--output-format",
        "-f",
        help="Output format (terminal, ci, json)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path",
    ),
    show_all: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Also show passing and skipped checks",
    ),
    exit_one_on_warning: bool = typer.Option(
        False,
        "--exit-one-on-warning",
        help="Exit with code 1 on warnings as well as critical findings",
    ),
    skip_invalid: bool = typer.Option(
        False,
        "--skip-invalid",
        help="Skip documents that cannot be decoded instead of failing",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        min=1,
        help="Number of parallel scoring workers",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a kube-score config file",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Report unrecognized documents (repeat for more detail)",
    ),
) -> None:
    """
    Score Kubernetes manifests against best practices.

    Every supported object is graded by every applicable check.
    The exit code is 1 when any check is critical.

    Example:
        kube-score score deployment.yaml service.yaml
    """
    from kube_score.core import load_files, score
    from kube_score.renderers import OutputFormat, RenderContext, available_formats, get_renderer
    from kube_score.utils.config import load_config
    from kube_score.utils.logging import ROOT_LOGGER, get_logger, level_for

    if verbose:
        root = get_logger(ROOT_LOGGER)
        root.setLevel(min(root.getEffectiveLevel(), level_for(verbose)))

    try:
        format = OutputFormat(output_format)
    except ValueError:
        console.print(
            f"[red]Error:[/red] Invalid output format: {output_format} "
            f"(expected one of {', '.join(available_formats())})"
        )
        raise typer.Exit(EXIT_INPUT_ERROR)

    try:
        config = load_config(config_file).merged(
            ignored_namespaces=ignore_namespace,
            ignored_tests=ignore_test,
            enabled_optional_tests=enable_optional_test,
            ignore_container_cpu_limit=ignore_container_cpu_limit,
            ignore_container_memory_limit=ignore_container_memory_limit,
            workers=workers,
            verbose=verbose or None,
        )
        documents = load_files(files)
        scorecard = score(documents, config=config, abort_on_decode_error=not skip_invalid)
    except KubeScoreError as e:
        fail(e)

    renderer = get_renderer(format)
    context = RenderContext(format=format, output_path=output, verbose=show_all)

    if output:
        renderer.render_to_file(scorecard, context)
        console.print(f"Report written to {output}")
    else:
        rendered = renderer.render(scorecard, context)
        if rendered:
            typer.echo(rendered)

    raise typer.Exit(exit_code_for(scorecard, exit_one_on_warning))
