"""Scorecard renderers, one per output format."""

from kube_score.renderers.base import BaseRenderer, OutputFormat, RenderContext, Renderer, is_visible
from kube_score.renderers.ci import CIRenderer
from kube_score.renderers.json import JSONRenderer
from kube_score.renderers.terminal import TerminalRenderer

RENDERERS: dict[OutputFormat, type[BaseRenderer]] = {
    OutputFormat.TERMINAL: TerminalRenderer,
    OutputFormat.CI: CIRenderer,
    OutputFormat.JSON: JSONRenderer,
}


def available_formats() -> list[str]:
    """Format names accepted by ``--output-format``."""
    return [f.value for f in RENDERERS]


def get_renderer(format: OutputFormat | str) -> BaseRenderer:
    """Instantiate the renderer for ``format``.

    Raises:
        ValueError: If format is not supported
    """
    try:
        renderer_class = RENDERERS[OutputFormat(format)]
    except (KeyError, ValueError):
        raise ValueError(
            f"Unsupported format: {format} (expected one of {', '.join(available_formats())})"
        ) from None
    return renderer_class()


__all__ = [
    "BaseRenderer",
    "CIRenderer",
    "JSONRenderer",
    "OutputFormat",
    "RENDERERS",
    "RenderContext",
    "Renderer",
    "TerminalRenderer",
    "available_formats",
    "get_renderer",
    "is_visible",
]
