"""Renderer protocol and shared rendering rules."""

from enum import Enum
from pathlib import Path
from typing import Iterator, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from kube_score.models.scorecard import Grade, Outcome, ScoredObject, Scorecard


class OutputFormat(str, Enum):
    """Supported output formats."""

    TERMINAL = "terminal"
    CI = "ci"
    JSON = "json"


class RenderContext(BaseModel):
    """How a scorecard should be presented."""

    model_config = {"frozen": True}

    format: OutputFormat = Field(default=OutputFormat.TERMINAL)
    output_path: Path | None = Field(default=None, description="Write here instead of stdout")
    verbose: bool = Field(default=False, description="Also show passing and skipped checks")
    color: bool = Field(default=True, description="Styled output (terminal only)")
    indent: int = Field(default=2, description="JSON indentation, 0 for one line")


def is_visible(outcome: Outcome, context: RenderContext) -> bool:
    """Whether a human-oriented renderer shows ``outcome``.

    Without verbose output only graded Critical and Warning outcomes are shown.
    """
    if context.verbose:
        return True
    return not outcome.skipped and outcome.grade in (Grade.CRITICAL, Grade.WARNING)


@runtime_checkable
class Renderer(Protocol):
    """Protocol for scorecard renderers.

    Renderers only read the scorecard; grades are never changed.

    Example:
        renderer = get_renderer(OutputFormat.CI)
        if isinstance(renderer, Renderer):
            print(renderer.render(scorecard, RenderContext(format=renderer.format)))
    """

    @property
    def format(self) -> OutputFormat:
        ...

    def render(self, scorecard: Scorecard, context: RenderContext) -> str:
        ...

    def render_to_file(self, scorecard: Scorecard, context: RenderContext) -> None:
        ...


class BaseRenderer:
    """Shared file output and outcome filtering for renderers."""

    def render(self, scorecard: Scorecard, context: RenderContext) -> str:
        raise NotImplementedError

    def render_to_file(self, scorecard: Scorecard, context: RenderContext) -> None:
        """Write the rendered scorecard to ``context.output_path``.

        Raises:
            ValueError: If context.output_path is not set
        """
        if context.output_path is None:
            raise ValueError("output_path must be set in context for file rendering")
        context.output_path.write_text(self.render(scorecard, context), encoding="utf-8")

    def visible_outcomes(
        self, scorecard: Scorecard, context: RenderContext
    ) -> Iterator[tuple[ScoredObject, list[Outcome]]]:
        """Objects that have something to show, with the outcomes to show."""
        for scored in scorecard:
            outcomes = [o for o in scored.checks if is_visible(o, context)]
            if outcomes:
                yield scored, outcomes
