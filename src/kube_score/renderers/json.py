"""JSON renderer for scorecards."""

from __future__ import annotations

import json

from kube_score.models.scorecard import Scorecard
from kube_score.renderers.base import BaseRenderer, OutputFormat, RenderContext


class JSONRenderer(BaseRenderer):
    """Renders the full scorecard, skipped outcomes included.

    Example:
        renderer = JSONRenderer()
        json_str = renderer.render(scorecard, RenderContext(format=OutputFormat.JSON))
    """

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.JSON

    def render(self, scorecard: Scorecard, context: RenderContext) -> str:
        return json.dumps(
            scorecard.to_dict(),
            indent=context.indent if context.indent else None,
            ensure_ascii=False,
        )
