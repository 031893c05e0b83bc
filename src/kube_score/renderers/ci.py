"""Line-oriented renderer for CI logs."""

from __future__ import annotations

from kube_score.models.scorecard import Grade, Outcome, ScoredObject, Scorecard
from kube_score.renderers.base import BaseRenderer, OutputFormat, RenderContext

CI_LABELS = {
    Grade.CRITICAL: "CRITICAL",
    Grade.WARNING: "WARNING",
    Grade.ALL_OK: "OK",
    Grade.SKIPPED: "SKIPPED",
}


class CIRenderer(BaseRenderer):
    """One line per outcome comment, easy to grep in build logs.

    Example output:
        [CRITICAL] web/Deployment/default: Container Security Context: app: Container has no configured security context
        [OK] web/Service/default: Service Targets Pod
    """

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.CI

    def render(self, scorecard: Scorecard, context: RenderContext) -> str:
        lines: list[str] = []
        for scored, outcomes in self.visible_outcomes(scorecard, context):
            for outcome in outcomes:
                lines.extend(self._lines(scored, outcome))
        return "\n".join(lines)

    def _lines(self, scored: ScoredObject, outcome: Outcome) -> list[str]:
        label = "SKIPPED" if outcome.skipped else CI_LABELS[outcome.grade]
        meta = scored.object_meta
        prefix = f"[{label}] {meta.name}/{scored.type_meta.kind}/{meta.namespace}: {outcome.check.name}"

        if not outcome.comments:
            return [prefix]

        lines = []
        for comment in outcome.comments:
            where = f"{comment.path}: " if comment.path else ""
            lines.append(f"{prefix}: {where}{comment.summary}")
        return lines
