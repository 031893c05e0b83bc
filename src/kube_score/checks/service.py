"""Service checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kube_score.checks.registry import CheckRegistry
from kube_score.core.selector import set_selector_matches
from kube_score.models.resources import ServiceResource, TargetShape
from kube_score.models.scorecard import CheckResult, Comment, Grade
from kube_score.utils.config import ScoreConfig

if TYPE_CHECKING:
    from kube_score.core.index import ResourceIndex


def service_targets_pod(resource: ServiceResource, index: ResourceIndex) -> CheckResult:
    """The service selector must match at least one pod in the namespace.

    ExternalName services are aliases and never select pods.
    """
    if resource.is_external_name:
        return CheckResult.ok()

    for candidate in index.pod_specers(resource.namespace):
        if set_selector_matches(resource.selector, candidate.get_pod_template().metadata.labels):
            return CheckResult.ok()

    return CheckResult(
        grade=Grade.CRITICAL,
        comments=[Comment(summary="The services selector does not match any pods")],
    )


def register(registry: CheckRegistry, config: ScoreConfig) -> None:
    registry.add(
        "service-targets-pod",
        "Service Targets Pod",
        TargetShape.SERVICE,
        service_targets_pod,
        description="Makes sure that all Services targets a Pod",
    )
