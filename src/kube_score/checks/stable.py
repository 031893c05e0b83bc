"""Checks that manifests use stable API versions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kube_score.checks.registry import CheckRegistry
from kube_score.models.resources import CanonicalResource, TargetShape
from kube_score.models.scorecard import CheckResult, Comment, Grade
from kube_score.utils.config import ScoreConfig

if TYPE_CHECKING:
    from kube_score.core.index import ResourceIndex

# (apiVersion, kind) -> (replacement apiVersion, Kubernetes release it is available since)
DEPRECATED_VERSIONS: dict[tuple[str, str], tuple[str, str]] = {
    ("extensions/v1beta1", "Deployment"): ("apps/v1", "1.9"),
    ("apps/v1beta1", "Deployment"): ("apps/v1", "1.9"),
    ("apps/v1beta2", "Deployment"): ("apps/v1", "1.9"),
    ("apps/v1beta1", "StatefulSet"): ("apps/v1", "1.9"),
    ("apps/v1beta2", "StatefulSet"): ("apps/v1", "1.9"),
    ("extensions/v1beta1", "DaemonSet"): ("apps/v1", "1.9"),
    ("apps/v1beta2", "DaemonSet"): ("apps/v1", "1.9"),
    ("extensions/v1beta1", "NetworkPolicy"): ("networking.k8s.io/v1", "1.8"),
    ("batch/v2alpha1", "CronJob"): ("batch/v1", "1.21"),
    ("batch/v1beta1", "CronJob"): ("batch/v1", "1.21"),
    ("policy/v1beta1", "PodDisruptionBudget"): ("policy/v1", "1.21"),
}


def meta_stable_available(resource: CanonicalResource, index: ResourceIndex) -> CheckResult:
    """Warning when the apiVersion is deprecated in favour of a stable one."""
    replacement = DEPRECATED_VERSIONS.get((resource.api_version, resource.kind))
    if replacement is None:
        return CheckResult.ok()

    api_version, since = replacement
    return CheckResult(
        grade=Grade.WARNING,
        comments=[
            Comment(
                summary=f"The apiVersion and kind {resource.api_version}/{resource.kind} is deprecated",
                description=(
                    f"It's recommended to use {api_version}/{resource.kind} instead "
                    f"which has been available since Kubernetes v{since}"
                ),
            )
        ],
    )


def register(registry: CheckRegistry, config: ScoreConfig) -> None:
    registry.add(
        "stable-version",
        "Stable version",
        TargetShape.METADATA,
        meta_stable_available,
        description="Checks if the object is using a deprecated apiVersion",
    )
