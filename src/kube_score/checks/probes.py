"""Readiness and liveness probe checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kube_score.adapters.base import PodSpecer
from kube_score.checks.registry import CheckRegistry
from kube_score.core.selector import set_selector_matches
from kube_score.models.resources import TargetShape
from kube_score.models.scorecard import CheckResult, Comment, Grade
from kube_score.utils.config import ScoreConfig

if TYPE_CHECKING:
    from kube_score.core.index import ResourceIndex


def _targeted_by_service(resource: PodSpecer, index: ResourceIndex) -> bool:
    namespace = resource.get_object_identity().namespace
    labels = resource.get_pod_template().metadata.labels
    return any(
        not service.is_external_name and set_selector_matches(service.selector, labels)
        for service in index.services_in(namespace)
    )


def pod_probes(resource: PodSpecer, index: ResourceIndex) -> CheckResult:
    """Pods behind a service need distinct readiness and liveness probes.

    Init containers are not probed.
    """
    if not _targeted_by_service(resource, index):
        return CheckResult.ok(
            [Comment(summary="The pod is not targeted by a service, skipping probe checks.")]
        )

    critical: list[Comment] = []
    warnings: list[Comment] = []

    for container in resource.get_pod_template().spec.containers:
        readiness = container.readiness_probe
        liveness = container.liveness_probe

        if readiness is None:
            critical.append(
                Comment(
                    path=container.name,
                    summary="Container is missing a readinessProbe",
                    description=(
                        "A readinessProbe should be used to indicate when the service is ready to "
                        "receive traffic. Without it, the Pod is risking to receive traffic before it "
                        "has booted. It is also used during rollouts, and can prevent downtime if a new "
                        "version of the application is failing."
                    ),
                )
            )

        if liveness is None:
            warnings.append(
                Comment(
                    path=container.name,
                    summary="Container is missing a livenessProbe",
                    description=(
                        "A livenessProbe can be used to restart the container if it's deadlocked or "
                        "has crashed without exiting. It's only recommended to setup a livenessProbe "
                        "if you really need one."
                    ),
                )
            )

        if readiness is not None and readiness == liveness:
            critical.append(
                Comment(
                    path=container.name,
                    summary="Container has the same readiness and liveness probe",
                    description=(
                        "Using the same probe for liveness and readiness is very likely dangerous. "
                        "Generally it's better to use a livenessProbe that is less strict than the "
                        "readinessProbe."
                    ),
                )
            )

    if critical:
        return CheckResult(grade=Grade.CRITICAL, comments=critical + warnings)
    return CheckResult.worst_of(warnings, Grade.WARNING)


def register(registry: CheckRegistry, config: ScoreConfig) -> None:
    registry.add(
        "pod-probes",
        "Pod Probes",
        TargetShape.POD_TEMPLATE,
        pod_probes,
        description="Makes sure that all Pods have safe probe configurations",
    )
