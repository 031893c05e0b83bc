"""PodDisruptionBudget coverage checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kube_score.checks.registry import CheckRegistry
from kube_score.core.selector import selector_matches
from kube_score.models.resources import TargetShape, Workload
from kube_score.models.scorecard import CheckResult, Comment, Grade
from kube_score.utils.config import ScoreConfig

if TYPE_CHECKING:
    from kube_score.core.index import ResourceIndex


def workload_has_disruption_budget(resource: Workload, index: ResourceIndex) -> CheckResult:
    """Critical unless a PodDisruptionBudget in the namespace selects the pod template."""
    labels = resource.get_pod_template().metadata.labels
    for budget in index.disruption_budgets_in(resource.namespace):
        if selector_matches(budget.selector, labels):
            return CheckResult.ok()

    return CheckResult(
        grade=Grade.CRITICAL,
        comments=[
            Comment(
                summary="No matching PodDisruptionBudget was found",
                description=(
                    "It's recommended to define a PodDisruptionBudget to avoid unexpected downtime "
                    "during Kubernetes maintenance operations, such as when draining a node."
                ),
            )
        ],
    )


def register(registry: CheckRegistry, config: ScoreConfig) -> None:
    registry.add(
        "statefulset-has-poddisruptionbudget",
        "StatefulSet has PodDisruptionBudget",
        TargetShape.WORKLOAD,
        workload_has_disruption_budget,
        description="Makes sure that all StatefulSets are targeted by a PDB",
        kinds={"StatefulSet"},
    )
    registry.add(
        "deployment-has-poddisruptionbudget",
        "Deployment has PodDisruptionBudget",
        TargetShape.WORKLOAD,
        workload_has_disruption_budget,
        description="Makes sure that all Deployments are targeted by a PDB",
        kinds={"Deployment"},
    )
