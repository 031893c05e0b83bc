"""NetworkPolicy coverage checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kube_score.adapters.base import PodSpecer
from kube_score.checks.registry import CheckRegistry
from kube_score.core.selector import selector_matches
from kube_score.models.resources import NetworkPolicyResource, TargetShape
from kube_score.models.scorecard import CheckResult, Comment, Grade
from kube_score.utils.config import ScoreConfig

if TYPE_CHECKING:
    from kube_score.core.index import ResourceIndex

INGRESS = "Ingress"
EGRESS = "Egress"


def pod_has_network_policy(resource: PodSpecer, index: ResourceIndex) -> CheckResult:
    """Some NetworkPolicy in the namespace must select the pod, in both directions."""
    labels = resource.get_pod_template().metadata.labels

    has_ingress = False
    has_egress = False
    for policy in index.network_policies_in(resource.get_object_identity().namespace):
        if not selector_matches(policy.pod_selector, labels):
            continue
        has_ingress = has_ingress or INGRESS in policy.policy_types
        has_egress = has_egress or EGRESS in policy.policy_types

    if has_ingress and has_egress:
        return CheckResult.ok()

    if has_egress:
        return CheckResult(
            grade=Grade.WARNING,
            comments=[
                Comment(
                    summary="The pod does not have a matching ingress network policy",
                    description="Add an ingress policy to the pods NetworkPolicy",
                )
            ],
        )

    if has_ingress:
        return CheckResult(
            grade=Grade.WARNING,
            comments=[
                Comment(
                    summary="The pod does not have a matching egress network policy",
                    description="Add an egress policy to the pods NetworkPolicy",
                )
            ],
        )

    return CheckResult(
        grade=Grade.CRITICAL,
        comments=[
            Comment(
                summary="The pod does not have a matching network policy",
                description="Create a NetworkPolicy that targets this pod",
            )
        ],
    )


def network_policy_targets_pod(resource: NetworkPolicyResource, index: ResourceIndex) -> CheckResult:
    """A NetworkPolicy that selects nothing in its namespace is a mistake."""
    for candidate in index.pod_specers(resource.namespace):
        if selector_matches(resource.pod_selector, candidate.get_pod_template().metadata.labels):
            return CheckResult.ok()

    return CheckResult(
        grade=Grade.CRITICAL,
        comments=[Comment(summary="The NetworkPolicys selector doesn't match any pods")],
    )


def register_pod_checks(registry: CheckRegistry, config: ScoreConfig) -> None:
    registry.add(
        "pod-networkpolicy",
        "Pod NetworkPolicy",
        TargetShape.POD_TEMPLATE,
        pod_has_network_policy,
        description="Makes sure that all Pods are targeted by a NetworkPolicy",
    )


def register_policy_checks(registry: CheckRegistry, config: ScoreConfig) -> None:
    registry.add(
        "networkpolicy-targets-pod",
        "NetworkPolicy targets Pod",
        TargetShape.NETWORK_POLICY,
        network_policy_targets_pod,
        description="Makes sure that all NetworkPolicies targets at least one Pod",
    )
