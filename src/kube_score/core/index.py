"""Resource Index: decoded resources partitioned by canonical kind."""

from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel, Field

from kube_score.models.resources import (
    CanonicalResource,
    DisruptionBudgetResource,
    NetworkPolicyResource,
    Pod,
    ServiceResource,
    Workload,
)


class ResourceIndex(BaseModel):
    """Immutable snapshot of one run's resources.

    Built once from the complete decoded set before any check runs; every
    collection keeps decode order.

    ``metadata_only`` holds resources decoded to a bare CanonicalResource.
    The built-in adapters never produce one, but an adapter registered for a
    kind with no pod template, selector or service type (a ConfigMap, say)
    lands there and is still graded by metadata checks.

    Example:
        index = ResourceIndex.build(resources)
        for policy in index.network_policies_in("default"):
            ...
    """

    model_config = {"frozen": True}

    resources: tuple[CanonicalResource, ...] = Field(default=(), description="Every resource, in decode order")
    pods: tuple[Pod, ...] = Field(default=())
    workloads: tuple[Workload, ...] = Field(default=())
    services: tuple[ServiceResource, ...] = Field(default=())
    network_policies: tuple[NetworkPolicyResource, ...] = Field(default=())
    disruption_budgets: tuple[DisruptionBudgetResource, ...] = Field(default=())
    metadata_only: tuple[CanonicalResource, ...] = Field(
        default=(),
        description="Resources with no richer shape than their identity",
    )

    @classmethod
    def build(cls, resources: Iterable[CanonicalResource]) -> "ResourceIndex":
        """Partition a complete decoded set.

        Args:
            resources: Every decoded resource of the run, in decode order

        Returns:
            The frozen index
        """
        ordered = tuple(resources)
        return cls(
            resources=ordered,
            pods=tuple(r for r in ordered if isinstance(r, Pod)),
            workloads=tuple(r for r in ordered if isinstance(r, Workload)),
            services=tuple(r for r in ordered if isinstance(r, ServiceResource)),
            network_policies=tuple(r for r in ordered if isinstance(r, NetworkPolicyResource)),
            disruption_budgets=tuple(r for r in ordered if isinstance(r, DisruptionBudgetResource)),
            metadata_only=tuple(r for r in ordered if type(r) is CanonicalResource),
        )

    def __len__(self) -> int:
        return len(self.resources)

    def pod_specers(self, namespace: str | None = None) -> list[Pod | Workload]:
        """Pods followed by workloads.

        Args:
            namespace: Only return resources in this namespace (all when None)

        Returns:
            Everything that carries a pod template
        """
        found: list[Pod | Workload] = [*self.pods, *self.workloads]
        if namespace is None:
            return found
        return [r for r in found if r.namespace == namespace]

    def services_in(self, namespace: str) -> list[ServiceResource]:
        """Services of one namespace, in decode order.

        Args:
            namespace: Namespace to look in

        Returns:
            Matching services
        """
        return [s for s in self.services if s.namespace == namespace]

    def network_policies_in(self, namespace: str) -> list[NetworkPolicyResource]:
        """NetworkPolicies of one namespace, in decode order.

        Args:
            namespace: Namespace to look in

        Returns:
            Matching network policies
        """
        return [n for n in self.network_policies if n.namespace == namespace]

    def disruption_budgets_in(self, namespace: str) -> list[DisruptionBudgetResource]:
        """PodDisruptionBudgets of one namespace, in decode order.

        Args:
            namespace: Namespace to look in

        Returns:
            Matching disruption budgets
        """
        return [b for b in self.disruption_budgets if b.namespace == namespace]
