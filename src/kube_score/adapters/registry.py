"""Adapter registry keyed by (apiVersion, kind)."""

from __future__ import annotations

from typing import Any, Iterator

from kube_score.adapters.base import Adapter
from kube_score.adapters.documents import (
    CronJobDocument,
    DaemonSetDocument,
    DeploymentDocument,
    Document,
    JobDocument,
    NetworkPolicyDocument,
    PodDisruptionBudgetDocument,
    PodDocument,
    ServiceDocument,
    StatefulSetDocument,
)
from kube_score.models.kube import TypeMeta
from kube_score.models.resources import CanonicalResource


class DocumentAdapter:
    """Adapter that validates a body against a document model."""

    def __init__(self, api_version: str, kind: str, model: type[Document]) -> None:
        self._type_meta = TypeMeta(api_version=api_version, kind=kind)
        self._model = model

    @property
    def api_version(self) -> str:
        return self._type_meta.api_version

    @property
    def kind(self) -> str:
        return self._type_meta.kind

    def decode(self, body: dict[str, Any]) -> CanonicalResource:
        return self._model.model_validate(body).to_resource(self._type_meta)

    def __repr__(self) -> str:
        return f"DocumentAdapter({self.api_version!r}, {self.kind!r}, {self._model.__name__})"


# Every supported schema version. Adding a version means adding a line here.
SUPPORTED_DOCUMENTS: list[tuple[str, str, type[Document]]] = [
    ("v1", "Pod", PodDocument),
    ("v1", "Service", ServiceDocument),
    ("apps/v1", "Deployment", DeploymentDocument),
    ("apps/v1beta1", "Deployment", DeploymentDocument),
    ("apps/v1beta2", "Deployment", DeploymentDocument),
    ("extensions/v1beta1", "Deployment", DeploymentDocument),
    ("apps/v1", "StatefulSet", StatefulSetDocument),
    ("apps/v1beta1", "StatefulSet", StatefulSetDocument),
    ("apps/v1beta2", "StatefulSet", StatefulSetDocument),
    ("apps/v1", "DaemonSet", DaemonSetDocument),
    ("apps/v1beta2", "DaemonSet", DaemonSetDocument),
    ("extensions/v1beta1", "DaemonSet", DaemonSetDocument),
    ("batch/v1", "Job", JobDocument),
    ("batch/v1", "CronJob", CronJobDocument),
    ("batch/v1beta1", "CronJob", CronJobDocument),
    ("batch/v2alpha1", "CronJob", CronJobDocument),
    ("networking.k8s.io/v1", "NetworkPolicy", NetworkPolicyDocument),
    ("extensions/v1beta1", "NetworkPolicy", NetworkPolicyDocument),
    ("policy/v1", "PodDisruptionBudget", PodDisruptionBudgetDocument),
    ("policy/v1beta1", "PodDisruptionBudget", PodDisruptionBudgetDocument),
]


class AdapterRegistry:
    """Registry mapping (apiVersion, kind) to the adapter that decodes it.

    Example:
        registry = AdapterRegistry.with_defaults()
        adapter = registry.get("apps/v1", "Deployment")
        workload = adapter.decode(body)
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._adapters: dict[tuple[str, str], Adapter] = {}

    @classmethod
    def with_defaults(cls) -> "AdapterRegistry":
        """Create a registry holding every supported schema version."""
        registry = cls()
        for api_version, kind, model in SUPPORTED_DOCUMENTS:
            registry.register(DocumentAdapter(api_version, kind, model))
        return registry

    def register(self, adapter: Adapter) -> None:
        """Register an adapter.

        Args:
            adapter: Adapter for one (apiVersion, kind) pair

        Raises:
            ValueError: If the (apiVersion, kind) pair is already registered
        """
        key = (adapter.api_version, adapter.kind)
        if key in self._adapters:
            raise ValueError(f"An adapter for {adapter.api_version}/{adapter.kind} is already registered")
        self._adapters[key] = adapter

    def get(self, api_version: str, kind: str) -> Adapter | None:
        """Find the adapter for a document.

        Args:
            api_version: apiVersion as written in the document
            kind: kind as written in the document

        Returns:
            The adapter or None when the pair is not supported
        """
        return self._adapters.get((api_version, kind))

    def __contains__(self, key: tuple[str, str]) -> bool:
        return key in self._adapters

    def __iter__(self) -> Iterator[Adapter]:
        """Iterate over adapters in registration order."""
        return iter(self._adapters.values())

    def __len__(self) -> int:
        return len(self._adapters)

    def kinds(self) -> list[tuple[str, str]]:
        """All registered (apiVersion, kind) pairs."""
        return list(self._adapters.keys())
