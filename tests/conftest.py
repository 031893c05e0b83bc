"""Shared test fixtures for kube-score tests."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest

from kube_score.core.index import ResourceIndex
from kube_score.adapters.normalizer import Normalizer
from kube_score.utils.config import ScoreConfig


def good_container(name: str = "app", **overrides: Any) -> dict[str, Any]:
    """A container body that passes every container check."""
    container: dict[str, Any] = {
        "name": name,
        "image": "registry.example.com/app:1.2.3",
        "imagePullPolicy": "Always",
        "resources": {
            "requests": {"cpu": "100m", "memory": "128Mi"},
            "limits": {"cpu": "100m", "memory": "128Mi"},
        },
        "securityContext": {
            "privileged": False,
            "readOnlyRootFilesystem": True,
            "runAsUser": 20000,
            "runAsGroup": 20000,
            "runAsNonRoot": True,
        },
        "readinessProbe": {"httpGet": {"path": "/ready", "port": 8080}},
        "livenessProbe": {"httpGet": {"path": "/healthz", "port": 8080}},
    }
    container.update(overrides)
    return container


class Manifests:
    """Builders for manifest bodies as they come out of a YAML file."""

    @staticmethod
    def container(name: str = "app", **overrides: Any) -> dict[str, Any]:
        return good_container(name, **overrides)

    @staticmethod
    def pod_spec(containers: list[dict[str, Any]] | None = None, **extra: Any) -> dict[str, Any]:
        spec: dict[str, Any] = {"containers": containers if containers is not None else [good_container()]}
        spec.update(extra)
        return spec

    @staticmethod
    def pod(
        name: str = "web",
        namespace: str | None = None,
        labels: dict[str, str] | None = None,
        annotations: dict[str, str] | None = None,
        containers: list[dict[str, Any]] | None = None,
        api_version: str = "v1",
        **spec_extra: Any,
    ) -> dict[str, Any]:
        metadata: dict[str, Any] = {"name": name, "labels": labels or {"app": name}}
        if namespace is not None:
            metadata["namespace"] = namespace
        if annotations:
            metadata["annotations"] = annotations
        return {
            "apiVersion": api_version,
            "kind": "Pod",
            "metadata": metadata,
            "spec": Manifests.pod_spec(containers, **spec_extra),
        }

    @staticmethod
    def workload(
        kind: str = "Deployment",
        name: str = "web",
        namespace: str | None = None,
        labels: dict[str, str] | None = None,
        annotations: dict[str, str] | None = None,
        template_annotations: dict[str, str] | None = None,
        containers: list[dict[str, Any]] | None = None,
        api_version: str = "apps/v1",
        replicas: int | None = 2,
        **spec_extra: Any,
    ) -> dict[str, Any]:
        labels = labels or {"app": name}
        metadata: dict[str, Any] = {"name": name}
        if namespace is not None:
            metadata["namespace"] = namespace
        if annotations:
            metadata["annotations"] = annotations

        template_meta: dict[str, Any] = {"labels": dict(labels)}
        if template_annotations:
            template_meta["annotations"] = template_annotations
        template = {"metadata": template_meta, "spec": Manifests.pod_spec(containers, **spec_extra)}

        if kind == "CronJob":
            spec: dict[str, Any] = {
                "schedule": "*/5 * * * *",
                "jobTemplate": {"spec": {"template": template}},
            }
        elif kind == "Job":
            spec = {"template": template}
        else:
            spec = {"selector": {"matchLabels": dict(labels)}, "template": template}
            if replicas is not None and kind != "DaemonSet":
                spec["replicas"] = replicas

        return {"apiVersion": api_version, "kind": kind, "metadata": metadata, "spec": spec}

    @staticmethod
    def service(
        name: str = "web",
        namespace: str | None = None,
        selector: dict[str, str] | None = None,
        type: str = "ClusterIP",
        external_name: str | None = None,
        annotations: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        metadata: dict[str, Any] = {"name": name}
        if namespace is not None:
            metadata["namespace"] = namespace
        if annotations:
            metadata["annotations"] = annotations
        spec: dict[str, Any] = {"type": type}
        if selector is not None:
            spec["selector"] = selector
        if external_name is not None:
            spec["externalName"] = external_name
        return {"apiVersion": "v1", "kind": "Service", "metadata": metadata, "spec": spec}

    @staticmethod
    def network_policy(
        name: str = "web",
        namespace: str | None = None,
        pod_selector: dict[str, Any] | None = None,
        policy_types: list[str] | None = None,
        api_version: str = "networking.k8s.io/v1",
        **spec_extra: Any,
    ) -> dict[str, Any]:
        metadata: dict[str, Any] = {"name": name}
        if namespace is not None:
            metadata["namespace"] = namespace
        spec: dict[str, Any] = {
            "podSelector": pod_selector if pod_selector is not None else {"matchLabels": {"app": "web"}},
        }
        if policy_types is not None:
            spec["policyTypes"] = policy_types
        spec.update(spec_extra)
        return {"apiVersion": api_version, "kind": "NetworkPolicy", "metadata": metadata, "spec": spec}

    @staticmethod
    def disruption_budget(
        name: str = "web",
        namespace: str | None = None,
        selector: dict[str, Any] | None = None,
        api_version: str = "policy/v1",
    ) -> dict[str, Any]:
        metadata: dict[str, Any] = {"name": name}
        if namespace is not None:
            metadata["namespace"] = namespace
        spec: dict[str, Any] = {"minAvailable": 1}
        if selector is not None:
            spec["selector"] = selector
        return {"apiVersion": api_version, "kind": "PodDisruptionBudget", "metadata": metadata, "spec": spec}


@pytest.fixture
def manifests() -> type[Manifests]:
    """Manifest body builders."""
    return Manifests


@pytest.fixture
def documents():
    """Turn manifest bodies into (apiVersion, kind, body) triples."""

    def _documents(*bodies: dict[str, Any]) -> list[tuple[str, str, dict[str, Any]]]:
        return [(b["apiVersion"], b["kind"], copy.deepcopy(b)) for b in bodies]

    return _documents


@pytest.fixture
def build_index():
    """Decode manifest bodies and index them."""

    def _build(*bodies: dict[str, Any]) -> ResourceIndex:
        normalizer = Normalizer()
        resources = [normalizer.decode(b["apiVersion"], b["kind"], b) for b in bodies]
        return ResourceIndex.build(r for r in resources if r is not None)

    return _build


@pytest.fixture
def decode():
    """Decode a single manifest body."""
    normalizer = Normalizer()

    def _decode(body: dict[str, Any]):
        return normalizer.decode(body["apiVersion"], body["kind"], body)

    return _decode


@pytest.fixture
def default_config() -> ScoreConfig:
    """Configuration with every default."""
    return ScoreConfig()


@pytest.fixture
def testdata():
    """Directory of example manifests."""
    return Path(__file__).parent / "testdata"
