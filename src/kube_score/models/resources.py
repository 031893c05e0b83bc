"""Canonical, version-independent resource records."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, Field

from kube_score.models.kube import (
    LabelSelector,
    ObjectMeta,
    PodSpec,
    PodTemplateSpec,
    TypeMeta,
)

# Names for the two identity halves of every resource.
TypeIdentity = TypeMeta
ObjectIdentity = ObjectMeta


class TargetShape(str, Enum):
    """The resource shape a check is registered against."""

    METADATA = "metadata"
    POD_TEMPLATE = "pod-template"
    SERVICE = "service"
    NETWORK_POLICY = "network-policy"
    WORKLOAD = "workload"


class CanonicalResource(BaseModel):
    """Base of every decoded object: type identity plus object identity."""

    model_config = {"frozen": True}

    shapes: ClassVar[frozenset[TargetShape]] = frozenset({TargetShape.METADATA})

    type_meta: TypeMeta = Field(description="apiVersion and kind as detected")
    metadata: ObjectMeta = Field(default_factory=ObjectMeta, description="Object identity")

    def get_type_identity(self) -> TypeMeta:
        return self.type_meta

    def get_object_identity(self) -> ObjectMeta:
        return self.metadata

    @property
    def kind(self) -> str:
        return self.type_meta.kind

    @property
    def api_version(self) -> str:
        return self.type_meta.api_version

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    def has_shape(self, shape: TargetShape) -> bool:
        return shape in self.shapes


class Pod(CanonicalResource):
    """A bare pod. Scored with the same pod-template checks as workloads."""

    shapes: ClassVar[frozenset[TargetShape]] = frozenset(
        {TargetShape.METADATA, TargetShape.POD_TEMPLATE}
    )

    spec: PodSpec = Field(default_factory=PodSpec)

    def get_pod_template(self) -> PodTemplateSpec:
        return PodTemplateSpec(metadata=self.metadata, spec=self.spec)


class Workload(CanonicalResource):
    """Any resource that owns a pod template.

    Produced by the workload adapters for every supported schema version of
    deployments, stateful sets, daemon sets, jobs and cron jobs.
    """

    shapes: ClassVar[frozenset[TargetShape]] = frozenset(
        {TargetShape.METADATA, TargetShape.POD_TEMPLATE, TargetShape.WORKLOAD}
    )

    template: PodTemplateSpec = Field(description="Pod template owned by the workload")
    replicas: int | None = Field(default=None, description="Desired replicas, if scalable")

    def get_pod_template(self) -> PodTemplateSpec:
        return self.template


class ServiceResource(CanonicalResource):
    shapes: ClassVar[frozenset[TargetShape]] = frozenset(
        {TargetShape.METADATA, TargetShape.SERVICE}
    )

    service_type: str = Field(default="ClusterIP", description="Service type")
    selector: dict[str, str] = Field(default_factory=dict, description="Pod selector")
    external_name: str | None = Field(default=None)

    @property
    def is_external_name(self) -> bool:
        """Alias-only services never route to pods."""
        return self.service_type == "ExternalName"


class NetworkPolicyResource(CanonicalResource):
    shapes: ClassVar[frozenset[TargetShape]] = frozenset(
        {TargetShape.METADATA, TargetShape.NETWORK_POLICY}
    )

    pod_selector: LabelSelector = Field(default_factory=LabelSelector)
    policy_types: frozenset[str] = Field(default_factory=frozenset)


class DisruptionBudgetResource(CanonicalResource):
    selector: LabelSelector | None = Field(default=None)
