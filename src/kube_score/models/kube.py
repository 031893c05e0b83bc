"""Kubernetes object fragments read from manifests.

Only the fields that checks inspect are modelled. Wire names are camelCase,
unknown fields are ignored and explicit nulls fall back to field defaults.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

DEFAULT_NAMESPACE = "default"


def _quantity_to_str(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


Quantity = Annotated[str, BeforeValidator(_quantity_to_str)]


class KubeModel(BaseModel):
    """Base for all manifest fragments."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        """Treat an explicit null like an omitted field, so its default applies."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class TypeMeta(KubeModel):
    """apiVersion and kind of a document."""

    api_version: str = Field(default="", description="API group and version")
    kind: str = Field(default="", description="Object kind")


class ObjectMeta(KubeModel):
    """Identity metadata of an object."""

    name: str = Field(default="", description="Object name")
    namespace: str = Field(default=DEFAULT_NAMESPACE, description="Object namespace")
    labels: dict[str, str] = Field(default_factory=dict, description="Object labels")
    annotations: dict[str, str] = Field(default_factory=dict, description="Object annotations")

    @field_validator("namespace", mode="before")
    @classmethod
    def _default_namespace(cls, value: Any) -> Any:
        return value or DEFAULT_NAMESPACE


class LabelSelectorRequirement(KubeModel):
    key: str
    operator: str
    values: list[str] = Field(default_factory=list)


class LabelSelector(KubeModel):
    """A set-based label selector."""

    match_labels: dict[str, str] = Field(default_factory=dict)
    match_expressions: list[LabelSelectorRequirement] = Field(default_factory=list)


class SecurityContext(KubeModel):
    """Container-level security context."""

    privileged: bool | None = None
    read_only_root_filesystem: bool | None = None
    run_as_user: int | None = None
    run_as_group: int | None = None
    run_as_non_root: bool | None = None
    allow_privilege_escalation: bool | None = None


class PodSecurityContext(KubeModel):
    """Pod-level security context, inherited by containers."""

    run_as_user: int | None = None
    run_as_group: int | None = None
    run_as_non_root: bool | None = None
    fs_group: int | None = None


class ResourceRequirements(KubeModel):
    limits: dict[str, Quantity] = Field(default_factory=dict)
    requests: dict[str, Quantity] = Field(default_factory=dict)


class Probe(KubeModel):
    http_get: dict[str, Any] | None = None
    tcp_socket: dict[str, Any] | None = None
    exec_action: dict[str, Any] | None = Field(default=None, alias="exec")
    initial_delay_seconds: int | None = None
    timeout_seconds: int | None = None
    period_seconds: int | None = None
    success_threshold: int | None = None
    failure_threshold: int | None = None


class Container(KubeModel):
    name: str = ""
    image: str = ""
    image_pull_policy: str | None = None
    resources: ResourceRequirements = Field(default_factory=ResourceRequirements)
    security_context: SecurityContext | None = None
    readiness_probe: Probe | None = None
    liveness_probe: Probe | None = None


class PodSpec(KubeModel):
    containers: list[Container] = Field(default_factory=list)
    init_containers: list[Container] = Field(default_factory=list)
    security_context: PodSecurityContext | None = None

    @property
    def all_containers(self) -> list[Container]:
        """Init containers followed by regular containers."""
        return [*self.init_containers, *self.containers]


class PodTemplateSpec(KubeModel):
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: PodSpec = Field(default_factory=PodSpec)


class DeploymentSpec(KubeModel):
    replicas: int | None = None
    selector: LabelSelector | None = None
    template: PodTemplateSpec = Field(default_factory=PodTemplateSpec)


class StatefulSetSpec(KubeModel):
    replicas: int | None = None
    service_name: str | None = None
    selector: LabelSelector | None = None
    template: PodTemplateSpec = Field(default_factory=PodTemplateSpec)


class DaemonSetSpec(KubeModel):
    selector: LabelSelector | None = None
    template: PodTemplateSpec = Field(default_factory=PodTemplateSpec)


class JobSpec(KubeModel):
    parallelism: int | None = None
    completions: int | None = None
    template: PodTemplateSpec = Field(default_factory=PodTemplateSpec)


class JobTemplateSpec(KubeModel):
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: JobSpec = Field(default_factory=JobSpec)


class CronJobSpec(KubeModel):
    schedule: str = ""
    job_template: JobTemplateSpec = Field(default_factory=JobTemplateSpec)


class ServiceSpec(KubeModel):
    type: str = "ClusterIP"
    selector: dict[str, str] = Field(default_factory=dict)
    external_name: str | None = None


class NetworkPolicySpec(KubeModel):
    pod_selector: LabelSelector = Field(default_factory=LabelSelector)
    policy_types: list[str] = Field(default_factory=list)
    ingress: list[dict[str, Any]] | None = None
    egress: list[dict[str, Any]] | None = None

    @property
    def effective_policy_types(self) -> frozenset[str]:
        """Declared policy types, or the API server defaults when omitted.

        Without policyTypes a policy always applies to Ingress, and to Egress
        when it carries egress rules.
        """
        if self.policy_types:
            return frozenset(self.policy_types)
        types = {"Ingress"}
        if self.egress is not None:
            types.add("Egress")
        return frozenset(types)


class PodDisruptionBudgetSpec(KubeModel):
    selector: LabelSelector | None = None
    min_available: int | str | None = None
    max_unavailable: int | str | None = None
