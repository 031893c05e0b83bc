"""Wire-level document models and their conversion to canonical resources.

One document class per logical kind; schema versions of the same kind share a
class when their shape is identical for the fields checks read, and differ
only in the adapter they are registered under.
"""

from __future__ import annotations

from pydantic import Field

from kube_score.models.kube import (
    CronJobSpec,
    DaemonSetSpec,
    DeploymentSpec,
    JobSpec,
    KubeModel,
    NetworkPolicySpec,
    ObjectMeta,
    PodDisruptionBudgetSpec,
    PodSpec,
    PodTemplateSpec,
    ServiceSpec,
    StatefulSetSpec,
    TypeMeta,
)
from kube_score.models.resources import (
    CanonicalResource,
    DisruptionBudgetResource,
    NetworkPolicyResource,
    Pod,
    ServiceResource,
    Workload,
)


class Document(KubeModel):
    """Envelope shared by every manifest."""

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)

    def to_resource(self, type_meta: TypeMeta) -> CanonicalResource:
        return CanonicalResource(type_meta=type_meta, metadata=self.metadata)


class PodDocument(Document):
    spec: PodSpec = Field(default_factory=PodSpec)

    def to_resource(self, type_meta: TypeMeta) -> Pod:
        return Pod(type_meta=type_meta, metadata=self.metadata, spec=self.spec)


class WorkloadDocument(Document):
    """A document that owns a pod template somewhere in its spec."""

    def pod_template(self) -> PodTemplateSpec:
        raise NotImplementedError

    def replicas(self) -> int | None:
        return None

    def to_resource(self, type_meta: TypeMeta) -> Workload:
        template = self.pod_template()
        # The template inherits the owner's namespace for relationship checks.
        template = template.model_copy(
            update={
                "metadata": template.metadata.model_copy(
                    update={"namespace": self.metadata.namespace}
                )
            }
        )
        return Workload(
            type_meta=type_meta,
            metadata=self.metadata,
            template=template,
            replicas=self.replicas(),
        )


class DeploymentDocument(WorkloadDocument):
    spec: DeploymentSpec = Field(default_factory=DeploymentSpec)

    def pod_template(self) -> PodTemplateSpec:
        return self.spec.template

    def replicas(self) -> int | None:
        return self.spec.replicas


class StatefulSetDocument(WorkloadDocument):
    spec: StatefulSetSpec = Field(default_factory=StatefulSetSpec)

    def pod_template(self) -> PodTemplateSpec:
        return self.spec.template

    def replicas(self) -> int | None:
        return self.spec.replicas


class DaemonSetDocument(WorkloadDocument):
    spec: DaemonSetSpec = Field(default_factory=DaemonSetSpec)

    def pod_template(self) -> PodTemplateSpec:
        return self.spec.template


class JobDocument(WorkloadDocument):
    spec: JobSpec = Field(default_factory=JobSpec)

    def pod_template(self) -> PodTemplateSpec:
        return self.spec.template


class CronJobDocument(WorkloadDocument):
    spec: CronJobSpec = Field(default_factory=CronJobSpec)

    def pod_template(self) -> PodTemplateSpec:
        return self.spec.job_template.spec.template


class ServiceDocument(Document):
    spec: ServiceSpec = Field(default_factory=ServiceSpec)

    def to_resource(self, type_meta: TypeMeta) -> ServiceResource:
        return ServiceResource(
            type_meta=type_meta,
            metadata=self.metadata,
            service_type=self.spec.type,
            selector=self.spec.selector,
            external_name=self.spec.external_name,
        )


class NetworkPolicyDocument(Document):
    spec: NetworkPolicySpec = Field(default_factory=NetworkPolicySpec)

    def to_resource(self, type_meta: TypeMeta) -> NetworkPolicyResource:
        return NetworkPolicyResource(
            type_meta=type_meta,
            metadata=self.metadata,
            pod_selector=self.spec.pod_selector,
            policy_types=self.spec.effective_policy_types,
        )


class PodDisruptionBudgetDocument(Document):
    spec: PodDisruptionBudgetSpec = Field(default_factory=PodDisruptionBudgetSpec)

    def to_resource(self, type_meta: TypeMeta) -> DisruptionBudgetResource:
        return DisruptionBudgetResource(
            type_meta=type_meta,
            metadata=self.metadata,
            selector=self.spec.selector,
        )
