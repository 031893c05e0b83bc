"""Capability protocols implemented by decoded resources and adapters."""

from typing import Any, Protocol, runtime_checkable

from kube_score.models.kube import ObjectMeta, PodTemplateSpec, TypeMeta
from kube_score.models.resources import CanonicalResource


@runtime_checkable
class PodSpecer(Protocol):
    """Anything that describes a pod: a bare Pod or a Workload.

    Every schema version of every pod-owning kind is exposed through this
    surface, so checks never branch on apiVersion.
    """

    def get_type_identity(self) -> TypeMeta:
        """apiVersion and kind of the owning document."""
        ...

    def get_object_identity(self) -> ObjectMeta:
        """Identity metadata of the owning document."""
        ...

    def get_pod_template(self) -> PodTemplateSpec:
        """The pod template, including its security context."""
        ...


@runtime_checkable
class Adapter(Protocol):
    """Decodes the body of one (apiVersion, kind) pair.

    To support a new schema version, implement this protocol (usually by
    instantiating DocumentAdapter with a document model) and register it
    with an AdapterRegistry.

    Example:
        class MyAdapter:
            api_version = "apps/v1"
            kind = "Deployment"

            def decode(self, body: dict[str, Any]) -> CanonicalResource:
                return DeploymentDocument.model_validate(body).to_resource(
                    TypeMeta(api_version=self.api_version, kind=self.kind)
                )
    """

    @property
    def api_version(self) -> str:
        ...

    @property
    def kind(self) -> str:
        ...

    def decode(self, body: dict[str, Any]) -> CanonicalResource:
        """Decode a document body.

        Raises:
            pydantic.ValidationError: If the body does not fit the schema
        """
        ...
