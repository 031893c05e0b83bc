"""Container image and resource checks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from kube_score.adapters.base import PodSpecer
from kube_score.checks.registry import CheckRegistry
from kube_score.models.kube import Container
from kube_score.models.quantity import quantities_equal
from kube_score.models.resources import TargetShape
from kube_score.models.scorecard import CheckResult, Comment, Grade
from kube_score.utils.config import ScoreConfig

if TYPE_CHECKING:
    from kube_score.core.index import ResourceIndex


def container_resources(
    require_cpu_limit: bool = True,
    require_memory_limit: bool = True,
) -> Callable[[PodSpecer, ResourceIndex], CheckResult]:
    """Every container must set cpu and memory requests and limits."""

    def evaluate(resource: PodSpecer, index: ResourceIndex) -> CheckResult:
        comments: list[Comment] = []

        for container in resource.get_pod_template().spec.all_containers:
            limits = container.resources.limits
            requests = container.resources.requests

            if require_cpu_limit and "cpu" not in limits:
                comments.append(
                    Comment(
                        path=container.name,
                        summary="CPU limit is not set",
                        description="Resource limits are recommended to avoid resource DDOS. Set resources.limits.cpu",
                    )
                )
            if require_memory_limit and "memory" not in limits:
                comments.append(
                    Comment(
                        path=container.name,
                        summary="Memory limit is not set",
                        description="Resource limits are recommended to avoid resource DDOS. Set resources.limits.memory",
                    )
                )
            if "cpu" not in requests:
                comments.append(
                    Comment(
                        path=container.name,
                        summary="CPU request is not set",
                        description=(
                            "Resource requests are recommended to make sure that the application "
                            "can start and run without crashing. Set resources.requests.cpu"
                        ),
                    )
                )
            if "memory" not in requests:
                comments.append(
                    Comment(
                        path=container.name,
                        summary="Memory request is not set",
                        description=(
                            "Resource requests are recommended to make sure that the application "
                            "can start and run without crashing. Set resources.requests.memory"
                        ),
                    )
                )

        return CheckResult.worst_of(comments, Grade.CRITICAL)

    return evaluate


def container_resource_requests_equal_limits(
    require_cpu: bool = True,
) -> Callable[[PodSpecer, ResourceIndex], CheckResult]:
    """Requests must equal limits, compared by quantity value."""

    def evaluate(resource: PodSpecer, index: ResourceIndex) -> CheckResult:
        comments: list[Comment] = []

        for container in resource.get_pod_template().spec.all_containers:
            limits = container.resources.limits
            requests = container.resources.requests

            if require_cpu and not quantities_equal(requests.get("cpu"), limits.get("cpu")):
                comments.append(
                    Comment(
                        path=container.name,
                        summary="CPU requests does not match limits",
                        description=(
                            "Having equal requests and limits is recommended to avoid resource DDOS of "
                            "the node during spikes. Set resources.requests.cpu == resources.limits.cpu"
                        ),
                    )
                )
            if not quantities_equal(requests.get("memory"), limits.get("memory")):
                comments.append(
                    Comment(
                        path=container.name,
                        summary="Memory requests does not match limits",
                        description=(
                            "Having equal requests and limits is recommended to avoid resource DDOS of "
                            "the node during spikes. Set resources.requests.memory == resources.limits.memory"
                        ),
                    )
                )

        return CheckResult.worst_of(comments, Grade.CRITICAL)

    return evaluate


def image_tag(image: str) -> str | None:
    """Tag of an image reference, or None when it has none.

    The registry port in ``registry:5000/app`` is not a tag.
    """
    name = image.split("@", 1)[0]
    last_segment = name.rsplit("/", 1)[-1]
    if ":" not in last_segment:
        return None
    return last_segment.rsplit(":", 1)[1] or None


def _is_pinned(container: Container) -> bool:
    if "@" in container.image:
        return True
    tag = image_tag(container.image)
    return tag is not None and tag != "latest"


def container_image_tag(resource: PodSpecer, index: ResourceIndex) -> CheckResult:
    """Critical for any container whose image is untagged or uses latest."""
    comments = [
        Comment(
            path=container.name,
            summary="Image with latest tag",
            description="Using a fixed tag is recommended to avoid accidental upgrades",
        )
        for container in resource.get_pod_template().spec.all_containers
        if not _is_pinned(container)
    ]
    return CheckResult.worst_of(comments, Grade.CRITICAL)


def container_image_pull_policy(resource: PodSpecer, index: ResourceIndex) -> CheckResult:
    comments = [
        Comment(
            path=container.name,
            summary="ImagePullPolicy is not set to Always",
            description=(
                "It's recommended to always set the ImagePullPolicy to Always, to make sure that the "
                "imagePullSecrets are always correct, and to always get the image you want."
            ),
        )
        for container in resource.get_pod_template().spec.containers
        if container.image_pull_policy != "Always"
    ]
    return CheckResult.worst_of(comments, Grade.CRITICAL)


def register(registry: CheckRegistry, config: ScoreConfig) -> None:
    registry.add(
        "container-resources",
        "Container Resources",
        TargetShape.POD_TEMPLATE,
        container_resources(
            require_cpu_limit=not config.ignore_container_cpu_limit,
            require_memory_limit=not config.ignore_container_memory_limit,
        ),
        description="Makes sure that all pods have resource limits and requests set",
    )
    registry.add(
        "container-resource-requests-equal-limits",
        "Container Resource Requests Equal Limits",
        TargetShape.POD_TEMPLATE,
        container_resource_requests_equal_limits(require_cpu=not config.ignore_container_cpu_limit),
        description="Makes sure that all pods have the same requests as limits on resources set",
        optional=True,
    )
    registry.add(
        "container-image-tag",
        "Container Image Tag",
        TargetShape.POD_TEMPLATE,
        container_image_tag,
        description="Makes sure that a explicit non-latest tag is used",
    )
    registry.add(
        "container-image-pull-policy",
        "Container Image Pull Policy",
        TargetShape.POD_TEMPLATE,
        container_image_pull_policy,
        description="Makes sure that the pullPolicy is set to Always",
    )
