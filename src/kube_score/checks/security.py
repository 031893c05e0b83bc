"""Container security context checks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kube_score.adapters.base import PodSpecer
from kube_score.checks.registry import CheckRegistry
from kube_score.models.kube import Container, PodSecurityContext, SecurityContext
from kube_score.models.resources import TargetShape
from kube_score.models.scorecard import CheckResult, Comment, Grade
from kube_score.utils.config import ScoreConfig

if TYPE_CHECKING:
    from kube_score.core.index import ResourceIndex

MIN_USER_ID = 10000
MIN_GROUP_ID = 10000

SECCOMP_ANNOTATION = "seccomp.security.alpha.kubernetes.io/defaultProfileName"


def effective_security_context(
    container_ctx: SecurityContext,
    pod_ctx: PodSecurityContext | None,
) -> SecurityContext:
    """Container settings, with unset user and group inherited from the pod."""
    if pod_ctx is None:
        return container_ctx

    inherited = {}
    if container_ctx.run_as_user is None and pod_ctx.run_as_user is not None:
        inherited["run_as_user"] = pod_ctx.run_as_user
    if container_ctx.run_as_group is None and pod_ctx.run_as_group is not None:
        inherited["run_as_group"] = pod_ctx.run_as_group
    if container_ctx.run_as_non_root is None and pod_ctx.run_as_non_root is not None:
        inherited["run_as_non_root"] = pod_ctx.run_as_non_root

    return container_ctx.model_copy(update=inherited)


def _container_comments(container: Container, pod_ctx: PodSecurityContext | None) -> list[Comment]:
    if container.security_context is None:
        return [
            Comment(
                path=container.name,
                summary="Container has no configured security context",
                description="Set securityContext to run the container in a more secure context.",
            )
        ]

    ctx = effective_security_context(container.security_context, pod_ctx)
    comments: list[Comment] = []

    if ctx.privileged:
        comments.append(
            Comment(
                path=container.name,
                summary="The container is privileged",
                description=(
                    "Set securityContext.privileged to false. Privileged containers can access all "
                    "devices on the host, and grants almost the same access as non-containerized "
                    "processes on the host."
                ),
            )
        )

    if not ctx.read_only_root_filesystem:
        comments.append(
            Comment(
                path=container.name,
                summary="The pod has a container with a writable root filesystem",
                description="Set securityContext.readOnlyRootFilesystem to true",
            )
        )

    if ctx.run_as_user is None or ctx.run_as_user < MIN_USER_ID:
        comments.append(
            Comment(
                path=container.name,
                summary="The container is running with a low user ID",
                description=(
                    "A userid above 10 000 is recommended to avoid conflicts with the host. "
                    "Set securityContext.runAsUser to a value > 10000"
                ),
            )
        )

    if ctx.run_as_group is None or ctx.run_as_group < MIN_GROUP_ID:
        comments.append(
            Comment(
                path=container.name,
                summary="The container running with a low group ID",
                description=(
                    "A groupid above 10 000 is recommended to avoid conflicts with the host. "
                    "Set securityContext.runAsGroup to a value > 10000"
                ),
            )
        )

    return comments


def container_security_context(resource: PodSpecer, index: ResourceIndex) -> CheckResult:
    """Critical when any container lacks a hardened security context.

    User and group ids set at pod level count for containers that leave them unset.
    """
    spec = resource.get_pod_template().spec
    comments: list[Comment] = []
    for container in spec.all_containers:
        comments.extend(_container_comments(container, spec.security_context))
    return CheckResult.worst_of(comments, Grade.CRITICAL)


def container_seccomp_profile(resource: PodSpecer, index: ResourceIndex) -> CheckResult:
    if SECCOMP_ANNOTATION in resource.get_pod_template().metadata.annotations:
        return CheckResult.ok()

    return CheckResult(
        grade=Grade.WARNING,
        comments=[
            Comment(
                summary="The pod has not configured Seccomp for its containers",
                description=(
                    "Running containers with Seccomp is recommended to reduce the kernel attack "
                    f"surface. Set the annotation {SECCOMP_ANNOTATION}"
                ),
            )
        ],
    )


def register(registry: CheckRegistry, config: ScoreConfig) -> None:
    registry.add(
        "container-security-context",
        "Container Security Context",
        TargetShape.POD_TEMPLATE,
        container_security_context,
        description=(
            "Makes sure that all pods have good securityContexts configured: a read only root "
            "filesystem, no privilege, and high user and group ids"
        ),
    )
    registry.add(
        "container-seccomp-profile",
        "Container Seccomp Profile",
        TargetShape.POD_TEMPLATE,
        container_seccomp_profile,
        description="Makes sure that all pods have a seccomp policy configured",
        optional=True,
    )
