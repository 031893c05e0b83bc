"""Built-in checks and the check registry."""

from kube_score.checks.registry import CheckRegistry
from kube_score.checks import (
    container,
    disruptionbudget,
    networkpolicy,
    probes,
    security,
    service,
    stable,
)
from kube_score.utils.config import ScoreConfig

__all__ = [
    "CheckRegistry",
    "register_default_checks",
]


def register_default_checks(
    registry: CheckRegistry | None = None,
    config: ScoreConfig | None = None,
) -> CheckRegistry:
    """Register all built-in checks with a registry.

    Args:
        registry: Registry to fill. A new one is created if None.
        config: Configuration for configurable checks

    Returns:
        The registry with checks registered
    """
    if registry is None:
        registry = CheckRegistry()
    if config is None:
        config = ScoreConfig()

    # Registration order is the order outcomes appear in for a resource.
    stable.register(registry, config)
    container.register(registry, config)
    networkpolicy.register_pod_checks(registry, config)
    probes.register(registry, config)
    security.register(registry, config)
    networkpolicy.register_policy_checks(registry, config)
    service.register(registry, config)
    disruptionbudget.register(registry, config)

    return registry
