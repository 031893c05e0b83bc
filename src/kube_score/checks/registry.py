"""Check registry for managing the catalogue of checks."""

from __future__ import annotations

from typing import Callable, Iterable, Iterator

from kube_score.models.resources import CanonicalResource, TargetShape
from kube_score.models.scorecard import Check, CheckResult


class CheckRegistry:
    """Registry of checks for one run.

    The registry is a plain value: build one per run (or share a finished one
    between runs) and hand it to the ScoringEngine. Registration order is the
    order outcomes appear in for a resource.

    Example:
        registry = CheckRegistry()
        registry.add(
            "container-image-tag",
            "Container Image Tag",
            TargetShape.POD_TEMPLATE,
            container_image_tag,
        )

        for check in registry.checks_for(resource):
            result = check.evaluate(resource, index)
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._checks: dict[str, Check] = {}

    def register(self, check: Check) -> None:
        """Register a check.

        Args:
            check: The check to add at the end of the catalogue

        Raises:
            ValueError: If a check with the same id is already registered
        """
        if check.id in self._checks:
            raise ValueError(f"Check '{check.id}' is already registered")
        self._checks[check.id] = check

    def add(
        self,
        id: str,
        name: str,
        target: TargetShape,
        evaluate: Callable[..., CheckResult],
        description: str = "",
        optional: bool = False,
        kinds: Iterable[str] = (),
    ) -> Check:
        """Build and register a check in one call.

        Args:
            id: Stable unique identifier, used by --ignore-test and annotations
            name: Display name
            target: Shape of resource the check runs against
            evaluate: ``evaluate(resource, index)`` returning a CheckResult
            description: What the check verifies
            optional: Only run when listed in the enabled optional tests
            kinds: Restrict the check to these kinds of the target shape

        Returns:
            The registered check

        Raises:
            ValueError: If a check with the same id is already registered
        """
        check = Check(
            id=id,
            name=name,
            description=description,
            target=target,
            kinds=frozenset(kinds),
            optional=optional,
            evaluate=evaluate,
        )
        self.register(check)
        return check

    def get(self, check_id: str) -> Check | None:
        """Look up a check by id.

        Args:
            check_id: Identifier of the check

        Returns:
            The check or None if not registered
        """
        return self._checks.get(check_id)

    def __getitem__(self, check_id: str) -> Check:
        """Look up a check by id.

        Raises:
            KeyError: If no check with that id is registered
        """
        if check_id not in self._checks:
            raise KeyError(f"No check with id '{check_id}' is registered")
        return self._checks[check_id]

    def __contains__(self, check_id: str) -> bool:
        return check_id in self._checks

    def __iter__(self) -> Iterator[Check]:
        """Iterate over checks in registration order."""
        return iter(self._checks.values())

    def __len__(self) -> int:
        return len(self._checks)

    @property
    def ids(self) -> list[str]:
        """Ids of all registered checks, in registration order."""
        return list(self._checks.keys())

    def checks_for(self, resource: CanonicalResource) -> Iterator[Check]:
        """Checks whose target shape (and kind filter) matches ``resource``.

        Args:
            resource: A decoded resource

        Yields:
            Matching checks in registration order
        """
        for check in self._checks.values():
            if not resource.has_shape(check.target):
                continue
            if check.kinds and resource.kind not in check.kinds:
                continue
            yield check
