"""Check, outcome and scorecard models."""

from __future__ import annotations

import threading
from enum import Enum
from typing import Any, Callable, Iterator

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from kube_score.models.kube import ObjectMeta, TypeMeta
from kube_score.models.resources import TargetShape


class Grade(str, Enum):
    """Severity of one check against one resource."""

    CRITICAL = "Critical"
    WARNING = "Warning"
    ALL_OK = "AllOK"
    SKIPPED = "Skipped"

    @property
    def rank(self) -> int:
        return _GRADE_RANK[self]


_GRADE_RANK = {
    Grade.SKIPPED: 0,
    Grade.CRITICAL: 1,
    Grade.WARNING: 5,
    Grade.ALL_OK: 10,
}


class Comment(BaseModel):
    """One remark attached to an outcome."""

    model_config = {"frozen": True}

    path: str = Field(default="", description="Where in the object the remark applies")
    summary: str = Field(description="Short description of the problem")
    description: str = Field(default="", description="How to fix it")


class CheckResult(BaseModel):
    """What an evaluation function returns."""

    model_config = {"frozen": True}

    grade: Grade
    comments: list[Comment] = Field(default_factory=list)

    @classmethod
    def ok(cls, comments: list[Comment] | None = None) -> "CheckResult":
        return cls(grade=Grade.ALL_OK, comments=comments or [])

    @classmethod
    def worst_of(cls, comments: list[Comment], grade: Grade) -> "CheckResult":
        """AllOK when there are no comments, otherwise ``grade``."""
        if not comments:
            return cls.ok()
        return cls(grade=grade, comments=comments)


class Check(BaseModel):
    """A registered rule.

    ``evaluate`` is called as ``evaluate(resource, index)`` and must return a
    CheckResult without side effects.
    """

    model_config = {"frozen": True}

    id: str = Field(description="Stable unique identifier")
    name: str = Field(description="Display name")
    description: str = Field(default="", description="What the check verifies")
    target: TargetShape = Field(description="Shape of resource the check runs against")
    kinds: frozenset[str] = Field(
        default_factory=frozenset,
        description="Restrict to these kinds (empty means every kind of the shape)",
    )
    optional: bool = Field(default=False, description="Off unless explicitly enabled")
    evaluate: Callable[..., CheckResult] = Field(exclude=True, repr=False)

    @field_serializer("kinds")
    def _sorted_kinds(self, kinds: frozenset[str]) -> list[str]:
        return sorted(kinds)


class Outcome(BaseModel):
    """Result of one check against one resource."""

    model_config = {"frozen": True}

    check: Check
    grade: Grade
    skipped: bool = False
    comments: list[Comment] = Field(default_factory=list)


class ScoredObject(BaseModel):
    """All outcomes recorded for one scored resource."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type_meta: TypeMeta
    object_meta: ObjectMeta
    checks: list[Outcome] = Field(default_factory=list)

    @property
    def human_name(self) -> str:
        return (
            f"{self.type_meta.api_version}/{self.type_meta.kind} "
            f"{self.object_meta.name} in {self.object_meta.namespace}"
        )

    def outcome_for(self, check_id: str) -> Outcome | None:
        """The outcome recorded for a check, or None when it did not run."""
        for outcome in self.checks:
            if outcome.check.id == check_id:
                return outcome
        return None

    def worst_grade(self) -> Grade | None:
        """Lowest non-skipped grade of this object, None if nothing was graded."""
        graded = [o.grade for o in self.checks if not o.skipped]
        if not graded:
            return None
        return min(graded, key=lambda g: g.rank)


class Scorecard:
    """Append-only collection of outcomes, one entry per scored resource.

    Entries keep the order resources were added in. Two resources that share
    an identity get separate entries, so an entry never holds more than one
    outcome per check. Safe to populate from several threads.
    """

    def __init__(self) -> None:
        self._objects: list[ScoredObject] = []
        self._latest: dict[tuple[str, str, str, str], ScoredObject] = {}
        self._lock = threading.Lock()

    def add(self, type_meta: TypeMeta, object_meta: ObjectMeta, outcome: Outcome) -> None:
        """Append an outcome under the identity of its resource.

        The outcome joins the most recent entry for the identity. A new entry
        is started when there is none yet, or when that entry already holds an
        outcome for the same check.

        Args:
            type_meta: apiVersion and kind of the resource
            object_meta: Identity metadata of the resource
            outcome: Outcome to append
        """
        key = _identity_key(type_meta, object_meta)
        with self._lock:
            scored = self._latest.get(key)
            if scored is None or scored.outcome_for(outcome.check.id) is not None:
                scored = self._open(key, type_meta, object_meta)
            scored.checks.append(outcome)

    def add_all(self, type_meta: TypeMeta, object_meta: ObjectMeta, outcomes: list[Outcome]) -> None:
        """Record one resource with all of its outcomes, in order.

        Every call starts a new entry, even when ``outcomes`` is empty.

        Raises:
            ValueError: If two outcomes belong to the same check
        """
        ids = [o.check.id for o in outcomes]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate outcomes for {object_meta.name}: {ids}")

        key = _identity_key(type_meta, object_meta)
        with self._lock:
            self._open(key, type_meta, object_meta).checks.extend(outcomes)

    def _open(
        self, key: tuple[str, str, str, str], type_meta: TypeMeta, object_meta: ObjectMeta
    ) -> ScoredObject:
        scored = ScoredObject(type_meta=type_meta, object_meta=object_meta)
        self._objects.append(scored)
        self._latest[key] = scored
        return scored

    def __iter__(self) -> Iterator[ScoredObject]:
        return iter(list(self._objects))

    def __len__(self) -> int:
        return len(self._objects)

    def get(self, kind: str, name: str, namespace: str = "default") -> ScoredObject | None:
        """Find the first scored object with a kind, name and namespace.

        Args:
            kind: Object kind, any apiVersion
            name: Object name
            namespace: Object namespace

        Returns:
            The first matching entry, or None
        """
        for scored in self._objects:
            meta = scored.object_meta
            if scored.type_meta.kind == kind and meta.name == name and meta.namespace == namespace:
                return scored
        return None

    def outcomes(self) -> Iterator[Outcome]:
        """Every outcome of every entry, in scorecard order."""
        for scored in self:
            yield from scored.checks

    def worst_grade(self) -> Grade | None:
        """Lowest non-skipped grade in the scorecard, None if nothing was graded."""
        grades = [g for g in (s.worst_grade() for s in self) if g is not None]
        if not grades:
            return None
        return min(grades, key=lambda g: g.rank)

    def to_dict(self) -> list[dict[str, Any]]:
        """JSON-ready form using Kubernetes-style camelCase keys."""
        return [s.model_dump(mode="json", by_alias=True) for s in self]


def _identity_key(type_meta: TypeMeta, object_meta: ObjectMeta) -> tuple[str, str, str, str]:
    return (type_meta.api_version, type_meta.kind, object_meta.namespace, object_meta.name)
