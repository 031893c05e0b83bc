"""Label selector compilation and matching.

Selectors are compiled once into a list of requirements and matched as a pure
function of a label mapping. Compilation rejects anything the API server
would reject; callers that only need a yes/no answer use ``selector_matches``,
which treats an invalid selector as matching nothing.
"""

from __future__ import annotations

import re
from typing import Mapping

from pydantic import BaseModel

from kube_score.models.kube import LabelSelector
from kube_score.utils.errors import SelectorSyntaxError

_NAME_RE = re.compile(r"^[A-Za-z0-9]([-A-Za-z0-9_.]*[A-Za-z0-9])?$")
_DNS_SUBDOMAIN_RE = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*$")

IN = "In"
NOT_IN = "NotIn"
EXISTS = "Exists"
DOES_NOT_EXIST = "DoesNotExist"
OPERATORS = (IN, NOT_IN, EXISTS, DOES_NOT_EXIST)


class Requirement(BaseModel):
    model_config = {"frozen": True}

    key: str
    operator: str
    values: frozenset[str]

    def matches(self, labels: Mapping[str, str]) -> bool:
        if self.operator == IN:
            return self.key in labels and labels[self.key] in self.values
        if self.operator == NOT_IN:
            return self.key not in labels or labels[self.key] not in self.values
        if self.operator == EXISTS:
            return self.key in labels
        return self.key not in labels


class Selector(BaseModel):
    """A compiled selector. An empty requirement list selects everything."""

    model_config = {"frozen": True}

    requirements: tuple[Requirement, ...] = ()
    selects_nothing: bool = False

    def matches(self, labels: Mapping[str, str]) -> bool:
        if self.selects_nothing:
            return False
        return all(r.matches(labels) for r in self.requirements)

    @property
    def selects_everything(self) -> bool:
        return not self.selects_nothing and not self.requirements


NOTHING = Selector(selects_nothing=True)
EVERYTHING = Selector()


def validate_label_key(key: str) -> None:
    """Raise SelectorSyntaxError unless ``key`` is a qualified label name."""
    prefix, _, name = key.rpartition("/")
    if "/" in key and not prefix:
        raise SelectorSyntaxError(f"Invalid label key {key!r}: empty prefix", key=key)
    if prefix and (len(prefix) > 253 or not _DNS_SUBDOMAIN_RE.match(prefix)):
        raise SelectorSyntaxError(f"Invalid label key {key!r}: bad prefix", key=key)
    if not name or len(name) > 63 or not _NAME_RE.match(name):
        raise SelectorSyntaxError(f"Invalid label key {key!r}", key=key)


def validate_label_value(key: str, value: str) -> None:
    if value == "":
        return
    if len(value) > 63 or not _NAME_RE.match(value):
        raise SelectorSyntaxError(f"Invalid value {value!r} for label {key!r}", key=key)


def compile_label_selector(selector: LabelSelector | None) -> Selector:
    """Compile a set-based selector.

    A missing selector selects nothing, an empty one selects everything.

    Raises:
        SelectorSyntaxError: If a key, value or operator is invalid
    """
    if selector is None:
        return NOTHING

    requirements: list[Requirement] = []
    for key, value in sorted(selector.match_labels.items()):
        validate_label_key(key)
        validate_label_value(key, value)
        requirements.append(Requirement(key=key, operator=IN, values=frozenset({value})))

    for expression in selector.match_expressions:
        validate_label_key(expression.key)
        if expression.operator not in OPERATORS:
            raise SelectorSyntaxError(
                f"{expression.operator!r} is not a valid label selector operator",
                key=expression.key,
            )
        if expression.operator in (IN, NOT_IN) and not expression.values:
            raise SelectorSyntaxError(
                f"Operator {expression.operator} requires values", key=expression.key
            )
        if expression.operator in (EXISTS, DOES_NOT_EXIST) and expression.values:
            raise SelectorSyntaxError(
                f"Operator {expression.operator} does not take values", key=expression.key
            )
        for value in expression.values:
            validate_label_value(expression.key, value)
        requirements.append(
            Requirement(
                key=expression.key,
                operator=expression.operator,
                values=frozenset(expression.values),
            )
        )

    return Selector(requirements=tuple(requirements))


def selector_from_set(labels: Mapping[str, str]) -> Selector:
    """Compile an equality-only selector such as a Service's ``spec.selector``.

    Raises:
        SelectorSyntaxError: If a key or value is invalid
    """
    return compile_label_selector(LabelSelector(match_labels=dict(labels)))


def selector_matches(selector: LabelSelector | None, labels: Mapping[str, str]) -> bool:
    """Whether ``selector`` selects ``labels``. Invalid selectors match nothing."""
    try:
        compiled = compile_label_selector(selector)
    except SelectorSyntaxError:
        return False
    return compiled.matches(labels)


def set_selector_matches(selector: Mapping[str, str], labels: Mapping[str, str]) -> bool:
    """Whether an equality-only selector selects ``labels``. Invalid selectors match nothing."""
    try:
        compiled = selector_from_set(selector)
    except SelectorSyntaxError:
        return False
    return compiled.matches(labels)
