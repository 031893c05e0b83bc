"""Kubernetes resource quantity parsing."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

_BINARY_SUFFIXES = {
    "Ki": Decimal(2) ** 10,
    "Mi": Decimal(2) ** 20,
    "Gi": Decimal(2) ** 30,
    "Ti": Decimal(2) ** 40,
    "Pi": Decimal(2) ** 50,
    "Ei": Decimal(2) ** 60,
}

_DECIMAL_SUFFIXES = {
    "n": Decimal("1e-9"),
    "u": Decimal("1e-6"),
    "m": Decimal("1e-3"),
    "": Decimal(1),
    "k": Decimal("1e3"),
    "M": Decimal("1e6"),
    "G": Decimal("1e9"),
    "T": Decimal("1e12"),
    "P": Decimal("1e15"),
    "E": Decimal("1e18"),
}

_QUANTITY_RE = re.compile(
    r"^(?P<number>[+-]?(?:\d+\.?\d*|\.\d+))(?P<suffix>[eE][+-]?\d+|[KMGTPE]i|[numkMGTPE]?)$"
)


def parse_quantity(value: str | int | float | None) -> Decimal | None:
    """Parse a quantity such as ``"250m"`` or ``"0.25Gi"`` into a Decimal.

    Returns None for an unset or malformed quantity.
    """
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return Decimal(str(value))

    match = _QUANTITY_RE.match(value.strip())
    if not match:
        return None

    try:
        number = Decimal(match.group("number"))
    except InvalidOperation:
        return None

    suffix = match.group("suffix")
    if suffix in _BINARY_SUFFIXES:
        return number * _BINARY_SUFFIXES[suffix]
    if suffix[:1] in ("e", "E"):
        return number * (Decimal(10) ** int(suffix[1:]))
    return number * _DECIMAL_SUFFIXES[suffix]


def quantities_equal(a: str | None, b: str | None) -> bool:
    """Compare two quantities by value. Two unset quantities are equal."""
    return parse_quantity(a) == parse_quantity(b)
