"""FacetZoom Values - Facet Value Variant and Coercion Rules.

A facet value is either a scalar (string, number, boolean or timestamp) or
an ordered sequence of scalars. Every coercion below is an exhaustive match
over ValueKind.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import math
from datetime import datetime
from enum import Enum
from typing import Any, Hashable, List, Optional, Sequence, Tuple, Union

from facetzoom_core.formatting import epoch_ms, format_plain, parse_number, to_iso

Scalar = Union[str, int, float, bool, datetime]
FacetValue = Union[Scalar, Sequence[Scalar]]


class ValueKind(Enum):
    """Kinds of scalar facet values."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"


def kind_of(value: Any) -> Optional[ValueKind]:
    """Classify a scalar, or return None if it is not a supported scalar."""
    # bool is a subclass of int, so it has to be matched first
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, datetime):
        return ValueKind.TIMESTAMP
    return None


def iter_scalars(value: Optional[FacetValue]) -> List[Any]:
    """Flatten a possibly multi-valued facet value into a list of entries."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def canonical_key(value: Any) -> Tuple[ValueKind, Hashable]:
    """Key used to compare facet values for discrete matching.

    Strings compare case-insensitively, timestamps by instant, numbers and
    booleans by value. The kind is part of the key so True and 1 never
    collide.

    Raises:
        TypeError: If the value is not a supported scalar
    """
    kind = kind_of(value)
    if kind is ValueKind.STRING:
        return kind, value.lower()
    if kind is ValueKind.TIMESTAMP:
        return kind, to_iso(value)
    if kind is ValueKind.NUMBER or kind is ValueKind.BOOLEAN:
        return kind, value
    raise TypeError(
        f"Unsupported facet value for discrete comparison: {type(value).__name__}"
    )


def coerce_number(value: Any) -> Optional[float]:
    """Read a scalar as a number.

    Timestamps become epoch milliseconds and numeric strings are parsed.
    Booleans, NaN, infinities and unsupported values give None.
    """
    kind = kind_of(value)
    if kind is ValueKind.NUMBER:
        return value if math.isfinite(value) else None
    if kind is ValueKind.TIMESTAMP:
        return epoch_ms(value)
    if kind is ValueKind.STRING:
        return parse_number(value)
    return None


def display_label(value: Any) -> str:
    """String shown for a facet value in counts and listings."""
    kind = kind_of(value)
    if kind is ValueKind.STRING:
        return value
    if kind is ValueKind.TIMESTAMP:
        return to_iso(value)
    if kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind is ValueKind.NUMBER:
        if isinstance(value, float) and value.is_integer():
            return format_plain(value, 0)
        return str(value)
    return str(value)


__all__ = [
    "Scalar",
    "FacetValue",
    "ValueKind",
    "kind_of",
    "iter_scalars",
    "canonical_key",
    "coerce_number",
    "display_label",
]
