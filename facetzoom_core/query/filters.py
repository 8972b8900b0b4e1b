"""FacetZoom Filters - Field Predicates and the Active Filter Set.

Each field carries at most one active filter. Re-applying a filter for a
field replaces the previous one; filters are never edited in place.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Union

from facetzoom_core.formatting import epoch_ms, to_iso
from facetzoom_core.model.record import Record
from facetzoom_core.model.values import FacetValue, canonical_key, coerce_number, iter_scalars

logger = logging.getLogger(__name__)

Bound = Union[int, float, datetime]
Predicate = Callable[[Optional[FacetValue], Record], bool]


class FilterKind(Enum):
    """Filter kinds."""

    DISCRETE = "discrete"
    RANGE = "range"
    CUSTOM = "custom"


def _bound_value(bound: Optional[Bound]) -> Optional[float]:
    if bound is None:
        return None
    if isinstance(bound, datetime):
        return epoch_ms(bound)
    if isinstance(bound, bool) or not isinstance(bound, (int, float)):
        raise TypeError(f"Range bound must be a number or datetime, got {type(bound).__name__}")
    return bound


@dataclass(frozen=True)
class RangeConstraint:
    """Bounds of a range filter.

    Attributes:
        min: Lower bound, open-ended when None
        max: Upper bound, open-ended when None
        inclusive: Use <= at both ends instead of <
    """

    min: Optional[Bound] = None
    max: Optional[Bound] = None
    inclusive: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RangeConstraint":
        """Create from a {min, max, inclusive} mapping."""
        return cls(
            min=data.get("min"),
            max=data.get("max"),
            inclusive=data.get("inclusive", True),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        def _dump(bound: Optional[Bound]) -> Any:
            return to_iso(bound) if isinstance(bound, datetime) else bound

        return {"min": _dump(self.min), "max": _dump(self.max), "inclusive": self.inclusive}


class DiscretePredicate:
    """Membership test against a set of allowed values.

    Passes when any entry of a (possibly multi-valued) facet value matches
    an allowed value after canonicalization.
    """

    def __init__(self, allowed_values: Iterable[Any]):
        self.allowed_values = list(allowed_values)
        self._allowed = {canonical_key(value) for value in self.allowed_values}

    def __call__(self, value: Optional[FacetValue], record: Optional[Record] = None) -> bool:
        if value is None:
            return False
        return any(canonical_key(entry) in self._allowed for entry in iter_scalars(value))

    def __repr__(self) -> str:
        return f"DiscretePredicate({self.allowed_values!r})"


class RangePredicate:
    """Numeric/temporal range test.

    Passes when at least one entry coerces to a number (timestamps to their
    instant) that lies within the bounds.
    """

    def __init__(self, constraint: RangeConstraint):
        self.constraint = constraint
        self._low = _bound_value(constraint.min)
        self._high = _bound_value(constraint.max)

    def _within(self, target: float) -> bool:
        inclusive = self.constraint.inclusive
        if self._low is not None:
            if (target < self._low) if inclusive else (target <= self._low):
                return False
        if self._high is not None:
            if (target > self._high) if inclusive else (target >= self._high):
                return False
        return True

    def __call__(self, value: Optional[FacetValue], record: Optional[Record] = None) -> bool:
        if value is None:
            return False
        for entry in iter_scalars(value):
            target = coerce_number(entry)
            if target is not None and self._within(target):
                return True
        return False

    def __repr__(self) -> str:
        return f"RangePredicate({self.constraint!r})"


@dataclass(frozen=True)
class ActiveFilter:
    """A filter installed on one field."""

    field: str
    kind: FilterKind
    predicate: Predicate

    def read_value(self, record: Record) -> Optional[FacetValue]:
        """Value this filter tests on a record.

        Range filters fall back to the metric of the same name when the
        record has no such facet.
        """
        value = record.facets.get(self.field)
        if value is None and self.kind is FilterKind.RANGE:
            return record.metric(self.field)
        return value

    def matches(self, record: Record) -> bool:
        return self.predicate(self.read_value(record), record)

    def describe(self) -> Dict[str, Any]:
        """Summary used when listing active filters."""
        data: Dict[str, Any] = {"field": self.field, "type": self.kind.value}
        if isinstance(self.predicate, DiscretePredicate):
            data["values"] = list(self.predicate.allowed_values)
        elif isinstance(self.predicate, RangePredicate):
            data["range"] = self.predicate.constraint.to_dict()
        return data


class FilterSet:
    """Ordered mapping of field name to its active filter."""

    def __init__(self) -> None:
        self._filters: Dict[str, ActiveFilter] = {}

    def set(self, active: ActiveFilter) -> None:
        """Install a filter, replacing any filter on the same field."""
        replaced = active.field in self._filters
        self._filters[active.field] = active
        logger.debug(
            f"{'Replaced' if replaced else 'Added'} {active.kind.value} filter on {active.field}"
        )

    def remove(self, field: str) -> bool:
        """Remove the filter on a field.

        Returns:
            True if a filter was removed
        """
        if field in self._filters:
            del self._filters[field]
            logger.debug(f"Removed filter on {field}")
            return True
        return False

    def clear(self) -> None:
        self._filters.clear()

    def get(self, field: str) -> Optional[ActiveFilter]:
        return self._filters.get(field)

    def fields(self) -> List[str]:
        return list(self._filters.keys())

    def matches(self, record: Record, skip_field: Optional[str] = None) -> bool:
        """Check a record against every filter except the one on ``skip_field``."""
        return all(
            active.matches(record)
            for name, active in self._filters.items()
            if name != skip_field
        )

    def __len__(self) -> int:
        return len(self._filters)

    def __contains__(self, field: object) -> bool:
        return field in self._filters

    def __iter__(self) -> Iterator[ActiveFilter]:
        return iter(list(self._filters.values()))


__all__ = [
    "Bound",
    "Predicate",
    "FilterKind",
    "RangeConstraint",
    "DiscretePredicate",
    "RangePredicate",
    "ActiveFilter",
    "FilterSet",
]
