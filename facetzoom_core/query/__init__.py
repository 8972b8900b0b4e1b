"""FacetZoom Query Components.

Payload decoding lives in ``facetzoom_core.query.payload``; it depends on
the engine and is therefore not imported here.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from facetzoom_core.query.filters import (
    Bound,
    Predicate,
    FilterKind,
    RangeConstraint,
    DiscretePredicate,
    RangePredicate,
    ActiveFilter,
    FilterSet,
)

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
