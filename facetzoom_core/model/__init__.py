"""FacetZoom Data Model Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from facetzoom_core.model.values import (
    Scalar,
    FacetValue,
    ValueKind,
    kind_of,
    iter_scalars,
    canonical_key,
    coerce_number,
    display_label,
)
from facetzoom_core.model.record import (
    Record,
    collect_facet_keys,
    load_records,
)

__all__ = [
    "Scalar",
    "FacetValue",
    "ValueKind",
    "kind_of",
    "iter_scalars",
    "canonical_key",
    "coerce_number",
    "display_label",
    "Record",
    "collect_facet_keys",
    "load_records",
]
