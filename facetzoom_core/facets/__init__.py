"""FacetZoom Faceting and Aggregation Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from facetzoom_core.facets.builder import (
    FacetBuilder,
    FacetCount,
    FacetResult,
)
from facetzoom_core.facets.aggregations import (
    HistogramBin,
    NumericStats,
    percentile,
    build_fixed_histogram,
    quantile_breakpoints,
    find_bucket_index,
    build_quantile_histogram,
    collapse_histogram,
    Aggregation,
    StatsAggregation,
)

__all__ = [
    "FacetBuilder",
    "FacetCount",
    "FacetResult",
    "HistogramBin",
    "NumericStats",
    "percentile",
    "build_fixed_histogram",
    "quantile_breakpoints",
    "find_bucket_index",
    "build_quantile_histogram",
    "collapse_histogram",
    "Aggregation",
    "StatsAggregation",
]
