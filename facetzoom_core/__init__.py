"""FacetZoom - Faceted Data Exploration Toolkit.

In-memory filtering, facet counting and numeric aggregation over flat
records, plus the semantic-zoom tile presentation that consumes them.

Architecture:
┌─────────────────────────────────────────────────────────────────────┐
│                          FacetZoom Core                             │
├─────────────────────────────────────────────────────────────────────┤
│                                                                     │
│   Records ──▶ ┌────────────────────────────────────────────┐        │
│               │               Filter Engine                │        │
│               │  ┌────────────┐  ┌────────────┐  ┌───────┐ │        │
│               │  │ Filter Set │  │   Facet    │  │ Stats │ │        │
│               │  │ (per field)│  │  Builder   │  │ & Hist│ │        │
│               │  └────────────┘  └────────────┘  └───────┘ │        │
│               └────────────────────────────────────────────┘        │
│                                  │                                  │
│                                  ▼                                  │
│               ┌────────────────────────────────────────────┐        │
│               │                  Viewer                    │        │
│               │  ┌────────────┐  ┌────────────┐  ┌───────┐ │        │
│               │  │  Semantic  │  │   Linear   │  │ Tile  │ │        │
│               │  │    Zoom    │  │ Color Scale│  │Present│ │        │
│               │  └────────────┘  └────────────┘  └───────┘ │        │
│               └────────────────────────────────────────────┘        │
│                                                                     │
└─────────────────────────────────────────────────────────────────────┘

Key Features:
- Discrete (case-insensitive) and numeric/temporal range filters
- Facet counts that ignore the facet's own filter
- Min/max/percentiles and fixed-width histograms
- Quantile-adaptive histograms for skewed distributions
- Grain selection by tile width with crossfade plans
- Piecewise-linear color scales and legends

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

__version__ = "1.0.0"
__author__ = "BlackRoad OS"
__license__ = "Proprietary"

# Core engine
from facetzoom_core.engine import (
    FilterEngine,
    EngineConfig,
)

# Data model
from facetzoom_core.model.values import (
    FacetValue,
    ValueKind,
    canonical_key,
    coerce_number,
)
from facetzoom_core.model.record import (
    Record,
    collect_facet_keys,
    load_records,
)

# Facets and aggregations
from facetzoom_core.facets.builder import (
    FacetBuilder,
    FacetCount,
    FacetResult,
)
from facetzoom_core.facets.aggregations import (
    HistogramBin,
    NumericStats,
    StatsAggregation,
    build_fixed_histogram,
    build_quantile_histogram,
    percentile,
)

# Filters and query payloads
from facetzoom_core.query.filters import (
    FilterKind,
    RangeConstraint,
    ActiveFilter,
    FilterSet,
)
from facetzoom_core.query.payload import (
    parse_filters,
    prepare_engine,
    sort_records,
    paginate,
    Page,
)

# Viewer
from facetzoom_core.viewer.zoom import (
    Grain,
    ZoomConfig,
    TransitionPlan,
    SemanticZoomController,
)
from facetzoom_core.viewer.color import (
    GradientStop,
    LinearColorScale,
)
from facetzoom_core.viewer.presenter import (
    TileSummary,
    TilePresenter,
    color_domain_from_stats,
)

__all__ = [
    # Version
    "__version__",
    "__author__",
    "__license__",
    # Core
    "FilterEngine",
    "EngineConfig",
    # Model
    "FacetValue",
    "ValueKind",
    "canonical_key",
    "coerce_number",
    "Record",
    "collect_facet_keys",
    "load_records",
    # Facets
    "FacetBuilder",
    "FacetCount",
    "FacetResult",
    "HistogramBin",
    "NumericStats",
    "StatsAggregation",
    "build_fixed_histogram",
    "build_quantile_histogram",
    "percentile",
    # Query
    "FilterKind",
    "RangeConstraint",
    "ActiveFilter",
    "FilterSet",
    "parse_filters",
    "prepare_engine",
    "sort_records",
    "paginate",
    "Page",
    # Viewer
    "Grain",
    "ZoomConfig",
    "TransitionPlan",
    "SemanticZoomController",
    "GradientStop",
    "LinearColorScale",
    "TileSummary",
    "TilePresenter",
    "color_domain_from_stats",
]
