"""FacetZoom Viewer Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from facetzoom_core.viewer.zoom import (
    Grain,
    ZoomConfig,
    TransitionPlan,
    SemanticZoomController,
)
from facetzoom_core.viewer.color import (
    GradientStop,
    LegendTick,
    DEFAULT_STOPS,
    hex_to_rgb,
    LinearColorScale,
)
from facetzoom_core.viewer.presenter import (
    TileSummary,
    TilePresenter,
    color_domain_from_stats,
)

__all__ = [
    "Grain",
    "ZoomConfig",
    "TransitionPlan",
    "SemanticZoomController",
    "GradientStop",
    "LegendTick",
    "DEFAULT_STOPS",
    "hex_to_rgb",
    "LinearColorScale",
    "TileSummary",
    "TilePresenter",
    "color_domain_from_stats",
]
