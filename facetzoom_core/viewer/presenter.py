"""FacetZoom Tile Presenter - Per-Item Tile Summaries.

Coarse grains carry only the id and color; title and metrics appear at G2.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from facetzoom_core.facets.aggregations import NumericStats
from facetzoom_core.formatting import is_finite_number
from facetzoom_core.model.record import Record
from facetzoom_core.viewer.color import LegendTick, LinearColorScale
from facetzoom_core.viewer.zoom import Grain, SemanticZoomController

logger = logging.getLogger(__name__)


@dataclass
class TileSummary:
    """What a tile shows at a given width.

    Attributes:
        id: Record id
        grain: Detail level for the width
        title: Record title, G2 only
        metrics: Record metrics, G2 only
        color: Color for the configured metric, when it is a finite number
    """

    id: str
    grain: Grain
    title: Optional[str] = None
    metrics: Optional[Dict[str, Optional[float]]] = None
    color: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, leaving out absent fields."""
        data: Dict[str, Any] = {"id": self.id, "grain": self.grain.value}
        if self.title is not None:
            data["title"] = self.title
        if self.metrics is not None:
            data["metrics"] = dict(self.metrics)
        if self.color is not None:
            data["color"] = self.color
        return data


def color_domain_from_stats(
    stats: Optional[NumericStats],
    use_percentiles: bool = True,
) -> Optional[Tuple[float, float]]:
    """Color-scale domain for a stats result.

    The p01..p99 span is preferred so that outliers do not wash out the
    gradient.

    Returns:
        (low, high), or None when the span is empty
    """
    if stats is None:
        return None
    low, high = stats.min, stats.max
    if use_percentiles and stats.p01 is not None and stats.p99 is not None and stats.p01 < stats.p99:
        low, high = stats.p01, stats.p99
    if low == high:
        return None
    return low, high


class TilePresenter:
    """Builds tile summaries for records at a pixel width."""

    def __init__(
        self,
        zoom: SemanticZoomController,
        color_scale: LinearColorScale,
        color_field: str,
    ):
        """Initialize presenter.

        Args:
            zoom: Grain selection
            color_scale: Scale used for tile colors
            color_field: Metric whose value picks the color
        """
        self.zoom = zoom
        self.color_field = color_field
        self._scale = color_scale

    @property
    def color_scale(self) -> LinearColorScale:
        return self._scale

    def update_color_scale(self, color_scale: LinearColorScale) -> None:
        self._scale = color_scale
        logger.debug(f"Color scale for {self.color_field} set to domain {color_scale.domain}")

    def summarise_tile(self, width: float, item: Record) -> TileSummary:
        """Summary of one record at a given tile width.

        Args:
            width: Tile width in pixels
            item: Record to present

        Returns:
            Tile summary
        """
        grain = self.zoom.grain_for_width(width)
        value = item.metric(self.color_field)
        detailed = grain is Grain.G2
        return TileSummary(
            id=item.id,
            grain=grain,
            title=item.title if detailed else None,
            metrics=dict(item.metrics) if detailed and item.metrics is not None else None,
            color=self._scale.sample(value) if is_finite_number(value) else None,
        )

    def legend_labels(self, min_ticks: int = 3) -> List[LegendTick]:
        return self._scale.legend(min_ticks)


__all__ = ["TileSummary", "TilePresenter", "color_domain_from_stats"]
