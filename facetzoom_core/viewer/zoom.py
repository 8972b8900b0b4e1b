"""FacetZoom Semantic Zoom - Detail Grain Selection by Tile Width.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Grain(Enum):
    """Detail levels, coarsest first."""

    G0 = "G0"
    G1 = "G1"
    G2 = "G2"

    @property
    def rank(self) -> int:
        return _GRAIN_ORDER.index(self)

    def __lt__(self, other: "Grain") -> bool:
        if not isinstance(other, Grain):
            return NotImplemented
        return self.rank < other.rank


_GRAIN_ORDER = (Grain.G0, Grain.G1, Grain.G2)


@dataclass
class ZoomConfig:
    """Semantic zoom configuration.

    Attributes:
        g0_max: Widest tile (px) still drawn at G0
        g1_max: Widest tile (px) still drawn at G1
        crossfade_ms: Duration of a grain change transition
    """

    g0_max: float = 64
    g1_max: float = 160
    crossfade_ms: float = 180


@dataclass(frozen=True)
class TransitionPlan:
    """Crossfade between two grains."""

    from_grain: Grain
    to_grain: Grain
    duration: float

    def to_dict(self) -> Dict[str, Any]:
        return {"from": self.from_grain.value, "to": self.to_grain.value, "duration": self.duration}


class SemanticZoomController:
    """Maps on-screen tile width to a grain.

    Widths up to ``g0_max`` are G0, up to ``g1_max`` G1, anything wider G2.
    """

    def __init__(self, g0_max: float = 64, g1_max: float = 160, crossfade_ms: float = 180):
        """Initialize controller.

        Raises:
            ValueError: If g0_max is not positive or g1_max does not exceed it
        """
        if g0_max <= 0 or g1_max <= g0_max:
            raise ValueError(
                f"Invalid semantic zoom thresholds: g0_max={g0_max}, g1_max={g1_max}"
            )
        self.g0_max = g0_max
        self.g1_max = g1_max
        self.crossfade_ms = crossfade_ms

    @classmethod
    def from_config(cls, config: ZoomConfig) -> "SemanticZoomController":
        return cls(config.g0_max, config.g1_max, config.crossfade_ms)

    def grain_for_width(self, width: float) -> Grain:
        if width <= self.g0_max:
            return Grain.G0
        if width <= self.g1_max:
            return Grain.G1
        return Grain.G2

    def transition_plan(self, previous_width: float, next_width: float) -> Optional[TransitionPlan]:
        """Crossfade needed when a tile resizes, None if the grain is unchanged."""
        source = self.grain_for_width(previous_width)
        target = self.grain_for_width(next_width)
        if source is target:
            return None
        return TransitionPlan(from_grain=source, to_grain=target, duration=self.crossfade_ms)


__all__ = ["Grain", "ZoomConfig", "TransitionPlan", "SemanticZoomController"]
