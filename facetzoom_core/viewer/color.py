"""FacetZoom Color Scale - Linear Gradient Mapping of Numbers to Colors.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from facetzoom_core.formatting import format_legend_label

HEX_COLOR = re.compile(r"^#([0-9a-f]{3}|[0-9a-f]{6})$", re.IGNORECASE)

RGB = Tuple[float, float, float]


@dataclass(frozen=True)
class GradientStop:
    """A color at a normalized position in [0, 1]."""
    position: float
    color: str


@dataclass(frozen=True)
class LegendTick:
    value: float
    label: str


DEFAULT_STOPS: Tuple[GradientStop, ...] = (
    GradientStop(0.0, "#1d4ed8"),
    GradientStop(0.5, "#a855f7"),
    GradientStop(1.0, "#f59e0b"),
)


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """Parse ``#rgb`` or ``#rrggbb``.

    Raises:
        ValueError: On any other format
    """
    match = HEX_COLOR.match(color)
    if not match:
        raise ValueError(f"Unsupported color format: {color}")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    value = int(digits, 16)
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


class LinearColorScale:
    """Maps a numeric domain onto a piecewise-linear RGB gradient.

    Values outside the domain clamp to the nearest end. With ``reverse`` the
    gradient runs from the last stop to the first.
    """

    def __init__(
        self,
        domain: Tuple[float, float],
        stops: Optional[Sequence[GradientStop]] = None,
        reverse: bool = False,
    ):
        """Initialize scale.

        Args:
            domain: (start, end) of the value range, in either order
            stops: Gradient stops covering exactly [0, 1]
            reverse: Flip the gradient

        Raises:
            ValueError: On an empty domain, stops not spanning [0, 1] or bad colors
        """
        low, high = domain
        if low == high:
            raise ValueError("Color scale domain requires a non-zero range")
        self.domain = (low, high) if low < high else (high, low)
        self.reverse = reverse
        ordered = sorted(stops if stops is not None else DEFAULT_STOPS, key=lambda s: s.position)
        if not ordered or ordered[0].position != 0 or ordered[-1].position != 1:
            raise ValueError("Gradient stops must start at 0 and end at 1")
        self._stops: List[GradientStop] = ordered
        self._rgb: List[Tuple[int, int, int]] = [hex_to_rgb(s.color) for s in ordered]

    @property
    def stops(self) -> List[GradientStop]:
        return list(self._stops)

    def _neighbours(self, position: float) -> Tuple[int, int]:
        for index in range(len(self._stops) - 1):
            if self._stops[index].position <= position <= self._stops[index + 1].position:
                return index, index + 1
        return 0, len(self._stops) - 1

    def sample(self, value: float) -> str:
        """Color for a value as ``rgb(r, g, b)``.

        Raises:
            ValueError: If the value is NaN
        """
        if math.isnan(value):
            raise ValueError("Cannot sample a color for NaN")
        low, high = self.domain
        clamped = min(max((value - low) / (high - low), 0.0), 1.0)
        normalized = 1.0 - clamped if self.reverse else clamped
        left, right = self._neighbours(normalized)
        span = self._stops[right].position - self._stops[left].position
        local = 0.0 if span == 0 else (normalized - self._stops[left].position) / span
        channels = [
            _round_half_up(_lerp(a, b, local))
            for a, b in zip(self._rgb[left], self._rgb[right])
        ]
        return f"rgb({channels[0]}, {channels[1]}, {channels[2]})"

    def legend(self, min_ticks: int = 3) -> List[LegendTick]:
        """Evenly spaced ticks across the domain, at least two."""
        low, high = self.domain
        ticks = max(2, min_ticks)
        step = (high - low) / (ticks - 1)
        return [
            LegendTick(value=low + step * index, label=format_legend_label(low + step * index))
            for index in range(ticks)
        ]


__all__ = ["GradientStop", "LegendTick", "DEFAULT_STOPS", "hex_to_rgb", "LinearColorScale"]
