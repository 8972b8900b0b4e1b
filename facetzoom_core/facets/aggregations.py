"""FacetZoom Aggregations - Numeric Statistics and Histograms.

Fixed-width histograms back the engine's numeric stats; quantile histograms
place bucket edges where the data is, which keeps skewed distributions from
collapsing into a few crowded buckets.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import bisect
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple


@dataclass
class HistogramBin:
    """A histogram bucket.

    The upper bound is exclusive except for the last bucket of a histogram.
    """

    start: float
    end: float
    count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self.start, "end": self.end, "count": self.count}


@dataclass
class NumericStats:
    """Statistics for a numeric field over the filtered records.

    Attributes:
        field: Field name
        min: Smallest value
        max: Largest value
        count: Number of records that yielded a value
        p01: 1st percentile (only for samples larger than 3)
        p99: 99th percentile (only for samples larger than 3)
        histogram: Fixed-width buckets over [min, max]
    """

    field: str
    min: float
    max: float
    count: int
    p01: Optional[float] = None
    p99: Optional[float] = None
    histogram: Optional[List[HistogramBin]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, leaving out absent optional parts."""
        data: Dict[str, Any] = {
            "field": self.field,
            "min": self.min,
            "max": self.max,
            "count": self.count,
        }
        if self.p01 is not None:
            data["p01"] = self.p01
        if self.p99 is not None:
            data["p99"] = self.p99
        if self.histogram is not None:
            data["histogram"] = [b.to_dict() for b in self.histogram]
        return data


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def percentile(sorted_values: Sequence[float], ratio: float) -> float:
    """Linear-interpolated percentile of an ascending sequence.

    Args:
        sorted_values: Values in ascending order
        ratio: Percentile as a fraction (0.01 for the 1st percentile)

    Returns:
        Interpolated value, NaN for an empty sequence
    """
    if not sorted_values:
        return math.nan
    rank = ratio * (len(sorted_values) - 1)
    lower = math.floor(rank)
    upper = math.ceil(rank)
    if lower == upper:
        return sorted_values[lower]
    weight = rank - lower
    below = sorted_values[lower]
    above = sorted_values[upper]
    return min(max(below + (above - below) * weight, below), above)


def build_fixed_histogram(
    sorted_values: Sequence[float],
    bins: int,
) -> Optional[List[HistogramBin]]:
    """Equal-width histogram over [min, max] of an ascending sequence.

    Returns:
        Buckets, a single bucket when all values are equal, or None when no
        bucket can be built (no bins, no values, non-finite extremes)
    """
    if bins is None or not math.isfinite(bins) or not sorted_values:
        return None
    bin_count = max(1, math.floor(bins))
    low = sorted_values[0]
    high = sorted_values[-1]
    if not (math.isfinite(low) and math.isfinite(high)):
        return None
    if low == high:
        return [HistogramBin(start=low, end=high, count=len(sorted_values))]

    span = high - low
    width = span / bin_count
    histogram = [
        HistogramBin(
            start=low + width * index,
            end=high if index == bin_count - 1 else low + width * (index + 1),
        )
        for index in range(bin_count)
    ]
    for value in sorted_values:
        slot = math.floor((value - low) / span * bin_count)
        histogram[min(bin_count - 1, max(0, slot))].count += 1
    return histogram


def quantile_breakpoints(
    sorted_values: Sequence[float],
    bins: int,
    lower: float,
    upper: float,
) -> List[float]:
    """Bucket edges at empirical quantiles of an ascending sample.

    Edge ``i`` sits at sorted index ``round(i / bins * (n - 1))``. An edge
    that does not exceed its predecessor moves to the next float above it.
    Interior edges that would reach ``upper`` are dropped so the last bucket
    still ends at ``upper``.

    Returns:
        Strictly increasing edges starting at ``lower`` and ending at ``upper``
    """
    total = len(sorted_values)
    if total == 0:
        return [lower, upper]
    k = max(1, int(bins))
    edges = [lower]
    for i in range(1, k):
        index = min(total - 1, _round_half_up(i / k * (total - 1)))
        value = sorted_values[index]
        last = edges[-1]
        if value <= last:
            value = math.nextafter(last, math.inf)
        if value >= upper:
            break
        edges.append(value)
    edges.append(upper)
    return edges


def find_bucket_index(value: float, buckets: Sequence[HistogramBin]) -> Optional[int]:
    """Index of the bucket holding ``value``, or None when outside all buckets."""
    if not buckets:
        return None
    starts = [b.start for b in buckets]
    index = bisect.bisect_right(starts, value) - 1
    if index < 0:
        return None
    bucket = buckets[index]
    if index == len(buckets) - 1:
        return index if value <= bucket.end else None
    return index if value < bucket.end else None


def build_quantile_histogram(
    domain_values: Iterable[float],
    count_values: Optional[Iterable[float]] = None,
    bins: int = 10,
    bounds: Optional[Tuple[float, float]] = None,
) -> List[HistogramBin]:
    """Quantile-adaptive histogram.

    Edges come from ``domain_values``; counts come from ``count_values``
    (the domain sample itself when omitted), so a filtered subset can be
    drawn against the edges of the full dataset.

    Args:
        domain_values: Sample establishing bucket edges
        count_values: Sample populating bucket counts
        bins: Desired bucket count
        bounds: Optional (min, max) overriding the domain extremes

    Returns:
        Contiguous buckets covering [min, max]; empty for an empty domain
    """
    domain = sorted(domain_values)
    if not domain:
        return []
    counted = list(count_values) if count_values is not None else domain
    lower, upper = bounds if bounds is not None else (domain[0], domain[-1])
    if not (math.isfinite(lower) and math.isfinite(upper)):
        return []
    if lower > upper:
        raise ValueError(f"Histogram bounds out of order: {lower} > {upper}")
    if lower == upper:
        return [HistogramBin(start=lower, end=upper, count=len(counted))]

    edges = quantile_breakpoints(domain, bins, lower, upper)
    buckets = [HistogramBin(start=a, end=b) for a, b in zip(edges, edges[1:])]
    for value in counted:
        index = find_bucket_index(value, buckets)
        if index is not None:
            buckets[index].count += 1
    return buckets


def collapse_histogram(bins: Sequence[HistogramBin], max_bins: int) -> List[Tuple[float, float]]:
    """Merge adjacent buckets so that at most ``max_bins`` ranges remain."""
    if not bins:
        return []
    if len(bins) <= max_bins:
        return [(b.start, b.end) for b in bins]
    factor = math.ceil(len(bins) / max_bins)
    return [
        (bins[i].start, bins[min(i + factor, len(bins)) - 1].end)
        for i in range(0, len(bins), factor)
    ]


class Aggregation(ABC):
    """Base aggregation class."""

    def __init__(self, name: str, field: str):
        self.name = name
        self.field = field

    @abstractmethod
    def add(self, value: Any) -> None:
        pass

    @abstractmethod
    def result(self) -> Any:
        pass


class StatsAggregation(Aggregation):
    """Min/max/count, percentiles and a fixed-width histogram for one field."""

    def __init__(self, name: str, field: str):
        super().__init__(name, field)
        self._values: List[float] = []

    def add(self, value: Any) -> None:
        if value is not None:
            self._values.append(value)

    @property
    def count(self) -> int:
        return len(self._values)

    def result(
        self,
        include_percentiles: bool = False,
        histogram_bins: int = 24,
        low_percentile: float = 0.01,
        high_percentile: float = 0.99,
        min_percentile_sample: int = 4,
    ) -> Optional[NumericStats]:
        """Build the stats, or None when no value was added."""
        if not self._values:
            return None
        values = sorted(self._values)
        stats = NumericStats(
            field=self.field,
            min=values[0],
            max=values[-1],
            count=len(values),
            histogram=build_fixed_histogram(values, histogram_bins),
        )
        if include_percentiles and len(values) >= min_percentile_sample:
            stats.p01 = percentile(values, low_percentile)
            stats.p99 = percentile(values, high_percentile)
        return stats


__all__ = [
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
