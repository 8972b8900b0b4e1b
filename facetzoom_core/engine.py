"""FacetZoom Core Engine - In-Memory Filtering and Aggregation.

The FilterEngine holds a record set and the active filters and answers
the exploration queries: filtered items, facet counts and numeric stats.
Every answer is recomputed from the current state on request.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from facetzoom_core.facets.aggregations import (
    HistogramBin,
    NumericStats,
    StatsAggregation,
    build_quantile_histogram,
)
from facetzoom_core.facets.builder import FacetBuilder, FacetCount
from facetzoom_core.model.record import Record, collect_facet_keys
from facetzoom_core.query.filters import (
    ActiveFilter,
    DiscretePredicate,
    FilterKind,
    FilterSet,
    Predicate,
    RangeConstraint,
    RangePredicate,
)

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    """Filter engine configuration.

    Attributes:
        histogram_bins: Default bucket count for numeric stats histograms
        low_percentile: Ratio reported as p01
        high_percentile: Ratio reported as p99
        min_percentile_sample: Smallest sample size that gets percentiles
        quantile_bins: Default bucket count for adaptive histograms
    """

    histogram_bins: int = 24
    low_percentile: float = 0.01
    high_percentile: float = 0.99
    min_percentile_sample: int = 4
    quantile_bins: int = 10

    def __post_init__(self):
        """Validate settings."""
        if self.histogram_bins < 1:
            raise ValueError(f"histogram_bins must be positive, got {self.histogram_bins}")
        if self.quantile_bins < 1:
            raise ValueError(f"quantile_bins must be positive, got {self.quantile_bins}")
        if not 0.0 <= self.low_percentile <= self.high_percentile <= 1.0:
            raise ValueError(
                "Percentile ratios must satisfy 0 <= low_percentile <= high_percentile <= 1"
            )


class FilterEngine:
    """Filtering and aggregation over an in-memory record set.

    Filters combine with AND across fields; a multi-valued field passes
    when any of its entries matches. The engine is not synchronized:
    callers sharing one instance across threads must serialize mutations.
    """

    def __init__(
        self,
        records: Optional[Iterable[Record]] = None,
        config: Optional[EngineConfig] = None,
    ):
        """Initialize engine.

        Args:
            records: Initial record set
            config: Engine configuration
        """
        self.config = config or EngineConfig()
        self._source: Tuple[Record, ...] = ()
        self._filters = FilterSet()
        if records is not None:
            self.load(records)

    def load(self, records: Iterable[Record]) -> None:
        """Replace the record set. Active filters are kept.

        Args:
            records: New record set
        """
        self._source = tuple(records)
        logger.info(f"Loaded {len(self._source)} records")

    def clear(self) -> None:
        """Drop all records and all filters."""
        self._source = ()
        self._filters.clear()
        logger.debug("Cleared records and filters")

    @property
    def source(self) -> Tuple[Record, ...]:
        """The unfiltered record set."""
        return self._source

    def __len__(self) -> int:
        """Return number of records."""
        return len(self._source)

    def apply_filter(
        self,
        field: str,
        predicate: Predicate,
        kind: FilterKind = FilterKind.CUSTOM,
    ) -> None:
        """Install a predicate on a field, replacing any existing filter.

        Args:
            field: Field name
            predicate: Called with the record's facet value and the record
            kind: Filter kind reported by listings
        """
        self._filters.set(ActiveFilter(field=field, kind=kind, predicate=predicate))

    def apply_discrete_filter(self, field: str, allowed_values: Iterable[Any]) -> None:
        """Keep records whose facet value intersects the allowed values.

        Strings match case-insensitively and timestamps by instant.

        Args:
            field: Facet name
            allowed_values: Strings, numbers, booleans or datetimes

        Raises:
            TypeError: If an allowed value has an unsupported type
        """
        self.apply_filter(field, DiscretePredicate(allowed_values), FilterKind.DISCRETE)

    def apply_range_filter(
        self,
        field: str,
        constraint: Union[RangeConstraint, Mapping[str, Any]],
    ) -> None:
        """Keep records with at least one value inside the range.

        Args:
            field: Facet or metric name
            constraint: RangeConstraint or a {min, max, inclusive} mapping
        """
        if not isinstance(constraint, RangeConstraint):
            constraint = RangeConstraint.from_dict(dict(constraint))
        self.apply_filter(field, RangePredicate(constraint), FilterKind.RANGE)

    def remove_filter(self, field: str) -> bool:
        """Remove the filter on a field.

        Returns:
            True if a filter was removed
        """
        return self._filters.remove(field)

    def list_active_filters(self) -> List[str]:
        """Names of filtered fields, in the order they were first applied."""
        return self._filters.fields()

    def active_filters(self) -> List[ActiveFilter]:
        """Active filters, in the order they were first applied."""
        return list(self._filters)

    def _apply_filters(self, skip_field: Optional[str] = None) -> List[Record]:
        """Records passing every filter except the one on ``skip_field``."""
        if not self._filters or (len(self._filters) == 1 and skip_field in self._filters):
            return list(self._source)
        return [
            record for record in self._source
            if self._filters.matches(record, skip_field=skip_field)
        ]

    def get_filtered_items(self) -> List[Record]:
        """Records passing all active filters, in source order.

        Returns:
            A new list on every call
        """
        items = self._apply_filters()
        logger.debug(f"{len(items)} of {len(self._source)} records pass {len(self._filters)} filters")
        return items

    def get_facet_counts(self, field: str) -> List[FacetCount]:
        """Value counts for a facet, ignoring that facet's own filter.

        Other active filters still apply, so a facet shows how many records
        each of its values would select given the rest of the selection.

        Args:
            field: Facet name

        Returns:
            Counts by descending count, ties by ascending key
        """
        builder = FacetBuilder(field)
        for record in self._apply_filters(skip_field=field):
            value = record.facets.get(field)
            if value is not None:
                builder.add(value)
        return builder.build().values

    def get_facet_overview(self) -> Dict[str, List[FacetCount]]:
        """Facet counts for every facet present in the filtered records.

        Facet names come from the full record set when nothing passes.
        """
        filtered = self._apply_filters()
        keys = collect_facet_keys(filtered if filtered else self._source)
        return {key: self.get_facet_counts(key) for key in keys}

    def _numeric_values(self, records: Iterable[Record], field: str) -> List[float]:
        values = []
        for record in records:
            numeric = record.numeric_value(field)
            if numeric is not None:
                values.append(numeric)
        return values

    def get_numeric_stats(
        self,
        field: str,
        include_percentiles: bool = False,
        histogram_bins: Optional[int] = None,
    ) -> Optional[NumericStats]:
        """Statistics for a numeric field over the filtered records.

        Args:
            field: Metric or facet name
            include_percentiles: Add p01/p99 when the sample is large enough
            histogram_bins: Bucket count, defaults to config.histogram_bins

        Returns:
            Stats, or None when no filtered record yields a number
        """
        aggregation = StatsAggregation(name=f"{field}_stats", field=field)
        for value in self._numeric_values(self._apply_filters(), field):
            aggregation.add(value)
        return aggregation.result(
            include_percentiles=include_percentiles,
            histogram_bins=histogram_bins if histogram_bins is not None else self.config.histogram_bins,
            low_percentile=self.config.low_percentile,
            high_percentile=self.config.high_percentile,
            min_percentile_sample=self.config.min_percentile_sample,
        )

    def get_quantile_histogram(
        self,
        field: str,
        bins: Optional[int] = None,
        bounds: Optional[Tuple[float, float]] = None,
    ) -> List[HistogramBin]:
        """Adaptive histogram of the filtered records on full-dataset edges.

        Bucket edges are quantiles of the unfiltered record set, counts come
        from the filtered records, so the buckets stay put while filters change.

        Args:
            field: Metric or facet name
            bins: Desired bucket count, defaults to config.quantile_bins
            bounds: Optional (min, max) overriding the domain extremes

        Returns:
            Buckets, empty when no record yields a number
        """
        return build_quantile_histogram(
            self._numeric_values(self._source, field),
            self._numeric_values(self._apply_filters(), field),
            bins=bins if bins is not None else self.config.quantile_bins,
            bounds=bounds,
        )


__all__ = ["FilterEngine", "EngineConfig"]
