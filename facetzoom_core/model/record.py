"""FacetZoom Record - Explorable Item Records.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from facetzoom_core.formatting import is_finite_number, parse_iso_timestamp, to_iso
from facetzoom_core.model.values import FacetValue, coerce_number, iter_scalars

logger = logging.getLogger(__name__)

DEFAULT_DATE_FIELDS = ("Added",)


@dataclass
class Record:
    """A single explorable item.

    Attributes:
        id: Unique record identifier
        facets: Categorical attributes, possibly multi-valued
        title: Display title
        metrics: Numeric attributes
        image: Optional image references (thumb, dzi)
    """

    id: str
    facets: Dict[str, Optional[FacetValue]] = field(default_factory=dict)
    title: Optional[str] = None
    metrics: Optional[Dict[str, Optional[float]]] = None
    image: Optional[Dict[str, str]] = None

    def facet(self, field_name: str) -> Optional[FacetValue]:
        """Get facet value."""
        return self.facets.get(field_name)

    def metric(self, field_name: str) -> Optional[float]:
        """Get metric value."""
        if not self.metrics:
            return None
        return self.metrics.get(field_name)

    def numeric_value(self, field_name: str) -> Optional[float]:
        """Read a number for a field.

        A finite metric wins; otherwise the first facet entry that coerces
        to a number is used.

        Args:
            field_name: Metric or facet name

        Returns:
            The number, or None if the record has none for this field
        """
        metric = self.metric(field_name)
        if is_finite_number(metric):
            return metric
        for entry in iter_scalars(self.facet(field_name)):
            numeric = coerce_number(entry)
            if numeric is not None:
                return numeric
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        facets: Dict[str, Any] = {}
        for name, value in self.facets.items():
            if isinstance(value, datetime):
                facets[name] = to_iso(value)
            elif isinstance(value, (list, tuple)):
                facets[name] = [to_iso(v) if isinstance(v, datetime) else v for v in value]
            else:
                facets[name] = value
        data: Dict[str, Any] = {"id": self.id, "facets": facets}
        if self.title is not None:
            data["title"] = self.title
        if self.metrics is not None:
            data["metrics"] = dict(self.metrics)
        if self.image is not None:
            data["image"] = dict(self.image)
        return data

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        date_fields: Sequence[str] = DEFAULT_DATE_FIELDS,
    ) -> "Record":
        """Create from dictionary.

        Args:
            data: Record payload
            date_fields: Facets holding ISO date strings to parse into datetimes

        Returns:
            Record instance
        """
        facets = dict(data.get("facets") or {})
        for name in date_fields:
            raw = facets.get(name)
            if isinstance(raw, str):
                facets[name] = parse_iso_timestamp(raw)
        return cls(
            id=str(data["id"]),
            facets=facets,
            title=data.get("title"),
            metrics=data.get("metrics"),
            image=data.get("image"),
        )


def collect_facet_keys(records: Iterable[Record]) -> List[str]:
    """Sorted union of facet names across records."""
    keys = set()
    for record in records:
        keys.update(record.facets.keys())
    return sorted(keys)


def load_records(
    path: str,
    date_fields: Sequence[str] = DEFAULT_DATE_FIELDS,
) -> List[Record]:
    """Load records from a JSON array on disk.

    Args:
        path: Path to the JSON file
        date_fields: Facets holding ISO date strings

    Returns:
        Parsed records
    """
    with open(os.fspath(path), "r", encoding="utf-8") as f:
        payload = json.load(f)
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array of records in {path}")
    records = [Record.from_dict(item, date_fields=date_fields) for item in payload]
    logger.info(f"Loaded {len(records)} records from {path}")
    return records


__all__ = ["Record", "collect_facet_keys", "load_records", "DEFAULT_DATE_FIELDS"]
