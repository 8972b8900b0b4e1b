"""FacetZoom Facet Builder - Facet Value Counting.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from facetzoom_core.model.values import display_label, iter_scalars


@dataclass
class FacetCount:
    """A single facet value with count."""
    key: str
    count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "count": self.count}


@dataclass
class FacetResult:
    """Result of facet computation."""
    name: str
    values: List[FacetCount] = field(default_factory=list)
    total: int = 0
    missing: int = 0


class FacetBuilder:
    """Builds facet counts for one field.

    Entries of multi-valued facets are counted individually. Values whose
    labels match case-insensitively share one bucket (1 and "1", True and
    "true"), labelled with the spelling seen first.
    """

    def __init__(self, field: str):
        self.field = field
        self._counts: Dict[str, int] = {}
        self._labels: Dict[str, str] = {}
        self._missing = 0

    def add(self, value: Optional[Any]) -> None:
        if value is None:
            self._missing += 1
            return
        for entry in iter_scalars(value):
            label = display_label(entry)
            key = label.lower()
            if key not in self._labels:
                self._labels[key] = label
            self._counts[key] = self._counts.get(key, 0) + 1

    def build(self) -> FacetResult:
        values = [FacetCount(key=self._labels[k], count=c) for k, c in self._counts.items()]
        values.sort(key=lambda v: (-v.count, v.key))
        return FacetResult(
            name=self.field,
            values=values,
            total=sum(self._counts.values()),
            missing=self._missing,
        )


__all__ = ["FacetBuilder", "FacetCount", "FacetResult"]
