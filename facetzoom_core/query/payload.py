"""FacetZoom Query Payloads - Decoding Client Query Parameters.

Helpers for a query surface that passes filters as a JSON array of
``{field, type: discrete|range, values|range}``, a ``field:asc|desc`` sort
spec and an opaque pagination cursor. Malformed input never raises: it is
logged and treated as absent.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import base64
import json
import logging
from dataclasses import dataclass, field
from typing import Annotated, Any, Iterable, List, Literal, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr
from pydantic import TypeAdapter, ValidationError

from facetzoom_core.engine import EngineConfig, FilterEngine
from facetzoom_core.formatting import is_finite_number
from facetzoom_core.model.record import Record
from facetzoom_core.query.filters import RangeConstraint

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 40
MAX_PAGE_SIZE = 100
DEFAULT_STATS_BINS = 40


class RangeSpec(BaseModel):
    """Bounds of a range filter payload."""

    model_config = ConfigDict(extra="forbid")

    min: Optional[float] = None
    max: Optional[float] = None


class DiscreteFilterSpec(BaseModel):
    """Discrete-membership filter payload."""

    field: StrictStr
    type: Literal["discrete"]
    values: List[Union[StrictStr, StrictBool, StrictInt, StrictFloat]]


class RangeFilterSpec(BaseModel):
    """Range filter payload."""

    field: StrictStr
    type: Literal["range"]
    range: RangeSpec


FilterSpec = Annotated[Union[DiscreteFilterSpec, RangeFilterSpec], Field(discriminator="type")]

_FILTERS_ADAPTER = TypeAdapter(List[FilterSpec])


def parse_filters(raw: Any) -> List[Union[DiscreteFilterSpec, RangeFilterSpec]]:
    """Decode a filter payload.

    Args:
        raw: JSON text, or an already decoded list

    Returns:
        Validated filter specs; an empty list for missing or malformed input
    """
    if raw is None:
        return []
    if isinstance(raw, (str, bytes)):
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse filters: {e}")
            return []
    else:
        payload = raw
    if not isinstance(payload, list):
        logger.warning(f"Ignoring filter payload of type {type(payload).__name__}, expected a list")
        return []
    try:
        return _FILTERS_ADAPTER.validate_python(payload)
    except ValidationError as e:
        details = "; ".join(err.get("msg", "") for err in e.errors())
        logger.warning(f"Invalid filter payload: {details}")
        return []


def apply_filter_specs(
    engine: FilterEngine,
    specs: Iterable[Union[DiscreteFilterSpec, RangeFilterSpec]],
) -> None:
    """Install decoded filters on an engine."""
    for spec in specs:
        if isinstance(spec, RangeFilterSpec):
            engine.apply_range_filter(
                spec.field,
                RangeConstraint(min=spec.range.min, max=spec.range.max),
            )
        else:
            engine.apply_discrete_filter(spec.field, spec.values)


def prepare_engine(
    records: Iterable[Record],
    raw_filters: Any = None,
    config: Optional[EngineConfig] = None,
) -> FilterEngine:
    """Fresh engine over ``records`` with the decoded filters applied."""
    engine = FilterEngine(records, config=config)
    apply_filter_specs(engine, parse_filters(raw_filters))
    return engine


@dataclass(frozen=True)
class SortSpec:
    """Parsed ``field:asc|desc`` sort specification."""

    field: str
    descending: bool = False

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["SortSpec"]:
        """Parse a sort spec; blank or missing input gives None."""
        if not isinstance(raw, str) or not raw.strip():
            return None
        name, _, direction = raw.strip().partition(":")
        return cls(field=name, descending=direction.strip().lower() == "desc")


def sortable_value(record: Record, field_name: str) -> Tuple[int, Union[float, str]]:
    """Sort key for a record: numbers order before strings.

    The metric wins over the facet; records with neither sort by id.
    """
    metric = record.metric(field_name)
    if is_finite_number(metric):
        return 0, metric
    facet = record.facet(field_name)
    if is_finite_number(facet):
        return 0, facet
    if isinstance(facet, str):
        return 1, facet.lower()
    return 1, record.id.lower()


def sort_records(records: Sequence[Record], raw_sort: Optional[str] = None) -> List[Record]:
    """Sort records by a ``field:asc|desc`` spec, by id when none is given."""
    spec = SortSpec.parse(raw_sort)
    if spec is None:
        return sorted(records, key=lambda r: r.id)
    return sorted(
        records,
        key=lambda r: sortable_value(r, spec.field),
        reverse=spec.descending,
    )


def encode_cursor(offset: int) -> str:
    """Opaque cursor for a numeric offset (unpadded base64url)."""
    return base64.urlsafe_b64encode(str(offset).encode("utf-8")).decode("ascii").rstrip("=")


def decode_cursor(cursor: Optional[str]) -> int:
    """Offset encoded in a cursor; 0 for a missing or malformed cursor."""
    if not cursor:
        return 0
    padded = cursor + "=" * (-len(cursor) % 4)
    try:
        offset = int(base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8"))
    except ValueError as e:
        logger.warning(f"Ignoring malformed cursor {cursor!r}: {e}")
        return 0
    return max(0, offset)


def parse_limit(raw: Any, default: int = DEFAULT_PAGE_SIZE) -> int:
    """Page size clamped to 1..MAX_PAGE_SIZE."""
    if raw is None:
        return default
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring malformed page size {raw!r}")
        return default
    return max(1, min(MAX_PAGE_SIZE, limit))


def parse_histogram_bins(raw: Any, default: int = DEFAULT_STATS_BINS) -> int:
    """Requested bucket count, or ``default`` unless a positive integer is given."""
    if raw is None:
        return default
    try:
        bins = int(raw)
    except (TypeError, ValueError):
        return default
    return bins if bins > 0 else default


@dataclass
class Page:
    """A page of records.

    Attributes:
        items: Records on this page
        next_cursor: Cursor for the following page, None on the last page
        total: Number of records across all pages
    """

    items: List[Record] = field(default_factory=list)
    next_cursor: Optional[str] = None
    total: int = 0


def paginate(records: Sequence[Record], cursor: Optional[str] = None, limit: Any = None) -> Page:
    """Slice one page out of ``records``."""
    offset = decode_cursor(cursor)
    size = parse_limit(limit)
    items = list(records[offset:offset + size])
    next_offset = offset + len(items)
    return Page(
        items=items,
        next_cursor=encode_cursor(next_offset) if next_offset < len(records) else None,
        total=len(records),
    )


__all__ = [
    "RangeSpec",
    "DiscreteFilterSpec",
    "RangeFilterSpec",
    "FilterSpec",
    "parse_filters",
    "apply_filter_specs",
    "prepare_engine",
    "SortSpec",
    "sortable_value",
    "sort_records",
    "encode_cursor",
    "decode_cursor",
    "parse_limit",
    "parse_histogram_bins",
    "Page",
    "paginate",
]
