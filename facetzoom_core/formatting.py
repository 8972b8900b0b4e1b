"""FacetZoom Formatting - Shared Number and Timestamp Helpers.

Number parsing is used by the engine's numeric coercion and number
formatting by the viewer, so both sides read and print values the same way.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Callable, Optional

MISSING_LABEL = "n/a"


def is_finite_number(value: Any) -> bool:
    """Return True for int/float values that are finite (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def parse_number(text: str) -> Optional[float]:
    """Strictly parse a numeric string.

    Surrounding whitespace is ignored. Empty strings, strings with trailing
    garbage, NaN and infinities yield None.
    """
    stripped = text.strip()
    if not stripped:
        return None
    try:
        value = float(stripped)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso(dt: datetime) -> str:
    """Format an instant as ISO-8601 UTC with millisecond precision.

    Naive datetimes are taken to be UTC already.
    """
    utc = _as_utc(dt)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def epoch_ms(dt: datetime) -> float:
    """Milliseconds since the Unix epoch."""
    return _as_utc(dt).timestamp() * 1000.0


def from_epoch_ms(ms: float) -> datetime:
    return datetime.fromtimestamp(ms / 1000.0, tz=timezone.utc)


def parse_iso_timestamp(text: str) -> datetime:
    """Parse an ISO-8601 date or datetime string into an aware datetime.

    Raises:
        ValueError: If the text is not ISO-8601
    """
    stripped = text.strip()
    if stripped.endswith(("Z", "z")):
        stripped = stripped[:-1] + "+00:00"
    return _as_utc(datetime.fromisoformat(stripped))


def format_number(value: float) -> str:
    """Compact display with K/M/B suffixes."""
    if not is_finite_number(value):
        return MISSING_LABEL
    magnitude = abs(value)
    if magnitude >= 1_000_000_000:
        return f"{value / 1_000_000_000:.1f}B"
    if magnitude >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if magnitude >= 1_000:
        return f"{value / 1_000:.1f}K"
    return f"{value:.2f}"


def format_percent(value: float) -> str:
    if not is_finite_number(value):
        return MISSING_LABEL
    magnitude = abs(value)
    precision = 2 if magnitude < 1 else 1 if magnitude < 10 else 0
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.{precision}f}%"


def format_currency(value: float) -> str:
    if not is_finite_number(value):
        return MISSING_LABEL
    magnitude = abs(value)
    precision = 2 if magnitude < 100 else 1 if magnitude < 1000 else 0
    return f"${value:.{precision}f}"


def format_plain(value: float, max_fraction_digits: int = 2) -> str:
    """Fixed-point with trailing zeros removed (10.50 -> "10.5", 15.0 -> "15")."""
    text = f"{value:.{max_fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def format_legend_label(value: float) -> str:
    """Label for a color-legend tick.

    Very large or very small magnitudes switch to exponential notation.
    """
    if not is_finite_number(value):
        return MISSING_LABEL
    if abs(value) >= 1000 or abs(value) < 0.01:
        return f"{value:.2e}"
    return format_plain(value)


def format_bucket_label(
    start: float,
    end: float,
    formatter: Callable[[float], str] = format_number,
) -> str:
    return f"{formatter(start)} - {formatter(end)}"


__all__ = [
    "MISSING_LABEL",
    "is_finite_number",
    "parse_number",
    "to_iso",
    "epoch_ms",
    "from_epoch_ms",
    "parse_iso_timestamp",
    "format_number",
    "format_percent",
    "format_currency",
    "format_plain",
    "format_legend_label",
    "format_bucket_label",
]
