"""Tests for facet value coercion, records and formatting helpers."""

import json
import math
from datetime import datetime, timedelta, timezone

import pytest

from facetzoom_core.formatting import (
    epoch_ms,
    format_bucket_label,
    format_currency,
    format_legend_label,
    format_number,
    format_percent,
    format_plain,
    from_epoch_ms,
    parse_iso_timestamp,
    parse_number,
    to_iso,
)
from facetzoom_core.model.record import Record, collect_facet_keys, load_records
from facetzoom_core.model.values import (
    ValueKind,
    canonical_key,
    coerce_number,
    display_label,
    iter_scalars,
    kind_of,
)


class TestValueKinds:
    def test_bool_is_not_a_number(self):
        assert kind_of(True) is ValueKind.BOOLEAN
        assert kind_of(1) is ValueKind.NUMBER
        assert kind_of(None) is None

    def test_iter_scalars(self):
        assert iter_scalars(None) == []
        assert iter_scalars("a") == ["a"]
        assert iter_scalars(["a", "b"]) == ["a", "b"]


class TestCanonicalKey:
    def test_strings_ignore_case(self):
        assert canonical_key("Tool") == canonical_key("tOOL")

    def test_true_and_one_differ(self):
        assert canonical_key(True) != canonical_key(1)

    def test_numbers_by_value(self):
        assert canonical_key(2021) == canonical_key(2021.0)

    def test_timestamps_by_instant(self):
        naive = datetime(2024, 1, 5, 12, 0)
        shifted = datetime(2024, 1, 5, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        assert canonical_key(naive) == canonical_key(shifted)

    @pytest.mark.parametrize("value", [None, {"a": 1}, object()])
    def test_unsupported(self, value):
        with pytest.raises(TypeError):
            canonical_key(value)


class TestCoerceNumber:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (3, 3),
            (2.5, 2.5),
            ("12.5", 12.5),
            (" 7 ", 7.0),
            ("abc", None),
            ("", None),
            ("12abc", None),
            (True, None),
            (math.nan, None),
            ("nan", None),
            ("inf", None),
            ("-Infinity", None),
            (math.inf, None),
            (-math.inf, None),
            (None, None),
        ],
    )
    def test_coercion(self, value, expected):
        assert coerce_number(value) == expected

    def test_timestamps_become_epoch_ms(self):
        assert coerce_number(datetime(1970, 1, 1, 0, 0, 1)) == 1000.0


class TestDisplayLabel:
    def test_labels(self):
        assert display_label("Tool") == "Tool"
        assert display_label(2021) == "2021"
        assert display_label(2021.0) == "2021"
        assert display_label(2.5) == "2.5"
        assert display_label(False) == "false"
        assert display_label(datetime(2024, 1, 5)) == "2024-01-05T00:00:00.000Z"


class TestRecord:
    def test_numeric_value_prefers_finite_metric(self):
        record = Record(id="a", facets={"size": "4"}, metrics={"size": 9})
        assert record.numeric_value("size") == 9

    def test_numeric_value_falls_back_to_facet(self):
        record = Record(id="a", facets={"size": ["x", "4"]}, metrics={"size": math.nan})
        assert record.numeric_value("size") == 4.0

    def test_numeric_value_missing(self):
        assert Record(id="a").numeric_value("size") is None

    def test_from_dict_parses_date_fields(self):
        record = Record.from_dict({
            "id": 7,
            "title": "Seven",
            "facets": {"Added": "2024-01-05T00:00:00.000Z", "Category": ["Tool"]},
            "metrics": {"score": 0.5},
        })
        assert record.id == "7"
        assert record.facet("Added") == datetime(2024, 1, 5, tzinfo=timezone.utc)
        assert record.to_dict()["facets"]["Added"] == "2024-01-05T00:00:00.000Z"

    def test_collect_facet_keys(self, market_records):
        assert collect_facet_keys(market_records) == ["Exchange", "Region", "Sector", "Style"]

    def test_load_records(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text(json.dumps([
            {"id": "1", "facets": {"Added": "2024-02-11"}},
            {"id": "2", "facets": {}},
        ]))
        records = load_records(path)
        assert [r.id for r in records] == ["1", "2"]
        assert records[0].facet("Added") == datetime(2024, 2, 11, tzinfo=timezone.utc)

    def test_load_records_requires_array(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text(json.dumps({"id": "1"}))
        with pytest.raises(ValueError):
            load_records(path)


class TestFormatting:
    def test_parse_number(self):
        assert parse_number("1e3") == 1000.0
        assert parse_number("  ") is None

    def test_iso_millisecond_precision(self):
        dt = datetime(2024, 1, 5, 12, 30, 15, 123456)
        assert to_iso(dt) == "2024-01-05T12:30:15.123Z"

    def test_epoch_round_trip(self):
        dt = datetime(2024, 1, 5, tzinfo=timezone.utc)
        assert from_epoch_ms(epoch_ms(dt)) == dt

    def test_parse_iso_timestamp(self):
        assert parse_iso_timestamp("2024-01-05") == datetime(2024, 1, 5, tzinfo=timezone.utc)
        with pytest.raises(ValueError):
            parse_iso_timestamp("yesterday")

    def test_format_number(self):
        assert format_number(1500) == "1.5K"
        assert format_number(2_500_000) == "2.5M"
        assert format_number(3_000_000_000) == "3.0B"
        assert format_number(12.5) == "12.50"
        assert format_number(math.nan) == "n/a"

    def test_format_percent(self):
        assert format_percent(0.5) == "+0.50%"
        assert format_percent(-12) == "-12%"

    def test_format_currency(self):
        assert format_currency(50) == "$50.00"
        assert format_currency(None) == "n/a"

    def test_format_plain(self):
        assert format_plain(10.5) == "10.5"
        assert format_plain(15.0) == "15"
        assert format_plain(-0.001) == "0"

    def test_format_legend_label(self):
        assert format_legend_label(15) == "15"
        assert format_legend_label(2500) == "2.50e+03"
        assert format_legend_label(0.005) == "5.00e-03"

    def test_format_bucket_label(self):
        assert format_bucket_label(1000, 2000) == "1.0K - 2.0K"
