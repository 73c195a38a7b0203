from datetime import datetime, timezone

import pytest

from seqgen.common.time_utils import format_clock_reading, parse_clock_reading, resolve_clock, utc_timestamp_iso


def test_format_clock_reading_renders_17_digits():
    assert format_clock_reading(datetime(2026, 2, 17, 9, 30, 15, 123456)) == "20260217093015123"
    assert format_clock_reading(datetime(2026, 1, 2, 3, 4, 5, 999)) == "20260102030405000"


def test_parse_clock_reading_truncates_to_milliseconds():
    assert parse_clock_reading("20260217093015123") == datetime(2026, 2, 17, 9, 30, 15, 123000)
    with pytest.raises(ValueError):
        parse_clock_reading("2026021709301512")


def test_resolve_clock_modes():
    assert resolve_clock("utc")().tzinfo == timezone.utc
    assert resolve_clock("local")().tzinfo is None
    with pytest.raises(ValueError):
        resolve_clock("sundial")


def test_utc_timestamp_iso_has_milliseconds():
    value = utc_timestamp_iso()
    assert value.endswith("+00:00")
    assert len(value.split(".")[1]) == len("123+00:00")
