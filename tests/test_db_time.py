# mypy: ignore-errors
"""Tests for ledger timestamp helpers."""

from datetime import UTC, datetime, timedelta, timezone

from frog_backend.db.time import as_utc, utcnow


def test_utcnow_is_timezone_aware() -> None:
    assert utcnow().tzinfo is UTC


def test_as_utc_marks_naive_values_as_utc() -> None:
    naive = datetime(2026, 1, 2, 3, 4, 5)
    assert as_utc(naive) == datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)


def test_as_utc_converts_other_offsets() -> None:
    local = datetime(2026, 1, 2, 5, 0, tzinfo=timezone(timedelta(hours=2)))
    converted = as_utc(local)
    assert converted.hour == 3
    assert converted.utcoffset() == timedelta(0)
