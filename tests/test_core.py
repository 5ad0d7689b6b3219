from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from cuebook.core import (
    from_storage,
    local_day_bounds,
    overlaps,
    resource_type,
    to_storage,
    venue_timezone,
)
from cuebook.models import Calendar

T = datetime(2030, 1, 1, 18, 0, tzinfo=timezone.utc)
H = timedelta(hours=1)


@pytest.mark.parametrize(
    "b_start, b_end, expected",
    [
        (T + H, T + 2 * H, False),  # touches at the end
        (T - H, T, False),  # touches at the start
        (T + H / 2, T + 2 * H, True),
        (T - H / 2, T + H / 2, True),
        (T + H / 4, T + H / 2, True),  # inside
        (T - H, T + 2 * H, True),  # around
    ],
)
def test_overlaps_is_half_open(b_start, b_end, expected) -> None:
    assert overlaps(T, T + H, b_start, b_end) is expected
    assert overlaps(b_start, b_end, T, T + H) is expected


def test_storage_round_trip_keeps_instant() -> None:
    helsinki = datetime(2030, 6, 1, 20, 0, tzinfo=timezone(timedelta(hours=3)))

    stored = to_storage(helsinki)

    # sqlmodel's datetime columns refuse values without a timezone
    assert stored.utcoffset() == timedelta(0)
    assert stored == datetime(2030, 6, 1, 17, 0, tzinfo=timezone.utc)
    assert from_storage(stored) == helsinki


def test_from_storage_accepts_naive_utc() -> None:
    restored = from_storage(datetime(2030, 6, 1, 17, 0))

    assert restored == datetime(2030, 6, 1, 17, 0, tzinfo=timezone.utc)
    assert restored.utcoffset() == timedelta(0)


def test_model_timestamps_are_aware() -> None:
    calendar = Calendar(name="Snooker 1")

    assert calendar.created_at.utcoffset() == timedelta(0)
    assert calendar.updated_at.utcoffset() == timedelta(0)


def test_local_day_bounds() -> None:
    start, end = local_day_bounds(date(2030, 3, 14), venue_timezone(2))

    assert start == datetime(2030, 3, 13, 22, 0, tzinfo=timezone.utc)
    assert end - start == timedelta(days=1)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Snooker 1", "Snooker"),
        ("snooker", "Snooker"),
        ("Pool table 2", "Pool"),
        ("POOL", "Pool"),
        ("Biljardi 4", "Pool"),
        ("Table 7", "Table"),
        ("Big snooker table", "Table"),  # only the first word counts
        ("", "Table"),
    ],
)
def test_resource_type(name, expected) -> None:
    assert resource_type(name, ["biljardi"]) == expected
