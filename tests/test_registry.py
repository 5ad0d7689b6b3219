from __future__ import annotations

import pytest

from cuebook.errors import BadRequest, Conflict, NotFound


def test_create_and_get(registry) -> None:
    calendar = registry.create(
        "Test Snooker Table",
        hourly_price_cents=3000,
        description="Professional snooker table",
    )

    fetched = registry.get(calendar.id)
    assert fetched.name == "Test Snooker Table"
    assert fetched.active is True
    assert fetched.hourly_price_cents == 3000
    assert fetched.description == "Professional snooker table"
    assert fetched.thumbnail_ref is None


def test_create_defaults_without_price(registry) -> None:
    calendar = registry.create("Pool Table 1")

    assert calendar.active is True
    assert calendar.hourly_price_cents is None


def test_duplicate_name_conflicts(registry) -> None:
    registry.create("Pool Table 1")

    with pytest.raises(Conflict):
        registry.create("Pool Table 1")
    with pytest.raises(Conflict):
        registry.create("  Pool Table 1  ")


def test_blank_name_is_bad_request(registry) -> None:
    with pytest.raises(BadRequest):
        registry.create("   ")


def test_negative_price_is_bad_request(registry) -> None:
    with pytest.raises(BadRequest):
        registry.create("Snooker 1", hourly_price_cents=-1)


def test_list_is_newest_first_and_includes_inactive(registry) -> None:
    first = registry.create("Snooker 1")
    second = registry.create("Snooker 2", active=False)
    third = registry.create("Pool 1")

    assert [c.id for c in registry.list()] == [third.id, second.id, first.id]


def test_get_unknown(registry) -> None:
    with pytest.raises(NotFound):
        registry.get(42)


def test_update_partial_fields(registry) -> None:
    calendar = registry.create("Snooker 1", hourly_price_cents=2500)

    updated = registry.update(calendar.id, {"active": False, "hourly_price_cents": 2800})

    assert updated.name == "Snooker 1"
    assert updated.active is False
    assert updated.hourly_price_cents == 2800
    assert updated.updated_at >= updated.created_at


def test_update_can_clear_price(registry) -> None:
    calendar = registry.create("Snooker 1", hourly_price_cents=2500)

    assert registry.update(calendar.id, {"hourly_price_cents": None}).hourly_price_cents is None


def test_update_without_fields(registry) -> None:
    calendar = registry.create("Snooker 1")

    with pytest.raises(BadRequest):
        registry.update(calendar.id, {})


def test_update_unknown(registry) -> None:
    with pytest.raises(NotFound):
        registry.update(42, {"name": "Anything"})


def test_rename_collision(registry) -> None:
    registry.create("Snooker 1")
    other = registry.create("Snooker 2")

    with pytest.raises(Conflict):
        registry.update(other.id, {"name": "Snooker 1"})


def test_rename_to_own_name_is_allowed(registry) -> None:
    calendar = registry.create("Snooker 1")

    assert registry.update(calendar.id, {"name": "Snooker 1"}).name == "Snooker 1"


def test_delete(registry) -> None:
    calendar = registry.create("Snooker 1")

    registry.delete(calendar.id)

    with pytest.raises(NotFound):
        registry.get(calendar.id)
    with pytest.raises(NotFound):
        registry.delete(calendar.id)
