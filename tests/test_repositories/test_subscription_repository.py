from __future__ import annotations

import uuid
from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from app.models import NewSubscription, SubscriptionPatch
from app.repositories import ConstraintViolationError, RecordNotFoundError, StorageError
from app.repositories.errors import CHECK_VIOLATION, sqlstate, translate_error


def _new(user_id, **overrides) -> NewSubscription:
    data = {
        "service_name": "Netflix",
        "price": 599,
        "user_id": user_id,
        "start_date": date(2026, 1, 1),
        "end_date": None,
    }
    data.update(overrides)
    return NewSubscription(**data)


def test_create_then_get_by_id(repository, user_id):
    new_id = repository.create(_new(user_id, end_date=date(2026, 5, 1)))

    row = repository.get_by_id(new_id)
    assert row.id == new_id
    assert row.service_name == "Netflix"
    assert row.price == 599
    assert row.user_id == user_id
    assert row.start_date == date(2026, 1, 1)
    assert row.end_date == date(2026, 5, 1)


def test_get_by_id_missing_raises(repository):
    with pytest.raises(RecordNotFoundError):
        repository.get_by_id(404)


def test_create_rejects_inverted_range_via_check_constraint(repository, user_id):
    with pytest.raises(ConstraintViolationError):
        repository.create(_new(user_id, start_date=date(2026, 5, 1), end_date=date(2026, 1, 1)))


def test_get_by_user_filters_and_orders(repository, user_id):
    other = uuid.uuid4()
    first = repository.create(_new(user_id))
    repository.create(_new(other, service_name="Spotify"))
    second = repository.create(_new(user_id, service_name="Yandex Plus"))

    rows = repository.get_by_user(user_id)
    assert [r.id for r in rows] == [first, second]
    assert repository.get_by_user(uuid.uuid4()) == []


def test_delete_returns_snapshot_and_removes_row(repository, user_id):
    new_id = repository.create(_new(user_id))

    deleted = repository.delete_by_id(new_id)
    assert deleted.id == new_id
    assert deleted.service_name == "Netflix"
    with pytest.raises(RecordNotFoundError):
        repository.get_by_id(new_id)
    with pytest.raises(RecordNotFoundError):
        repository.delete_by_id(new_id)


def test_update_coalesces_unset_fields(repository, user_id):
    new_id = repository.create(_new(user_id, end_date=date(2026, 6, 1)))

    row = repository.update(new_id, SubscriptionPatch(price=699))
    assert row.price == 699
    assert row.service_name == "Netflix"
    assert row.start_date == date(2026, 1, 1)
    assert row.end_date == date(2026, 6, 1)


def test_update_missing_raises(repository):
    with pytest.raises(RecordNotFoundError):
        repository.update(12345, SubscriptionPatch(price=1))


def test_update_violating_stored_start_raises_constraint(repository, user_id):
    new_id = repository.create(_new(user_id, start_date=date(2026, 3, 1)))

    with pytest.raises(ConstraintViolationError):
        repository.update(new_id, SubscriptionPatch(end_date=date(2026, 2, 1)))
    assert repository.get_by_id(new_id).end_date is None


def test_price_by_filter_overlap(repository, user_id):
    repository.create(_new(user_id, service_name="A", price=100))
    repository.create(
        _new(user_id, service_name="B", price=200, start_date=date(2026, 3, 1), end_date=date(2026, 4, 1))
    )
    # ended before the window
    repository.create(
        _new(user_id, service_name="C", price=400, start_date=date(2025, 1, 1), end_date=date(2025, 12, 1))
    )
    # starts after the window
    repository.create(_new(user_id, service_name="D", price=800, start_date=date(2026, 5, 1)))

    total = repository.get_price_by_filter(date(2026, 1, 1), date(2026, 4, 1))
    assert total == 300


def test_price_by_filter_boundaries_are_inclusive(repository, user_id):
    repository.create(_new(user_id, price=10, start_date=date(2025, 6, 1), end_date=date(2026, 1, 1)))
    repository.create(_new(user_id, price=20, start_date=date(2026, 4, 1)))

    assert repository.get_price_by_filter(date(2026, 1, 1), date(2026, 4, 1)) == 30


def test_price_by_filter_applies_optional_filters(repository, user_id):
    other = uuid.uuid4()
    repository.create(_new(user_id, service_name="Netflix", price=100))
    repository.create(_new(user_id, service_name="Spotify", price=200))
    repository.create(_new(other, service_name="Netflix", price=400))

    window = (date(2026, 1, 1), date(2026, 2, 1))
    assert repository.get_price_by_filter(*window, user_id=user_id) == 300
    assert repository.get_price_by_filter(*window, service_name="Netflix") == 500
    assert repository.get_price_by_filter(*window, user_id=user_id, service_name="Netflix") == 100
    assert repository.get_price_by_filter(*window, service_name="Hulu") == 0


def test_translate_error_maps_unknown_failures_to_storage_error():
    exc = OperationalError("SELECT 1", {}, Exception("connection refused"))

    translated = translate_error(exc, "ctx")
    assert type(translated) is StorageError
    assert "ctx" in str(translated)


def test_sqlstate_reads_driver_code():
    class FakePgError(Exception):
        pgcode = CHECK_VIOLATION

    exc = OperationalError("UPDATE subscription", {}, FakePgError("check violation"))
    assert sqlstate(exc) == CHECK_VIOLATION
    assert isinstance(translate_error(exc, "ctx"), ConstraintViolationError)
