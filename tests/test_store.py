"""Tests for TransactionStore against a temporary SQLite database."""

from collections.abc import Iterator
from datetime import UTC, date, datetime, timedelta
from pathlib import Path

import pytest
from sqlalchemy.orm import sessionmaker

from app.core.db import build_engine, init_db
from app.core.errors import InvalidInputError, NotFoundError, StoreUnavailableError
from app.core.models import TransactionType
from app.services.transaction_store import TransactionStore


def _ticking_clock(start: datetime) -> Iterator[datetime]:
    current = start
    while True:
        yield current
        current += timedelta(minutes=5)


def test_create_then_list_returns_the_record(store: TransactionStore, transaction_payload: dict) -> None:
    """Test a created transaction is listed once with the submitted fields."""
    transaction_id = store.create_transaction(transaction_payload)
    records = store.list_transactions()
    if len(records) != 1 or records[0].id != transaction_id:
        msg = f"Expected one record with id {transaction_id}, got {records}"
        raise AssertionError(msg)
    record = records[0]
    expected = ("Monthly salary", 1000.0, TransactionType.INCOME, "Salary", date(2024, 1, 15))
    actual = (record.description, record.amount, record.type, record.category, record.date)
    if actual != expected:
        msg = f"Expected {expected}, got {actual}"
        raise AssertionError(msg)
    if record.created_at != record.updated_at:
        msg = "createdAt and updatedAt must match on insert"
        raise AssertionError(msg)


def test_identifiers_are_unique(store: TransactionStore, transaction_payload: dict) -> None:
    """Test every insert receives a fresh identifier."""
    ids = {store.create_transaction(transaction_payload) for _ in range(5)}
    if len(ids) != 5:  # noqa: PLR2004
        msg = f"Expected 5 unique ids, got {ids}"
        raise AssertionError(msg)


def test_update_preserves_created_at_and_refreshes_updated_at(database_url: str, transaction_payload: dict) -> None:
    """Test update replaces fields, keeps createdAt and moves updatedAt forward."""
    _ = database_url
    ticks = _ticking_clock(datetime(2024, 1, 1, tzinfo=UTC))
    init_db()
    store = TransactionStore(clock=lambda: next(ticks))
    transaction_id = store.create_transaction(transaction_payload)
    before = store.get_transaction(transaction_id)

    store.update_transaction(
        transaction_id,
        {"description": "Rent", "amount": 800, "type": "expense", "category": "Housing", "date": "2024-01-31"},
    )
    after = store.get_transaction(transaction_id)

    if (after.description, after.amount, after.type, after.category) != ("Rent", 800.0, "expense", "Housing"):
        msg = f"Update not applied: {after}"
        raise AssertionError(msg)
    if after.date != date(2024, 1, 31):
        msg = f"Expected date 2024-01-31, got {after.date}"
        raise AssertionError(msg)
    if after.created_at != before.created_at:
        msg = "createdAt must be preserved"
        raise AssertionError(msg)
    if not after.updated_at > before.updated_at:
        msg = f"updatedAt must advance: {before.updated_at} -> {after.updated_at}"
        raise AssertionError(msg)


def test_delete_removes_the_record(store: TransactionStore, transaction_payload: dict) -> None:
    """Test a deleted record no longer appears in the listing."""
    keep = store.create_transaction(transaction_payload)
    drop = store.create_transaction(transaction_payload)
    store.delete_transaction(drop)
    if [r.id for r in store.list_transactions()] != [keep]:
        msg = "Deleted record is still listed"
        raise AssertionError(msg)


def test_unknown_id_raises_not_found(store: TransactionStore, transaction_payload: dict) -> None:
    """Test update, delete and get on an unknown id raise NotFoundError."""
    with pytest.raises(NotFoundError):
        store.update_transaction("missing", transaction_payload)
    with pytest.raises(NotFoundError):
        store.delete_transaction("missing")
    with pytest.raises(NotFoundError):
        store.get_transaction("missing")


@pytest.mark.parametrize("field", ["description", "amount", "type", "category", "date"])
def test_missing_field_writes_nothing(store: TransactionStore, transaction_payload: dict, field: str) -> None:
    """Test a payload missing any required field is rejected before writing."""
    del transaction_payload[field]
    with pytest.raises(InvalidInputError, match=field):
        store.create_transaction(transaction_payload)
    if store.list_transactions():
        msg = "Rejected payload must not be stored"
        raise AssertionError(msg)


def test_invalid_update_leaves_record_unchanged(store: TransactionStore, transaction_payload: dict) -> None:
    """Test an invalid update is rejected and the stored record is untouched."""
    transaction_id = store.create_transaction(transaction_payload)
    with pytest.raises(InvalidInputError):
        store.update_transaction(transaction_id, {**transaction_payload, "amount": -5})
    if store.get_transaction(transaction_id).amount != 1000.0:  # noqa: PLR2004
        msg = "Record must not change after a rejected update"
        raise AssertionError(msg)


def test_unknown_category_is_accepted(store: TransactionStore, transaction_payload: dict) -> None:
    """Test categories outside the catalog are stored as given."""
    transaction_id = store.create_transaction({**transaction_payload, "category": "Lottery"})
    if store.get_transaction(transaction_id).category != "Lottery":
        msg = "Expected the custom category to be stored"
        raise AssertionError(msg)


def test_unreachable_database_raises_store_unavailable(tmp_path: Path, transaction_payload: dict) -> None:
    """Test database errors surface as StoreUnavailableError."""
    engine = build_engine(f"sqlite:///{tmp_path / 'empty.db'}")
    store = TransactionStore(sessionmaker(bind=engine))
    with pytest.raises(StoreUnavailableError):
        store.list_transactions()
    with pytest.raises(StoreUnavailableError):
        store.create_transaction(transaction_payload)
    engine.dispose()


def test_timestamps_are_read_back_as_utc(store: TransactionStore, transaction_payload: dict) -> None:
    """Test created_at and updated_at come back timezone-aware in UTC."""
    record = store.get_transaction(store.create_transaction(transaction_payload))
    for value in (record.created_at, record.updated_at):
        if value.utcoffset() != timedelta(0):
            msg = f"Expected a UTC timestamp, got {value!r}"
            raise AssertionError(msg)
