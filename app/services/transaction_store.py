"""TransactionStore provides CRUD operations for transactions on top of SQLAlchemy."""

import uuid
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.categories import is_known_category
from app.core.db import TransactionRecord, session_scope
from app.core.errors import NotFoundError, StoreUnavailableError
from app.core.models import Transaction, TransactionInput, parse_transaction_input
from app.core.utils import get_logger, utcnow

logger = get_logger("finance-visualizer.store")

TransactionPayload = Mapping[str, Any] | TransactionInput


def _to_model(record: TransactionRecord) -> Transaction:
    return Transaction(
        id=record.id,
        description=record.description,
        amount=record.amount,
        type=record.type,
        category=record.category,
        date=record.date,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class TransactionStore:
    """Store owning the lifecycle of transaction records.

    Every operation runs in its own session scope against the shared engine. Database failures are
    raised as StoreUnavailableError and are never retried here.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session] | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize the store with an optional session factory and clock (both default to the shared ones)."""
        self.session_factory = session_factory
        self.clock = clock

    def list_transactions(self) -> list[Transaction]:
        """Return all transactions, most recent date first."""
        stmt = select(TransactionRecord).order_by(TransactionRecord.date.desc(), TransactionRecord.created_at.desc())
        try:
            with session_scope(self.session_factory) as session:
                records = session.scalars(stmt).all()
                transactions = [_to_model(record) for record in records]
        except SQLAlchemyError as exc:
            msg = "Failed to list transactions"
            raise StoreUnavailableError(msg) from exc
        logger.info(f"Listed {len(transactions)} transactions")
        return transactions

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Return a single transaction by its identifier."""
        try:
            with session_scope(self.session_factory) as session:
                record = session.get(TransactionRecord, transaction_id)
                transaction = _to_model(record) if record is not None else None
        except SQLAlchemyError as exc:
            msg = f"Failed to load transaction {transaction_id}"
            raise StoreUnavailableError(msg) from exc
        if transaction is None:
            raise NotFoundError(transaction_id)
        return transaction

    def create_transaction(self, payload: TransactionPayload) -> str:
        """Validate and insert a new transaction, returning its generated identifier."""
        data = parse_transaction_input(payload)
        self._check_category(data)
        now = self.clock()
        transaction_id = str(uuid.uuid4())
        record = TransactionRecord(
            id=transaction_id,
            description=data.description,
            amount=data.amount,
            type=data.type.value,
            category=data.category,
            date=data.date,
            created_at=now,
            updated_at=now,
        )
        try:
            with session_scope(self.session_factory) as session:
                session.add(record)
        except SQLAlchemyError as exc:
            msg = "Failed to create transaction"
            raise StoreUnavailableError(msg) from exc
        logger.info(f"Created transaction {transaction_id} ({data.type.value}, {data.amount:.2f})")
        return transaction_id

    def update_transaction(self, transaction_id: str, payload: TransactionPayload) -> None:
        """Replace all mutable fields of an existing transaction and refresh updated_at."""
        data = parse_transaction_input(payload)
        self._check_category(data)
        stmt = (
            update(TransactionRecord)
            .where(TransactionRecord.id == transaction_id)
            .values(
                description=data.description,
                amount=data.amount,
                type=data.type.value,
                category=data.category,
                date=data.date,
                updated_at=self.clock(),
            )
        )
        try:
            with session_scope(self.session_factory) as session:
                matched = session.execute(stmt).rowcount
        except SQLAlchemyError as exc:
            msg = f"Failed to update transaction {transaction_id}"
            raise StoreUnavailableError(msg) from exc
        if matched == 0:
            raise NotFoundError(transaction_id)
        logger.info(f"Updated transaction {transaction_id}")

    def delete_transaction(self, transaction_id: str) -> None:
        """Permanently remove a transaction."""
        stmt = delete(TransactionRecord).where(TransactionRecord.id == transaction_id)
        try:
            with session_scope(self.session_factory) as session:
                deleted = session.execute(stmt).rowcount
        except SQLAlchemyError as exc:
            msg = f"Failed to delete transaction {transaction_id}"
            raise StoreUnavailableError(msg) from exc
        if deleted == 0:
            raise NotFoundError(transaction_id)
        logger.info(f"Deleted transaction {transaction_id}")

    @staticmethod
    def _check_category(data: TransactionInput) -> None:
        if not is_known_category(data.type, data.category):
            logger.warning(f"Category '{data.category}' is not in the {data.type.value} catalog")
