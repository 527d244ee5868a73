"""FastAPI endpoints for the Finance Visualizer API.

This module defines the transaction CRUD routes, the monthly and summary aggregation routes used by the
dashboard charts, the category catalog, and the health check. Domain errors raised by the store are mapped to
HTTP status codes here.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from app.api.dependencies import get_store
from app.core.categories import TRANSACTION_CATEGORIES
from app.core.errors import InvalidInputError, NotFoundError, StoreUnavailableError
from app.core.models import CreatedResponse, MessageResponse, MonthlyStats, Transaction, TransactionStats
from app.core.utils import get_logger
from app.services.aggregator import aggregate_monthly, summarize
from app.services.transaction_store import TransactionStore

router = APIRouter()
logger = get_logger("finance-visualizer.api")

TRANSACTION_EXAMPLE = {
    "description": "Monthly salary",
    "amount": 1000.0,
    "type": "income",
    "category": "Salary",
    "date": "2024-01-15",
}
MISSING_ID_DETAIL = "Transaction ID is required"
NOT_FOUND_DETAIL = "Transaction not found"


def _require_id(transaction_id: str | None) -> str:
    if not transaction_id:
        raise HTTPException(400, MISSING_ID_DETAIL)
    return transaction_id


def _load_all(store: TransactionStore) -> list[Transaction]:
    try:
        return store.list_transactions()
    except StoreUnavailableError as exc:
        logger.exception("Error fetching transactions")
        raise HTTPException(500, "Failed to fetch transactions") from exc


@router.get(
    "/transactions",
    response_model=list[Transaction],
    summary="List all transactions",
    description=(
        "Return every stored transaction ordered by date, most recent first.\n\n"
        "**Response:**\n"
        "- 200 OK: Array of transactions.\n"
        "- 500 Internal Server Error: If the database is unavailable."
    ),
    responses={500: {"description": "Failed to fetch transactions."}},
)
def list_transactions(store: TransactionStore = Depends(get_store)) -> list[Transaction]:
    """List all transactions."""
    return _load_all(store)


@router.post(
    "/transactions",
    status_code=201,
    response_model=CreatedResponse,
    summary="Create a transaction",
    description=(
        "Record a new income or expense transaction.\n\n"
        "**Request body:** `description`, `amount`, `type`, `category`, `date` (all required).\n\n"
        "**Response:**\n"
        "- 201 Created: `{ 'message': ..., 'id': '<uuid>' }`.\n"
        "- 400 Bad Request: If a field is missing or invalid.\n"
        "- 500 Internal Server Error: If the database is unavailable."
    ),
    responses={
        400: {
            "description": "Missing or invalid fields.",
            "content": {"application/json": {"example": {"detail": "Missing required fields: amount"}}},
        },
        500: {"description": "Failed to create transaction."},
    },
)
def create_transaction(
    payload: Any = Body(None, examples=[TRANSACTION_EXAMPLE]),
    store: TransactionStore = Depends(get_store),
) -> CreatedResponse:
    """Create a transaction and return its identifier."""
    try:
        transaction_id = store.create_transaction(payload)
    except InvalidInputError as exc:
        logger.warning(f"Rejected transaction: {exc}")
        raise HTTPException(400, str(exc)) from exc
    except StoreUnavailableError as exc:
        logger.exception("Error creating transaction")
        raise HTTPException(500, "Failed to create transaction") from exc
    return CreatedResponse(message="Transaction created successfully", id=transaction_id)


@router.put(
    "/transactions",
    response_model=MessageResponse,
    summary="Replace a transaction",
    description=(
        "Replace every mutable field of an existing transaction. Partial updates are not supported.\n\n"
        "**Query parameter:**\n"
        "- `id`: The transaction identifier.\n\n"
        "**Response:**\n"
        "- 200 OK: `{ 'message': ... }`.\n"
        "- 400 Bad Request: If the id or a field is missing or invalid.\n"
        "- 404 Not Found: If no transaction has that id.\n"
        "- 500 Internal Server Error: If the database is unavailable."
    ),
    responses={
        400: {"description": "Missing id or invalid fields."},
        404: {
            "description": "Transaction not found.",
            "content": {"application/json": {"example": {"detail": NOT_FOUND_DETAIL}}},
        },
        500: {"description": "Failed to update transaction."},
    },
)
def update_transaction(
    transaction_id: str | None = Query(None, alias="id"),
    payload: Any = Body(None, examples=[TRANSACTION_EXAMPLE]),
    store: TransactionStore = Depends(get_store),
) -> MessageResponse:
    """Update a transaction by id."""
    transaction_id = _require_id(transaction_id)
    try:
        store.update_transaction(transaction_id, payload)
    except InvalidInputError as exc:
        logger.warning(f"Rejected update for {transaction_id}: {exc}")
        raise HTTPException(400, str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(404, NOT_FOUND_DETAIL) from exc
    except StoreUnavailableError as exc:
        logger.exception("Error updating transaction")
        raise HTTPException(500, "Failed to update transaction") from exc
    return MessageResponse(message="Transaction updated successfully")


@router.delete(
    "/transactions",
    response_model=MessageResponse,
    summary="Delete a transaction",
    description=(
        "Permanently remove a transaction.\n\n"
        "**Query parameter:**\n"
        "- `id`: The transaction identifier.\n\n"
        "**Response:**\n"
        "- 200 OK: `{ 'message': ... }`.\n"
        "- 400 Bad Request: If the id is missing.\n"
        "- 404 Not Found: If no transaction has that id.\n"
        "- 500 Internal Server Error: If the database is unavailable."
    ),
    responses={
        400: {
            "description": "Missing id.",
            "content": {"application/json": {"example": {"detail": MISSING_ID_DETAIL}}},
        },
        404: {"description": "Transaction not found."},
        500: {"description": "Failed to delete transaction."},
    },
)
def delete_transaction(
    transaction_id: str | None = Query(None, alias="id"),
    store: TransactionStore = Depends(get_store),
) -> MessageResponse:
    """Delete a transaction by id."""
    transaction_id = _require_id(transaction_id)
    try:
        store.delete_transaction(transaction_id)
    except NotFoundError as exc:
        raise HTTPException(404, NOT_FOUND_DETAIL) from exc
    except StoreUnavailableError as exc:
        logger.exception("Error deleting transaction")
        raise HTTPException(500, "Failed to delete transaction") from exc
    return MessageResponse(message="Transaction deleted successfully")


@router.get(
    "/transactions/monthly",
    response_model=list[MonthlyStats],
    summary="Monthly income and expense totals",
    description="Income, expenses and net per calendar month, oldest month first. Months with no transactions are omitted.",
)
def monthly_stats(store: TransactionStore = Depends(get_store)) -> list[MonthlyStats]:
    """Aggregate all transactions into monthly buckets."""
    return aggregate_monthly(_load_all(store))


@router.get(
    "/transactions/summary",
    response_model=TransactionStats,
    summary="Overall income, expense and net totals",
)
def transaction_summary(store: TransactionStore = Depends(get_store)) -> TransactionStats:
    """Compute the dashboard rollups over all transactions."""
    return summarize(_load_all(store))


@router.get(
    "/transactions/{transaction_id}",
    response_model=Transaction,
    summary="Get a single transaction",
    responses={404: {"description": "Transaction not found."}},
)
def get_transaction(transaction_id: str, store: TransactionStore = Depends(get_store)) -> Transaction:
    """Fetch one transaction by id."""
    try:
        return store.get_transaction(transaction_id)
    except NotFoundError as exc:
        raise HTTPException(404, NOT_FOUND_DETAIL) from exc
    except StoreUnavailableError as exc:
        logger.exception("Error fetching transaction")
        raise HTTPException(500, "Failed to fetch transaction") from exc


@router.get(
    "/categories",
    summary="Category catalog",
    description="The fixed list of suggested categories for each transaction type.",
    responses={200: {"content": {"application/json": {"example": {"income": ["Salary"], "expense": ["Travel"]}}}}},
)
def list_categories() -> dict[str, list[str]]:
    """Return the category catalog keyed by transaction type."""
    return {kind.value: list(names) for kind, names in TRANSACTION_CATEGORIES.items()}


@router.get(
    "/health",
    summary="Health check",
    description="Simple health check endpoint. Returns status ok.",
    response_description="Status ok.",
    responses={200: {"description": "API is healthy.", "content": {"application/json": {"example": {"status": "ok"}}}}},
)
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}
