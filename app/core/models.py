"""Pydantic models for the Finance Visualizer API.

This module defines the request and response models used throughout the application: the validated
TransactionInput payload, the stored Transaction record, and the derived MonthlyStats and TransactionStats
summaries used for charting.
"""

import datetime as dt
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, computed_field, field_validator
from pydantic.alias_generators import to_camel

from app.core.errors import InvalidInputError
from app.core.utils import month_label

DESCRIPTION_MAX_LENGTH = 100
MIN_AMOUNT = 0.01
REQUIRED_FIELDS = ("description", "amount", "type", "category", "date")


class TransactionType(StrEnum):
    """Binary classification of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TransactionInput(BaseModel):
    """Pydantic model representing the caller-supplied fields of a transaction."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    description: str = Field(min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    amount: float = Field(strict=True, ge=MIN_AMOUNT, allow_inf_nan=False)
    type: TransactionType
    category: str = Field(min_length=1)
    date: dt.date

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_date(cls, value: Any) -> Any:  # noqa: ANN401
        """Reduce ISO datetimes (e.g. JS ``toISOString()``) to the calendar date as written."""
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, str):
            try:
                return dt.datetime.fromisoformat(value.strip()).date()
            except ValueError:
                return value
        return value


class Transaction(CamelModel):
    """Pydantic model representing a stored transaction record."""

    id: str
    description: str
    amount: float
    type: TransactionType
    category: str
    date: dt.date
    created_at: dt.datetime
    updated_at: dt.datetime


class MonthlyStats(CamelModel):
    """Income, expense and net totals for one calendar month."""

    year: int
    month: int = Field(ge=1, le=12)
    income: float = 0.0
    expenses: float = 0.0
    net: float = 0.0

    @computed_field
    @property
    def label(self) -> str:
        """Short chart label such as ``Jan 2024``."""
        return month_label(self.year, self.month)


class TransactionStats(CamelModel):
    """Scalar rollups over a full set of transactions."""

    total_income: float
    total_expenses: float
    net_income: float
    transaction_count: int
    income_count: int
    expense_count: int


class CreatedResponse(BaseModel):
    """Response body for a created transaction."""

    message: str
    id: str


class MessageResponse(BaseModel):
    """Response body carrying only a status message."""

    message: str


def _describe_errors(exc: ValidationError) -> str:
    missing = [str(err["loc"][0]) for err in exc.errors() if err["type"] == "missing"]
    if missing:
        return f"Missing required fields: {', '.join(missing)}"
    details = [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()]
    return f"Invalid fields: {'; '.join(details)}"


def parse_transaction_input(data: Mapping[str, Any] | TransactionInput | None) -> TransactionInput:
    """Validate a raw payload into a TransactionInput, raising InvalidInputError on failure."""
    if isinstance(data, TransactionInput):
        return data
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        msg = "Transaction payload must be a JSON object"
        raise InvalidInputError(msg)
    try:
        return TransactionInput.model_validate({key: value for key, value in data.items() if value is not None})
    except ValidationError as exc:
        raise InvalidInputError(_describe_errors(exc)) from exc
