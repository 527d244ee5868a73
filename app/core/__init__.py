"""Core package: provides models, database helpers, settings, errors, and shared utilities."""

from .db import session_scope  # noqa: F401
from .errors import FinanceError, InvalidInputError, NotFoundError, StoreUnavailableError  # noqa: F401
from .models import MonthlyStats, Transaction, TransactionInput, TransactionStats, TransactionType  # noqa: F401
from .settings import Settings  # noqa: F401
