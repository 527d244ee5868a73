"""Fixed catalog of transaction categories, keyed by transaction type."""

from collections.abc import Mapping
from types import MappingProxyType

from app.core.models import TransactionType

TRANSACTION_CATEGORIES: Mapping[TransactionType, tuple[str, ...]] = MappingProxyType(
    {
        TransactionType.INCOME: (
            "Salary",
            "Freelance",
            "Investment",
            "Business",
            "Other Income",
        ),
        TransactionType.EXPENSE: (
            "Food & Dining",
            "Transportation",
            "Housing",
            "Utilities",
            "Entertainment",
            "Healthcare",
            "Shopping",
            "Education",
            "Travel",
            "Other Expenses",
        ),
    }
)


def categories_for(transaction_type: TransactionType | str) -> tuple[str, ...]:
    """Return the catalog entries for a transaction type."""
    return TRANSACTION_CATEGORIES[TransactionType(transaction_type)]


def is_known_category(transaction_type: TransactionType | str, category: str) -> bool:
    """Check whether a category belongs to the catalog for its type."""
    return category in categories_for(transaction_type)
