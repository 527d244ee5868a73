"""FastAPI dependencies for DI.

This module provides the transaction store dependency so routes receive it through ``Depends``, which lets
tests swap in a store bound to a temporary database.
"""

from app.services.transaction_store import TransactionStore


def get_store() -> TransactionStore:
    """Provide a TransactionStore bound to the shared engine."""
    return TransactionStore()
