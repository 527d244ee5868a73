"""Exception hierarchy for the transaction store and its API."""


class FinanceError(Exception):
    """Base exception for finance visualizer errors."""


class InvalidInputError(FinanceError):
    """A caller omitted a required field or supplied an invalid value."""


class NotFoundError(FinanceError):
    """No transaction matches the requested identifier."""

    def __init__(self, transaction_id: str) -> None:
        """Record the identifier that had no match."""
        super().__init__(f"Transaction not found: {transaction_id}")
        self.transaction_id = transaction_id


class StoreUnavailableError(FinanceError):
    """The backing database could not be reached or the operation failed."""
