"""Monthly aggregation and scalar rollups over transaction lists.

Everything here is a pure function of its input: no I/O, no shared state, and results are recomputed from
scratch on every call, so the functions are safe to call from concurrent request handlers.
"""

from collections.abc import Iterable, Sequence

from app.core.models import MonthlyStats, Transaction, TransactionStats, TransactionType


def aggregate_monthly(transactions: Iterable[Transaction]) -> list[MonthlyStats]:
    """Group transactions by (year, month) and total income, expenses and net per bucket.

    Any type other than income counts as an expense. Buckets are returned in ascending (year, month)
    order and months without transactions are omitted.
    """
    buckets: dict[tuple[int, int], MonthlyStats] = {}
    for txn in transactions:
        key = (txn.date.year, txn.date.month)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = buckets[key] = MonthlyStats(year=key[0], month=key[1])
        if txn.type == TransactionType.INCOME:
            bucket.income += txn.amount
        else:
            bucket.expenses += txn.amount

    for bucket in buckets.values():
        bucket.net = bucket.income - bucket.expenses
    return [buckets[key] for key in sorted(buckets)]


def total_income(transactions: Iterable[Transaction]) -> float:
    """Sum the amounts of income transactions."""
    return sum((txn.amount for txn in transactions if txn.type == TransactionType.INCOME), 0.0)


def total_expenses(transactions: Iterable[Transaction]) -> float:
    """Sum the amounts of expense transactions."""
    return sum((txn.amount for txn in transactions if txn.type == TransactionType.EXPENSE), 0.0)


def net_income(transactions: Sequence[Transaction]) -> float:
    """Total income minus total expenses."""
    return total_income(transactions) - total_expenses(transactions)


def summarize(transactions: Sequence[Transaction]) -> TransactionStats:
    """Compute the dashboard rollups for a full transaction set."""
    income = total_income(transactions)
    expenses = total_expenses(transactions)
    return TransactionStats(
        total_income=income,
        total_expenses=expenses,
        net_income=income - expenses,
        transaction_count=len(transactions),
        income_count=sum(1 for txn in transactions if txn.type == TransactionType.INCOME),
        expense_count=sum(1 for txn in transactions if txn.type == TransactionType.EXPENSE),
    )
