"""
Transaction aggregation for the dashboard.

Everything here is a pure function of the transaction list it is given;
callers recompute on every scope change instead of caching results.
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Sequence

from models.schema import UNCATEGORIZED, CategorySummary, Transaction, TransactionSummary

# Indigo, Rose, Emerald, Amber, Cyan, Violet, Pink, Slate
CATEGORY_COLORS = (
    "#4f46e5",
    "#f43f5e",
    "#10b981",
    "#f59e0b",
    "#06b6d4",
    "#8b5cf6",
    "#ec4899",
    "#64748b",
)


def filter_by_scope(transactions: Sequence[Transaction], scope: Optional[str]) -> List[Transaction]:
    """Transactions of one source document, or all of them when `scope` is None."""
    if scope is None:
        return list(transactions)
    return [t for t in transactions if t.sourceFile == scope]


def source_files(transactions: Iterable[Transaction]) -> List[str]:
    """Distinct source documents in the order they first appear."""
    seen: Dict[str, None] = {}
    for t in transactions:
        seen.setdefault(t.sourceFile, None)
    return list(seen)


def category_breakdown(transactions: Iterable[Transaction], total_expense: float) -> List[CategorySummary]:
    """
    Expense magnitude per category, largest first.

    Only negative amounts are bucketed. Ties keep first-seen order since
    `sorted` is stable. Colors follow the sorted position.
    """
    buckets: Dict[str, float] = {}
    for t in transactions:
        if t.amount < 0:
            key = t.category or UNCATEGORIZED
            buckets[key] = buckets.get(key, 0.0) + abs(t.amount)

    ranked = sorted(buckets.items(), key=lambda item: item[1], reverse=True)
    return [
        CategorySummary(
            name=name,
            value=value,
            percentage=(value / total_expense * 100) if total_expense > 0 else 0.0,
            color=CATEGORY_COLORS[idx % len(CATEGORY_COLORS)],
        )
        for idx, (name, value) in enumerate(ranked)
    ]


def summarize(transactions: Sequence[Transaction]) -> TransactionSummary:
    """
    Totals and category breakdown for an already scoped transaction list.

    `expenses` is reported as a magnitude; `net` equals the plain sum of
    every amount.
    """
    income = sum(t.amount for t in transactions if t.amount > 0)
    raw_expenses = sum(t.amount for t in transactions if t.amount < 0)
    total_expense = abs(raw_expenses)

    return TransactionSummary(
        count=len(transactions),
        income=income,
        expenses=total_expense,
        net=income + raw_expenses,
        categoryData=category_breakdown(transactions, total_expense),
    )
