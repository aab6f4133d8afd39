from __future__ import annotations

import math
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from fintrack.storage.entities import (
    Budget,
    BudgetProgress,
    CategorySummary,
    FinancialSummary,
    SpendingReport,
    Transaction,
    utcnow,
)

EXPENSE = "expense"
INCOME = "income"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _expenses(transactions: Iterable[Transaction]) -> List[Transaction]:
    return [t for t in transactions if t.type == EXPENSE]


def filter_by_date(
    transactions: Iterable[Transaction],
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[Transaction]:
    """Keep transactions with start <= date <= end; either bound may be None."""
    out = []
    for t in transactions:
        if start is not None and t.date < start:
            continue
        if end is not None and t.date > end:
            continue
        out.append(t)
    return out


def spending_by_category(transactions: Iterable[Transaction]) -> List[CategorySummary]:
    """
    Expense totals per category, largest first.

    percentage is each category's share of total spend, rounded half up to
    a whole number, so the shares may add up to 99 or 101.
    """
    totals: Dict[str, float] = {}
    total_spent = 0.0

    for t in _expenses(transactions):
        totals[t.category] = totals.get(t.category, 0.0) + t.amount
        total_spent += t.amount

    items = [
        CategorySummary(
            category=category,
            value=value,
            percentage=_round_half_up(value / total_spent * 100) if total_spent > 0 else 0,
        )
        for category, value in totals.items()
    ]
    # sorted() is stable: equal values keep first-seen order
    return sorted(items, key=lambda x: x.value, reverse=True)


def spending_report(transactions: Iterable[Transaction]) -> SpendingReport:
    report = SpendingReport()
    for t in _expenses(transactions):
        report.total += t.amount
        report.by_category[t.category] = report.by_category.get(t.category, 0.0) + t.amount
    return report


def financial_summary(transactions: Iterable[Transaction]) -> FinancialSummary:
    income = 0.0
    expenses = 0.0
    for t in transactions:
        if t.type == INCOME:
            income += t.amount
        else:
            expenses += t.amount

    savings_rate = (income - expenses) / income * 100 if income > 0 else 0.0
    return FinancialSummary(
        balance=income - expenses,
        income=income,
        expenses=expenses,
        savings_rate=savings_rate,
    )


def _month_start(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def budget_progress(
    budgets: Iterable[Budget],
    transactions: Iterable[Transaction],
    now: Optional[datetime] = None,
) -> List[BudgetProgress]:
    """
    How much of each budget has been spent this calendar month.
    Only expenses whose category matches the budget's category count.
    """
    since = _month_start(now or utcnow())
    this_month = [t for t in _expenses(transactions) if t.date >= since]

    out = []
    for budget in budgets:
        spent = sum(t.amount for t in this_month if t.category == budget.category)
        out.append(
            BudgetProgress(
                budget=budget,
                spent=spent,
                percentage=spent / budget.amount * 100 if budget.amount else 0.0,
                exceeded=spent > budget.amount,
            )
        )
    return out
