"""
Derived figures shown next to the records: crop growth progress,
task urgency labels, financial aggregates and completion percentages.

All functions are pure; ``today`` is injectable so callers and tests can
pin the calendar.
"""
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

URGENCY_COMPLETED = "completed"
URGENCY_NONE = "none"
URGENCY_OVERDUE = "overdue"
URGENCY_DUE_TODAY = "due-today"
URGENCY_DUE_SOON = "due-soon"
URGENCY_UPCOMING = "upcoming"


def _today(today: Optional[date]) -> date:
    return today or date.today()


def crop_progress(planting_date: date, expected_harvest: date, today: Optional[date] = None) -> float:
    """
    Percentage of the growing period that has elapsed, clamped to [0, 100].

    A crop whose harvest date is not after its planting date counts as
    fully grown.
    """
    total_days = (expected_harvest - planting_date).days
    if total_days <= 0:
        return 100.0
    days_passed = (_today(today) - planting_date).days
    return min(max(days_passed / total_days * 100, 0.0), 100.0)


def days_until(target: date, today: Optional[date] = None) -> int:
    return (target - _today(today)).days


def task_urgency(
    due_date: Optional[date],
    completed: bool,
    today: Optional[date] = None,
    due_soon_days: int = 3,
) -> str:
    if completed:
        return URGENCY_COMPLETED
    if due_date is None:
        return URGENCY_NONE
    remaining = days_until(due_date, today)
    if remaining < 0:
        return URGENCY_OVERDUE
    if remaining == 0:
        return URGENCY_DUE_TODAY
    if remaining <= due_soon_days:
        return URGENCY_DUE_SOON
    return URGENCY_UPCOMING


def financial_summary(transactions: Iterable) -> dict:
    """Income, expenses, profit and count over transaction-like objects."""
    income = Decimal("0")
    expenses = Decimal("0")
    count = 0
    for transaction in transactions:
        count += 1
        amount = Decimal(str(transaction.amount))
        if transaction.type == "income":
            income += amount
        elif transaction.type == "expense":
            expenses += amount
    return {
        "income": income,
        "expenses": expenses,
        "profit": income - expenses,
        "transaction_count": count,
    }


def monthly_totals(transactions: Iterable, year: int) -> List[dict]:
    """Twelve month buckets of income and expenses for one calendar year."""
    buckets = {
        month: {
            "month": f"{year}-{month:02d}",
            "label": date(year, month, 1).strftime("%b"),
            "income": Decimal("0"),
            "expenses": Decimal("0"),
        }
        for month in range(1, 13)
    }
    for transaction in transactions:
        if transaction.date.year != year:
            continue
        bucket = buckets[transaction.date.month]
        amount = Decimal(str(transaction.amount))
        if transaction.type == "income":
            bucket["income"] += amount
        else:
            bucket["expenses"] += amount
    return [buckets[month] for month in range(1, 13)]


def completion_progress(completed: int, total: int) -> int:
    """Rounded completion percentage; zero when there is nothing to complete."""
    if total <= 0:
        return 0
    return round(completed / total * 100)
