"""
Stats Service - Derived figures for the analytics and expense views.

Every function is a pure computation over a collection snapshot.
"""

from typing import Dict, Iterable, List

from droidplan.domain.models import BudgetUsage, Expense, Task, TaskStats


def stats(tasks: Iterable[Task]) -> TaskStats:
    """
    Count completed and pending tasks.

    The completion ratio is 0.0 for an empty collection.
    """
    tasks = list(tasks)
    completed = sum(1 for t in tasks if t.is_completed)
    total = len(tasks)
    ratio = completed / total if total > 0 else 0.0
    return TaskStats(completed=completed, pending=total - completed, completion_ratio=ratio)


def month_key(expense: Expense) -> str:
    """Grouping key of an expense ("YYYY-MM")"""
    return expense.date.strftime("%Y-%m")


def group_expenses_by_month(expenses: Iterable[Expense]) -> Dict[str, List[Expense]]:
    """
    Group expenses by calendar month.

    Within a month, expenses keep their input order.
    """
    groups: Dict[str, List[Expense]] = {}
    for expense in expenses:
        groups.setdefault(month_key(expense), []).append(expense)
    return groups


def sorted_month_keys(groups: Dict[str, List[Expense]]) -> List[str]:
    """Month keys, most recent month first"""
    return sorted(groups, reverse=True)


def total_spent(expenses: Iterable[Expense]) -> float:
    return sum(e.amount for e in expenses)


def month_totals(groups: Dict[str, List[Expense]]) -> Dict[str, float]:
    """Total amount per month key"""
    return {key: total_spent(items) for key, items in groups.items()}


def budget_usage(spent: float, monthly_limit: float) -> BudgetUsage:
    """
    Spending as a percentage of the monthly limit.

    A limit below 1 is treated as 1. The raw percentage may exceed 100;
    the bar percentage is clamped to 100. Spending above the limit itself
    (not the clamped one) marks the usage as over budget.
    """
    percent = spent / max(monthly_limit, 1) * 100
    return BudgetUsage(
        percent=percent,
        bar_percent=min(percent, 100.0),
        over_budget=spent > monthly_limit,
    )
