"""
Expense Service - Immutable operations on expense records.

Expenses have no cross-field invariant; the only domain rule is that a
confirmed (locked) expense may not be deleted.
"""

import datetime
from typing import Iterable, List, Union

from droidplan.domain.exceptions import ExpenseLockedError, ExpenseNotFoundError
from droidplan.domain.models import Expense, ExpenseCategory


def create_expense(amount: float,
                   category: Union[ExpenseCategory, str],
                   date: Union[datetime.date, str],
                   note: str = "") -> Expense:
    """
    Create a new, unconfirmed expense.

    Raises:
        pydantic.ValidationError: on a negative amount, unknown category or bad date
    """
    return Expense(amount=amount, category=category, date=date, note=note.strip())


def toggle_confirmed(expense: Expense) -> Expense:
    """Lock or unlock an expense"""
    return expense.model_copy(update={"is_confirmed": not expense.is_confirmed})


def toggle_received(expense: Expense) -> Expense:
    return expense.model_copy(update={"is_received": not expense.is_received})


def find_expense(expenses: Iterable[Expense], expense_id: str) -> Expense:
    """
    Raises:
        ExpenseNotFoundError: if no expense has the given id
    """
    for expense in expenses:
        if expense.id == expense_id:
            return expense
    raise ExpenseNotFoundError(f"Expense {expense_id} not found")


def replace_expense(expenses: Iterable[Expense], updated: Expense) -> List[Expense]:
    return [updated if e.id == updated.id else e for e in expenses]


def remove_expense(expenses: Iterable[Expense], expense_id: str) -> List[Expense]:
    """
    Return a new collection without the given expense.

    Raises:
        ExpenseLockedError: if the expense is confirmed
    """
    expenses = list(expenses)
    for expense in expenses:
        if expense.id == expense_id and expense.is_confirmed:
            raise ExpenseLockedError(f"Expense {expense_id} is confirmed and cannot be deleted")
    return [e for e in expenses if e.id != expense_id]
