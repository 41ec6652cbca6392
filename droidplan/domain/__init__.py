"""Domain layer - Pure business entities and errors"""

from .models import (
    BreakdownResult,
    BreakdownStatus,
    BudgetUsage,
    CalendarDay,
    Expense,
    ExpenseSummary,
    ExpenseCategory,
    MonthGroup,
    Priority,
    Subtask,
    SuggestedTask,
    Task,
    TaskStats,
    TaskStatus,
    UserPreferences,
    ValidatedFields,
)
from .exceptions import (
    DeadlineExceededError,
    DroidPlanError,
    EmptyFieldsError,
    ExpenseLockedError,
    ExpenseNotFoundError,
    InvalidTimestampError,
    InvertedWindowError,
    TaskNotFoundError,
    TaskValidationError,
)

__all__ = [
    "BreakdownResult", "BreakdownStatus", "BudgetUsage", "CalendarDay",
    "Expense", "ExpenseCategory", "ExpenseSummary", "MonthGroup",
    "Priority", "Subtask", "SuggestedTask",
    "Task", "TaskStats", "TaskStatus", "UserPreferences", "ValidatedFields",
    "DeadlineExceededError", "DroidPlanError", "EmptyFieldsError",
    "ExpenseLockedError", "ExpenseNotFoundError", "InvalidTimestampError", "InvertedWindowError",
    "TaskNotFoundError", "TaskValidationError",
]
