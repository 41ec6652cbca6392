"""
Domain Models using Pydantic for validation.

Architecture Decision: Why Pydantic?
Pydantic provides runtime data validation, ensuring data integrity when loading
stored collections back from JSON. Stored records keep the camelCase field names
of the storage layout (executionStart, isCompleted, ...) through aliases, while
Python code works with snake_case attributes.

Architecture Decision: Why frozen models?
Every mutation (toggle, edit, subtask add/remove) produces a new value with
model_copy(); the caller decides how to store it.
"""

import uuid
import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from droidplan.i18n import tr


def new_id() -> str:
    """Generate an opaque unique identifier"""
    return str(uuid.uuid4())


class ExpenseCategory(str, Enum):
    """Fixed set of spending categories"""
    FOOD = "FOOD"
    ESSENTIAL = "ESSENTIAL"
    ENTERTAINMENT = "ENTERTAINMENT"
    SUPPLIES = "SUPPLIES"

    @property
    def label(self) -> str:
        return tr(f"expense.category.{self.value}")


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TaskStatus(str, Enum):
    """Display status of a task relative to 'now'"""
    ACTIVE = "ACTIVE"
    COMPLETE = "COMPLETE"
    CRITICAL = "CRITICAL"  # Pending and past its deadline

    @property
    def label(self) -> str:
        return tr(f"task.status.{self.value}")


class BreakdownStatus(str, Enum):
    """Outcome of an AI breakdown request"""
    AVAILABLE = "AVAILABLE"
    UNAVAILABLE = "UNAVAILABLE"  # Feature disabled (no credentials)
    FAILED = "FAILED"


class _StoredModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        frozen=True,
    )


class Subtask(_StoredModel):
    """
    A checklist item nested under a task.

    Completion is independent from the parent task's completion.
    """
    id: str = Field(default_factory=new_id)
    content: str = Field(..., min_length=1)
    is_completed: bool = False


class Task(_StoredModel):
    """
    A planned piece of work with an execution window and a deadline.

    Invariants (enforced by the validation service before creation):
    - execution_start < execution_end
    - execution_end <= deadline
    """
    id: str = Field(default_factory=new_id)
    content: str = Field(..., min_length=1)
    execution_start: datetime.datetime
    execution_end: datetime.datetime
    deadline: datetime.datetime
    is_completed: bool = False
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.now)
    subtasks: List[Subtask] = Field(default_factory=list)


class Expense(_StoredModel):
    """
    A single spending record.

    A confirmed expense is locked: it may not be deleted.
    """
    id: str = Field(default_factory=new_id)
    amount: float = Field(..., ge=0)
    category: ExpenseCategory
    date: datetime.date
    note: str = ""
    is_confirmed: bool = False
    is_received: bool = False


class SuggestedTask(_StoredModel):
    """A task proposed by the AI breakdown assistant"""
    content: str = Field(..., min_length=1)
    estimated_duration_hours: float = Field(..., gt=0)
    priority: Priority = Priority.MEDIUM


class BreakdownResult(BaseModel):
    """
    Tagged result of an AI breakdown request.

    Lets callers tell "no suggestions found" (AVAILABLE, empty list) apart
    from "feature disabled" (UNAVAILABLE) and "request failed" (FAILED).
    """
    model_config = ConfigDict(frozen=True)

    status: BreakdownStatus
    suggestions: List[SuggestedTask] = Field(default_factory=list)

    @property
    def is_available(self) -> bool:
        return self.status == BreakdownStatus.AVAILABLE

    @property
    def message(self) -> Optional[str]:
        """Notice to show instead of suggestions, or None when there are some"""
        if self.status == BreakdownStatus.UNAVAILABLE:
            return tr("breakdown.unavailable")
        if self.status == BreakdownStatus.FAILED:
            return tr("breakdown.failed")
        if not self.suggestions:
            return tr("breakdown.no_suggestions")
        return None


class ValidatedFields(BaseModel):
    """Task form fields after passing validation, normalized to local datetimes"""
    model_config = ConfigDict(frozen=True)

    content: str
    execution_start: datetime.datetime
    execution_end: datetime.datetime
    deadline: datetime.datetime


class CalendarDay(BaseModel):
    """One cell of a month calendar grid"""
    model_config = ConfigDict(frozen=True)

    day: datetime.date
    in_month: bool
    is_today: bool = False
    is_selected: bool = False

    # Task indicators
    task_count: int = 0
    has_completed: bool = False

    holiday_name: str = ""

    @property
    def has_tasks(self) -> bool:
        return self.task_count > 0


class TaskStats(BaseModel):
    """Completion statistics of a task collection"""
    model_config = ConfigDict(frozen=True)

    completed: int = 0
    pending: int = 0
    completion_ratio: float = 0.0

    @property
    def total(self) -> int:
        return self.completed + self.pending


class BudgetUsage(BaseModel):
    """
    Spending relative to the monthly limit.

    percent is the raw value and may exceed 100; bar_percent is clamped
    at 100 for progress-bar width.
    over_budget is set once spending passes the limit itself.
    """
    model_config = ConfigDict(frozen=True)

    percent: float
    bar_percent: float
    over_budget: bool = False

    @property
    def rounded_percent(self) -> int:
        return round(self.percent)


class UserPreferences(BaseModel):
    """
    User configuration and preferences.

    This allows users to customize behavior without touching code.
    """
    model_config = ConfigDict(from_attributes=True)

    # UI settings
    language: str = Field(default="auto", description="UI language: 'en', 'zh', or 'auto' (detect from system)")

    # Calendar settings
    holiday_country: Optional[str] = Field(
        default=None,
        description="ISO country code for holiday names in the calendar (e.g. 'TW', 'DE')"
    )
    holiday_subdiv: Optional[str] = Field(default=None, description="Optional subdivision code")

    # Task form defaults
    default_task_duration_hours: float = Field(
        default=1.0, gt=0,
        description="Length of the default execution window for new tasks"
    )

    # Expense settings
    default_monthly_limit: float = Field(default=1000.0, ge=0, description="Initial monthly budget")

    # AI assistant
    gemini_model: str = Field(default="gemini-3-flash-preview", description="Model used for task breakdown")


class MonthGroup(BaseModel):
    """Expenses of one calendar month, in input order"""
    model_config = ConfigDict(frozen=True)

    key: str  # "YYYY-MM"
    total: float
    expenses: List[Expense]

    @property
    def total_label(self) -> str:
        return tr("expense.month_total", total=f"{self.total:,.2f}")


class ExpenseSummary(BaseModel):
    """Everything the expense view shows: totals, budget bar, monthly lists"""
    model_config = ConfigDict(frozen=True)

    total_spent: float
    monthly_limit: float
    usage: BudgetUsage
    months: List[MonthGroup] = Field(default_factory=list)  # Most recent first
