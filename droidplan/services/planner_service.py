"""
Planner Service - Application facade over the task and expense stores.

Architecture Decision: Load, compute, overwrite
Each operation loads a snapshot of the collection from its repository, runs a
pure core function on it, and writes the whole collection back. The core
functions never see the repositories; a failed validation leaves stored state
untouched because nothing is written.

Every load/compute/save sequence runs under one asyncio.Lock, so overlapping
calls on the same planner apply one after another instead of overwriting each
other's writes.
"""

import asyncio
import datetime
import logging
from typing import List, Optional, Union

from droidplan.domain.exceptions import EmptyFieldsError
from droidplan.i18n import set_language
from droidplan.domain.models import (
    CalendarDay,
    Expense,
    ExpenseCategory,
    ExpenseSummary,
    MonthGroup,
    SuggestedTask,
    Task,
    TaskStats,
    UserPreferences,
)
from droidplan.infra.repository import BudgetRepository, ExpenseRepository, TaskRepository
from droidplan.services import calendar_service, expense_service, stats_service, task_service
from droidplan.services.calendar_service import CalendarService
from droidplan.services.validation_service import TimestampInput, parse_timestamp, validate_task_fields

logger = logging.getLogger(__name__)


class PlannerService:
    """
    Owns the task/expense collections on behalf of the UI layer.
    """

    def __init__(self,
                 task_repo: Optional[TaskRepository] = None,
                 expense_repo: Optional[ExpenseRepository] = None,
                 budget_repo: Optional[BudgetRepository] = None,
                 preferences: Optional[UserPreferences] = None):
        if preferences is None:
            from droidplan.infra.config import get_settings
            preferences = get_settings().preferences

        self.preferences = preferences
        self.task_repo = task_repo or TaskRepository()
        self.expense_repo = expense_repo or ExpenseRepository()
        self.budget_repo = budget_repo or BudgetRepository()
        self.calendar = CalendarService.from_preferences(preferences)
        self._write_lock = asyncio.Lock()

        set_language(preferences.language)

    # --- Tasks ---

    async def list_tasks(self) -> List[Task]:
        """All tasks ordered by execution start"""
        return calendar_service.sort_by_execution_start(await self.task_repo.get_all())

    async def tasks_for_day(self, day: Union[datetime.date, datetime.datetime]) -> List[Task]:
        """Tasks whose execution window touches the day, ordered by execution start"""
        tasks = await self.task_repo.get_all()
        return calendar_service.sort_by_execution_start(
            calendar_service.tasks_overlapping_day(tasks, day)
        )

    async def pending_count(self) -> int:
        return (await self.get_stats()).pending

    def new_task_defaults(self, base: Optional[datetime.datetime] = None):
        """Initial (start, end, deadline) for the add-task form"""
        return task_service.default_window(base, self.preferences.default_task_duration_hours)

    async def add_task(self, content: str,
                       execution_start: TimestampInput,
                       execution_end: TimestampInput,
                       deadline: TimestampInput) -> Task:
        """
        Validate form input and append a new task.

        Raises:
            TaskValidationError: if the input is rejected
        """
        fields = validate_task_fields(content, execution_start, execution_end, deadline)
        task = task_service.create_task(fields)

        async with self._write_lock:
            tasks = await self.task_repo.get_all()
            await self.task_repo.save_all([*tasks, task])
        logger.info(f"Task created: {task.id}")
        return task

    async def update_task(self, task_id: str, content: str,
                          execution_start: TimestampInput,
                          execution_end: TimestampInput,
                          deadline: TimestampInput) -> Task:
        """
        Validate form input and apply it to an existing task.

        Raises:
            TaskValidationError: if the input is rejected
            TaskNotFoundError: if the task does not exist
        """
        fields = validate_task_fields(content, execution_start, execution_end, deadline)
        return await self._modify_task(task_id, lambda t: task_service.edit_task(t, fields))

    async def toggle_task(self, task_id: str) -> Task:
        return await self._modify_task(task_id, task_service.toggle_task)

    async def delete_task(self, task_id: str) -> None:
        """
        Raises:
            TaskNotFoundError: if the task does not exist
        """
        async with self._write_lock:
            tasks = await self.task_repo.get_all()
            task_service.find_task(tasks, task_id)
            await self.task_repo.save_all(task_service.remove_task(tasks, task_id))
        logger.info(f"Task deleted: {task_id}")

    async def add_subtask(self, task_id: str, content: str) -> Task:
        return await self._modify_task(task_id, lambda t: task_service.add_subtask(t, content))

    async def toggle_subtask(self, task_id: str, subtask_id: str) -> Task:
        return await self._modify_task(task_id, lambda t: task_service.toggle_subtask(t, subtask_id))

    async def remove_subtask(self, task_id: str, subtask_id: str) -> Task:
        return await self._modify_task(task_id, lambda t: task_service.remove_subtask(t, subtask_id))

    async def accept_suggestion(self, suggestion: SuggestedTask,
                                start: TimestampInput,
                                deadline: TimestampInput) -> Task:
        """
        Create a task from an AI suggestion using the form's start and deadline.

        An empty start means "now"; the deadline is required.

        Raises:
            TaskValidationError: if the deadline is missing or the suggested
                window does not fit it
        """
        if not deadline:
            raise EmptyFieldsError("A deadline is required to accept a suggestion")
        start = parse_timestamp(start) if start else datetime.datetime.now()

        task = task_service.task_from_suggestion(suggestion, start, parse_timestamp(deadline))
        async with self._write_lock:
            tasks = await self.task_repo.get_all()
            await self.task_repo.save_all([*tasks, task])
        logger.info(f"Task created from suggestion: {task.id}")
        return task

    async def _modify_task(self, task_id: str, change) -> Task:
        async with self._write_lock:
            tasks = await self.task_repo.get_all()
            updated = change(task_service.find_task(tasks, task_id))
            await self.task_repo.save_all(task_service.replace_task(tasks, updated))
        return updated

    async def get_stats(self) -> TaskStats:
        return stats_service.stats(await self.task_repo.get_all())

    async def month_grid(self, month: Union[datetime.date, datetime.datetime],
                         selected: Optional[Union[datetime.date, datetime.datetime]] = None,
                         today: Optional[datetime.date] = None) -> List[CalendarDay]:
        tasks = await self.task_repo.get_all()
        return self.calendar.month_grid(month, today=today, selected=selected, tasks=tasks)

    # --- Expenses ---

    async def list_expenses(self) -> List[Expense]:
        return await self.expense_repo.get_all()

    async def add_expense(self, amount: float,
                          category: Union[ExpenseCategory, str],
                          date: Union[datetime.date, str],
                          note: str = "") -> Expense:
        expense = expense_service.create_expense(amount, category, date, note)
        async with self._write_lock:
            expenses = await self.expense_repo.get_all()
            await self.expense_repo.save_all([*expenses, expense])
        logger.info(f"Expense created: {expense.id}")
        return expense

    async def delete_expense(self, expense_id: str) -> None:
        """
        Raises:
            ExpenseNotFoundError: if the expense does not exist
            ExpenseLockedError: if the expense is confirmed
        """
        async with self._write_lock:
            expenses = await self.expense_repo.get_all()
            expense_service.find_expense(expenses, expense_id)
            await self.expense_repo.save_all(expense_service.remove_expense(expenses, expense_id))
        logger.info(f"Expense deleted: {expense_id}")

    async def toggle_expense_confirmed(self, expense_id: str) -> Expense:
        return await self._modify_expense(expense_id, expense_service.toggle_confirmed)

    async def toggle_expense_received(self, expense_id: str) -> Expense:
        return await self._modify_expense(expense_id, expense_service.toggle_received)

    async def _modify_expense(self, expense_id: str, change) -> Expense:
        async with self._write_lock:
            expenses = await self.expense_repo.get_all()
            updated = change(expense_service.find_expense(expenses, expense_id))
            await self.expense_repo.save_all(expense_service.replace_expense(expenses, updated))
        return updated

    async def get_monthly_limit(self) -> float:
        return await self.budget_repo.get_monthly_limit(default=self.preferences.default_monthly_limit)

    async def set_monthly_limit(self, limit: float) -> float:
        async with self._write_lock:
            return await self.budget_repo.set_monthly_limit(limit)

    async def expense_summary(self) -> ExpenseSummary:
        """Totals, budget usage and month groups (most recent month first)"""
        expenses = await self.expense_repo.get_all()
        limit = await self.get_monthly_limit()

        spent = stats_service.total_spent(expenses)
        groups = stats_service.group_expenses_by_month(expenses)
        totals = stats_service.month_totals(groups)

        return ExpenseSummary(
            total_spent=spent,
            monthly_limit=limit,
            usage=stats_service.budget_usage(spent, limit),
            months=[
                MonthGroup(key=key, total=totals[key], expenses=groups[key])
                for key in stats_service.sorted_month_keys(groups)
            ],
        )
