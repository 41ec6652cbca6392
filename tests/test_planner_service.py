"""
Tests for the planner facade: validation gate, persistence and views.
"""

import asyncio
import datetime
import pytest

from droidplan.domain.exceptions import (
    DeadlineExceededError,
    EmptyFieldsError,
    ExpenseLockedError,
    ExpenseNotFoundError,
    TaskNotFoundError,
)
from droidplan.domain.models import ExpenseCategory, Priority, SuggestedTask, UserPreferences
from droidplan.i18n import get_language
from droidplan.services.planner_service import PlannerService


@pytest.mark.asyncio
async def test_add_task_persists_validated_task(planner, task_repo):
    task = await planner.add_task("Write report", "2024-05-01T09:00", "2024-05-01T10:00", "2024-05-01T10:00")

    stored = await task_repo.get_all()
    assert stored == [task]
    assert task.execution_start == datetime.datetime(2024, 5, 1, 9, 0)


@pytest.mark.asyncio
async def test_rejected_task_leaves_store_untouched(planner, task_repo):
    await planner.add_task("Keep me", "2024-05-01T09:00", "2024-05-01T10:00", "2024-05-01T10:00")

    with pytest.raises(DeadlineExceededError):
        await planner.add_task("Too long", "2024-05-01T09:00", "2024-05-01T10:00", "2024-05-01T09:59")

    assert [t.content for t in await task_repo.get_all()] == ["Keep me"]


@pytest.mark.asyncio
async def test_update_task(planner):
    task = await planner.add_task("Draft", "2024-05-01T09:00", "2024-05-01T10:00", "2024-05-01T10:00")
    updated = await planner.update_task(task.id, "Final", "2024-05-02T09:00", "2024-05-02T11:00", "2024-05-03T00:00")

    assert updated.id == task.id
    assert [t.content for t in await planner.list_tasks()] == ["Final"]


@pytest.mark.asyncio
async def test_update_unknown_task(planner):
    with pytest.raises(TaskNotFoundError):
        await planner.update_task("missing", "Final", "2024-05-02T09:00", "2024-05-02T11:00", "2024-05-03T00:00")


@pytest.mark.asyncio
async def test_toggle_and_stats(planner):
    a = await planner.add_task("A", "2024-05-01T09:00", "2024-05-01T10:00", "2024-05-01T10:00")
    await planner.add_task("B", "2024-05-01T11:00", "2024-05-01T12:00", "2024-05-01T12:00")

    await planner.toggle_task(a.id)
    stats = await planner.get_stats()

    assert (stats.completed, stats.pending) == (1, 1)
    assert stats.completion_ratio == pytest.approx(0.5)
    assert await planner.pending_count() == 1


@pytest.mark.asyncio
async def test_delete_task(planner):
    task = await planner.add_task("Gone", "2024-05-01T09:00", "2024-05-01T10:00", "2024-05-01T10:00")
    await planner.delete_task(task.id)
    assert await planner.list_tasks() == []


@pytest.mark.asyncio
async def test_tasks_for_day_sorted_by_start(planner):
    late = await planner.add_task("Late", "2024-05-02T18:00", "2024-05-02T19:00", "2024-05-02T19:00")
    spanning = await planner.add_task("Trip", "2024-05-01T20:00", "2024-05-03T08:00", "2024-05-03T08:00")
    await planner.add_task("Other day", "2024-05-04T09:00", "2024-05-04T10:00", "2024-05-04T10:00")

    day_tasks = await planner.tasks_for_day(datetime.date(2024, 5, 2))
    assert [t.id for t in day_tasks] == [spanning.id, late.id]


@pytest.mark.asyncio
async def test_subtasks(planner):
    task = await planner.add_task("Move", "2024-05-01T09:00", "2024-05-01T10:00", "2024-05-01T10:00")
    task = await planner.add_subtask(task.id, "Pack boxes")
    subtask_id = task.subtasks[0].id

    task = await planner.toggle_subtask(task.id, subtask_id)
    assert task.subtasks[0].is_completed
    assert not task.is_completed

    task = await planner.remove_subtask(task.id, subtask_id)
    assert (await planner.list_tasks())[0].subtasks == []


@pytest.mark.asyncio
async def test_accept_suggestion(planner):
    suggestion = SuggestedTask(content="Buy domain", estimated_duration_hours=0.5, priority=Priority.HIGH)
    task = await planner.accept_suggestion(suggestion, "2024-05-01T09:00", "2024-05-01T12:00")

    assert task.execution_end == datetime.datetime(2024, 5, 1, 9, 30)
    assert await planner.list_tasks() == [task]


@pytest.mark.asyncio
async def test_accept_suggestion_needs_deadline(planner):
    suggestion = SuggestedTask(content="Buy domain", estimated_duration_hours=0.5, priority=Priority.HIGH)
    with pytest.raises(EmptyFieldsError):
        await planner.accept_suggestion(suggestion, "2024-05-01T09:00", "")
    assert await planner.list_tasks() == []


@pytest.mark.asyncio
async def test_accept_suggestion_without_start_begins_now(planner):
    suggestion = SuggestedTask(content="Buy domain", estimated_duration_hours=1, priority=Priority.LOW)
    before = datetime.datetime.now().replace(second=0, microsecond=0)
    deadline = before + datetime.timedelta(days=1)

    task = await planner.accept_suggestion(suggestion, "", deadline.isoformat(timespec="minutes"))

    after = datetime.datetime.now()
    assert before <= task.execution_start <= after
    assert task.execution_end - task.execution_start == datetime.timedelta(hours=1)
    assert task.deadline == deadline


@pytest.mark.asyncio
async def test_month_grid_uses_stored_tasks(planner):
    await planner.add_task("A", "2024-05-02T09:00", "2024-05-02T10:00", "2024-05-02T10:00")
    grid = await planner.month_grid(datetime.date(2024, 5, 1), selected=datetime.date(2024, 5, 2),
                                    today=datetime.date(2024, 5, 1))

    day = next(d for d in grid if d.day == datetime.date(2024, 5, 2))
    assert day.has_tasks and day.is_selected


@pytest.mark.asyncio
async def test_new_task_defaults_use_preferences(planner):
    start, end, deadline = planner.new_task_defaults(datetime.datetime(2024, 5, 1, 9, 0))
    assert end - start == datetime.timedelta(hours=1)
    assert deadline == end


@pytest.mark.asyncio
async def test_expense_flow(planner):
    lunch = await planner.add_expense(12.0, ExpenseCategory.FOOD, "2024-01-15", "Lunch")
    await planner.add_expense(30.0, "SUPPLIES", "2024-02-01")
    await planner.set_monthly_limit(40)

    summary = await planner.expense_summary()
    assert summary.total_spent == pytest.approx(42.0)
    assert summary.monthly_limit == 40
    assert summary.usage.bar_percent == 100.0
    assert summary.usage.rounded_percent == 105
    assert summary.usage.over_budget
    assert [m.key for m in summary.months] == ["2024-02", "2024-01"]
    assert summary.months[1].expenses == [lunch]
    assert summary.months[1].total == pytest.approx(12.0)


@pytest.mark.asyncio
async def test_monthly_limit_defaults_to_preferences(planner):
    assert await planner.get_monthly_limit() == 1000.0


@pytest.mark.asyncio
async def test_confirmed_expense_is_locked(planner):
    expense = await planner.add_expense(99.0, ExpenseCategory.ESSENTIAL, "2024-03-01")
    await planner.toggle_expense_confirmed(expense.id)

    with pytest.raises(ExpenseLockedError):
        await planner.delete_expense(expense.id)
    assert len(await planner.list_expenses()) == 1

    await planner.toggle_expense_confirmed(expense.id)
    await planner.delete_expense(expense.id)
    assert await planner.list_expenses() == []


@pytest.mark.asyncio
async def test_unknown_expense_is_reported(planner):
    await planner.add_expense(5.0, ExpenseCategory.FOOD, "2024-03-01")

    with pytest.raises(ExpenseNotFoundError):
        await planner.toggle_expense_received("missing")
    with pytest.raises(ExpenseNotFoundError):
        await planner.delete_expense("missing")
    assert len(await planner.list_expenses()) == 1


@pytest.mark.asyncio
async def test_delete_unknown_task_keeps_store(planner):
    task = await planner.add_task("Stay", "2024-05-01T09:00", "2024-05-01T10:00", "2024-05-01T10:00")

    with pytest.raises(TaskNotFoundError):
        await planner.delete_task("missing")
    assert await planner.list_tasks() == [task]


class TestConcurrentWrites:

    @pytest.mark.asyncio
    async def test_concurrent_adds_into_empty_store(self, planner):
        tasks = await asyncio.gather(*(
            planner.add_task(f"Task {i}", "2024-05-01T09:00", "2024-05-01T10:00", "2024-05-01T10:00")
            for i in range(5)
        ))

        stored = await planner.list_tasks()
        assert len(stored) == 5
        assert {t.id for t in stored} == {t.id for t in tasks}

    @pytest.mark.asyncio
    async def test_concurrent_adds_keep_existing_tasks(self, planner):
        first = await planner.add_task("Seed", "2024-05-01T08:00", "2024-05-01T09:00", "2024-05-01T09:00")

        await asyncio.gather(*(
            planner.add_task(f"Task {i}", "2024-05-01T09:00", "2024-05-01T10:00", "2024-05-01T10:00")
            for i in range(5)
        ))

        stored = await planner.list_tasks()
        assert len(stored) == 6
        assert stored[0] == first

    @pytest.mark.asyncio
    async def test_concurrent_toggles_and_expenses(self, planner):
        a = await planner.add_task("A", "2024-05-01T09:00", "2024-05-01T10:00", "2024-05-01T10:00")
        b = await planner.add_task("B", "2024-05-01T11:00", "2024-05-01T12:00", "2024-05-01T12:00")

        await asyncio.gather(
            planner.toggle_task(a.id),
            planner.toggle_task(b.id),
            planner.add_expense(10.0, ExpenseCategory.FOOD, "2024-05-01"),
            planner.add_expense(20.0, ExpenseCategory.FOOD, "2024-05-01"),
        )

        assert all(t.is_completed for t in await planner.list_tasks())
        assert len(await planner.list_expenses()) == 2


@pytest.mark.asyncio
async def test_language_preference_applies_to_messages(task_repo, expense_repo, budget_repo):
    planner = PlannerService(
        task_repo=task_repo,
        expense_repo=expense_repo,
        budget_repo=budget_repo,
        preferences=UserPreferences(language="zh"),
    )
    assert get_language() == "zh"

    with pytest.raises(DeadlineExceededError) as exc_info:
        await planner.add_task("Too long", "2024-05-01T09:00", "2024-05-01T10:00", "2024-05-01T09:59")
    assert exc_info.value.user_message == "警告：執行時間超過截止期限"
