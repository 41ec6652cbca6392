"""
Task Service - Immutable operations on tasks and their subtasks.

Every function returns a new value; nothing here stores or retains the
collections it is given. The caller owns the task collection and decides how
to persist the result.
"""

import datetime
from typing import Iterable, List, Optional, Tuple

from droidplan.domain.exceptions import EmptyFieldsError, TaskNotFoundError
from droidplan.domain.models import Subtask, SuggestedTask, Task, TaskStatus, ValidatedFields
from droidplan.services.validation_service import validate_task_fields


def create_task(fields: ValidatedFields, now: Optional[datetime.datetime] = None) -> Task:
    """Create a new pending task from validated form fields"""
    return Task(
        content=fields.content,
        execution_start=fields.execution_start,
        execution_end=fields.execution_end,
        deadline=fields.deadline,
        created_at=now or datetime.datetime.now(),
    )


def edit_task(task: Task, fields: ValidatedFields) -> Task:
    """
    Apply edited form fields to a task.

    Identity, creation time, completion and subtasks are kept.
    """
    return task.model_copy(update={
        "content": fields.content,
        "execution_start": fields.execution_start,
        "execution_end": fields.execution_end,
        "deadline": fields.deadline,
    })


def toggle_task(task: Task) -> Task:
    return task.model_copy(update={"is_completed": not task.is_completed})


def find_task(tasks: Iterable[Task], task_id: str) -> Task:
    """
    Raises:
        TaskNotFoundError: if no task has the given id
    """
    for task in tasks:
        if task.id == task_id:
            return task
    raise TaskNotFoundError(f"Task {task_id} not found")


def replace_task(tasks: Iterable[Task], updated: Task) -> List[Task]:
    """Return a new collection with the task of the same id replaced"""
    return [updated if t.id == updated.id else t for t in tasks]


def remove_task(tasks: Iterable[Task], task_id: str) -> List[Task]:
    return [t for t in tasks if t.id != task_id]


# --- Subtasks ---

def add_subtask(task: Task, content: str) -> Task:
    """
    Append a checklist item to a task.

    Raises:
        EmptyFieldsError: if content is blank
    """
    content = (content or "").strip()
    if not content:
        raise EmptyFieldsError("Subtask content is required")
    return task.model_copy(update={"subtasks": [*task.subtasks, Subtask(content=content)]})


def toggle_subtask(task: Task, subtask_id: str) -> Task:
    """Flip one subtask's completion; the parent's completion is untouched"""
    subtasks = [
        s.model_copy(update={"is_completed": not s.is_completed}) if s.id == subtask_id else s
        for s in task.subtasks
    ]
    return task.model_copy(update={"subtasks": subtasks})


def remove_subtask(task: Task, subtask_id: str) -> Task:
    return task.model_copy(update={"subtasks": [s for s in task.subtasks if s.id != subtask_id]})


# --- Status ---

def is_overdue(task: Task, now: Optional[datetime.datetime] = None) -> bool:
    """A pending task whose deadline has passed"""
    now = now or datetime.datetime.now()
    return not task.is_completed and task.deadline < now


def task_status(task: Task, now: Optional[datetime.datetime] = None) -> TaskStatus:
    if is_overdue(task, now):
        return TaskStatus.CRITICAL
    if task.is_completed:
        return TaskStatus.COMPLETE
    return TaskStatus.ACTIVE


# --- Form helpers ---

def default_window(base: Optional[datetime.datetime] = None,
                   duration_hours: float = 1.0) -> Tuple[datetime.datetime, datetime.datetime, datetime.datetime]:
    """
    Default (start, end, deadline) for the add-task form.

    Starts at base (minute precision); the end and the deadline both fall
    duration_hours later.
    """
    start = (base or datetime.datetime.now()).replace(second=0, microsecond=0)
    end = start + datetime.timedelta(hours=duration_hours)
    return start, end, end


def task_from_suggestion(suggestion: SuggestedTask,
                         start: datetime.datetime,
                         deadline: datetime.datetime,
                         now: Optional[datetime.datetime] = None) -> Task:
    """
    Turn an accepted AI suggestion into a task.

    The window starts at the form's start and lasts the estimated duration;
    the deadline comes from the form. The result goes through the same
    validation as any hand-entered task.

    Raises:
        TaskValidationError: if the suggestion does not fit before the deadline
    """
    start = start.replace(second=0, microsecond=0)
    end = (start + datetime.timedelta(hours=suggestion.estimated_duration_hours)).replace(second=0, microsecond=0)
    fields = validate_task_fields(suggestion.content, start, end, deadline)
    return create_task(fields, now=now)
