"""
Validation Service - Gatekeeper for the task store.

A task may only enter the store after its form fields pass these checks,
evaluated in order with the first failure winning:

1. all four fields present and non-empty     -> EmptyFieldsError
2. the three timestamps parse                -> InvalidTimestampError
3. execution start strictly before end       -> InvertedWindowError
4. execution end not after the deadline      -> DeadlineExceededError

No bound is placed on how far in the past or future the timestamps lie.
"""

import datetime
from typing import Union

from droidplan.domain.exceptions import (
    DeadlineExceededError,
    EmptyFieldsError,
    InvalidTimestampError,
    InvertedWindowError,
)
from droidplan.domain.models import ValidatedFields

TimestampInput = Union[str, datetime.datetime, None]


def _is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def parse_timestamp(value: Union[str, datetime.datetime]) -> datetime.datetime:
    """
    Parse a form timestamp into a naive local datetime.

    Accepts ISO-8601 strings ("2024-05-01T09:00", "2024-05-01 09:00:30",
    "2024-05-01T09:00+02:00") and datetime objects. Timezone-aware values are
    converted to local time.

    Raises:
        InvalidTimestampError: if the value cannot be parsed
    """
    if isinstance(value, datetime.datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.datetime.fromisoformat(value.strip())
        except ValueError as e:
            raise InvalidTimestampError(f"Invalid timestamp: {value!r}") from e
    else:
        raise InvalidTimestampError(f"Unsupported timestamp type: {type(value).__name__}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def validate_task_fields(content: str,
                         execution_start: TimestampInput,
                         execution_end: TimestampInput,
                         deadline: TimestampInput) -> ValidatedFields:
    """
    Validate raw task form input.

    Args:
        content: Task description
        execution_start: Start of the planned execution window
        execution_end: End of the planned execution window
        deadline: Latest instant the execution window may end

    Returns:
        The fields with content stripped and timestamps normalized

    Raises:
        EmptyFieldsError, InvalidTimestampError, InvertedWindowError,
        DeadlineExceededError
    """
    if any(_is_blank(v) for v in (content, execution_start, execution_end, deadline)):
        raise EmptyFieldsError("All fields are required")

    start = parse_timestamp(execution_start)
    end = parse_timestamp(execution_end)
    due = parse_timestamp(deadline)

    if start >= end:
        raise InvertedWindowError(f"Start {start} must precede end {end}")

    # End exactly at the deadline is allowed
    if end > due:
        raise DeadlineExceededError(f"Execution end {end} overruns deadline {due}")

    return ValidatedFields(
        content=content.strip(),
        execution_start=start,
        execution_end=end,
        deadline=due,
    )
