"""
Tests for task form validation.
"""

import datetime
import pytest

from droidplan.domain.exceptions import (
    DeadlineExceededError,
    EmptyFieldsError,
    InvalidTimestampError,
    InvertedWindowError,
    TaskValidationError,
)
from droidplan.services.validation_service import parse_timestamp, validate_task_fields


class TestValidWindows:
    """Windows with start < end <= deadline are accepted."""

    def test_end_equal_to_deadline_is_accepted(self):
        fields = validate_task_fields("Write report", "2024-05-01T09:00", "2024-05-01T10:00", "2024-05-01T10:00")
        assert fields.execution_end == fields.deadline

    def test_returns_normalized_fields(self):
        fields = validate_task_fields("  Write report  ", "2024-05-01T09:00", "2024-05-01T10:00", "2024-05-02T18:00")
        assert fields.content == "Write report"
        assert fields.execution_start == datetime.datetime(2024, 5, 1, 9, 0)
        assert fields.execution_end == datetime.datetime(2024, 5, 1, 10, 0)
        assert fields.deadline == datetime.datetime(2024, 5, 2, 18, 0)

    @pytest.mark.parametrize("start, end, deadline", [
        ("1970-01-01T00:00", "1970-01-01T00:01", "1970-01-01T00:01"),
        ("2024-05-01T23:00", "2024-05-03T01:00", "2024-05-10T00:00"),
        ("2999-12-31T10:00", "2999-12-31T11:00", "2999-12-31T12:00"),
    ])
    def test_no_bound_on_past_or_future(self, start, end, deadline):
        validate_task_fields("Task", start, end, deadline)

    def test_accepts_datetime_objects(self):
        start = datetime.datetime(2024, 5, 1, 9, 0)
        fields = validate_task_fields("Task", start, start + datetime.timedelta(hours=1),
                                      start + datetime.timedelta(hours=2))
        assert fields.execution_start == start


class TestEmptyFields:
    """Missing fields are reported before any temporal check."""

    @pytest.mark.parametrize("content, start, end, deadline", [
        ("", "2024-05-01T09:00", "2024-05-01T10:00", "2024-05-01T10:00"),
        ("Task", "", "2024-05-01T10:00", "2024-05-01T10:00"),
        ("Task", "2024-05-01T09:00", "", "2024-05-01T10:00"),
        ("Task", "2024-05-01T09:00", "2024-05-01T10:00", ""),
        ("Task", None, "2024-05-01T10:00", "2024-05-01T10:00"),
        ("   ", "2024-05-01T09:00", "2024-05-01T10:00", "2024-05-01T10:00"),
    ])
    def test_any_empty_field_fails(self, content, start, end, deadline):
        with pytest.raises(EmptyFieldsError):
            validate_task_fields(content, start, end, deadline)

    def test_empty_content_wins_over_inverted_window(self):
        with pytest.raises(EmptyFieldsError):
            validate_task_fields("", "2024-05-01T10:00", "2024-05-01T09:00", "2024-05-01T08:00")

    def test_empty_field_wins_over_unparseable_timestamp(self):
        with pytest.raises(EmptyFieldsError):
            validate_task_fields("", "garbage", "2024-05-01T09:00", "2024-05-01T10:00")


class TestInvertedWindow:
    """start >= end fails regardless of the deadline."""

    @pytest.mark.parametrize("deadline", ["2024-05-01T08:00", "2024-05-01T10:00", "2030-01-01T00:00"])
    def test_start_after_end(self, deadline):
        with pytest.raises(InvertedWindowError):
            validate_task_fields("Task", "2024-05-01T10:00", "2024-05-01T09:00", deadline)

    def test_start_equal_to_end(self):
        with pytest.raises(InvertedWindowError):
            validate_task_fields("Task", "2024-05-01T09:00", "2024-05-01T09:00", "2024-05-01T10:00")


class TestDeadlineExceeded:

    def test_end_one_minute_past_deadline(self):
        with pytest.raises(DeadlineExceededError):
            validate_task_fields("Task", "2024-05-01T09:00", "2024-05-01T10:00", "2024-05-01T09:59")

    def test_end_one_microsecond_past_deadline(self):
        end = datetime.datetime(2024, 5, 1, 10, 0)
        with pytest.raises(DeadlineExceededError):
            validate_task_fields("Task", "2024-05-01T09:00", end, end - datetime.timedelta(microseconds=1))

    def test_deadline_before_start(self):
        with pytest.raises(DeadlineExceededError):
            validate_task_fields("Task", "2024-05-01T09:00", "2024-05-01T10:00", "2024-04-30T10:00")


class TestInvalidTimestamps:

    @pytest.mark.parametrize("value", ["garbage", "2024-13-01T09:00", "01/05/2024 09:00"])
    def test_unparseable_timestamp(self, value):
        with pytest.raises(InvalidTimestampError):
            validate_task_fields("Task", value, "2024-05-01T10:00", "2024-05-01T10:00")

    def test_aware_timestamp_is_converted_to_naive_local(self):
        parsed = parse_timestamp("2024-05-01T09:00+00:00")
        expected = datetime.datetime(2024, 5, 1, 9, 0, tzinfo=datetime.timezone.utc).astimezone().replace(tzinfo=None)
        assert parsed.tzinfo is None
        assert parsed == expected


class TestUserMessages:
    """Each error kind maps to one literal message."""

    @pytest.mark.parametrize("args, message", [
        (("", "2024-05-01T09:00", "2024-05-01T10:00", "2024-05-01T10:00"),
         "COMMAND ERROR: EMPTY FIELDS DETECTED"),
        (("Task", "2024-05-01T10:00", "2024-05-01T09:00", "2024-05-01T10:00"),
         "TIME PARADOX: START MUST PRECEDE END"),
        (("Task", "2024-05-01T09:00", "2024-05-01T10:00", "2024-05-01T09:59"),
         "CRITICAL: EXECUTION OVERRUNS DEADLINE"),
        (("Task", "nope", "2024-05-01T10:00", "2024-05-01T10:00"),
         "COMMAND ERROR: INVALID TIMESTAMP"),
    ])
    def test_user_message(self, args, message):
        with pytest.raises(TaskValidationError) as exc_info:
            validate_task_fields(*args)
        assert exc_info.value.user_message == message
