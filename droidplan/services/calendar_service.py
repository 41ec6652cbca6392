"""
Calendar Service - Day filtering and month grids for the timeline view.

A task is "on" a calendar day when its execution window intersects the closed
day interval [start_of_day, end_of_day]. This is inclusive overlap, not
containment: a task spanning several days shows up on every day it touches.

All day boundaries use naive local time.
"""

import datetime
from typing import Iterable, List, Optional, Union

import holidays

from droidplan.domain.models import CalendarDay, Task

DayInput = Union[datetime.date, datetime.datetime]


def _as_date(day: DayInput) -> datetime.date:
    if isinstance(day, datetime.datetime):
        return day.date()
    return day


def start_of_day(day: DayInput) -> datetime.datetime:
    """Local midnight of the given day"""
    return datetime.datetime.combine(_as_date(day), datetime.time.min)


def end_of_day(day: DayInput) -> datetime.datetime:
    """Last representable instant of the given day (23:59:59.999999)"""
    return datetime.datetime.combine(_as_date(day), datetime.time.max)


def overlaps_day(task: Task, day: DayInput) -> bool:
    """Check whether a task's execution window touches the given day"""
    return (task.execution_start <= end_of_day(day)
            and task.execution_end >= start_of_day(day))


def tasks_overlapping_day(tasks: Iterable[Task], day: DayInput) -> List[Task]:
    """
    Select the tasks active on a day.

    Args:
        tasks: Task collection snapshot
        day: The calendar day (a datetime is reduced to its date)

    Returns:
        Matching tasks in input order
    """
    return [t for t in tasks if overlaps_day(t, day)]


def sort_by_execution_start(tasks: Iterable[Task]) -> List[Task]:
    """Order tasks by execution start, ties keep input order"""
    return sorted(tasks, key=lambda t: t.execution_start)


def grid_bounds(month: DayInput) -> tuple:
    """
    First and last day of the calendar page for a month.

    The page starts on the Sunday on/before the 1st and ends on the Saturday
    on/after the last day of the month.
    """
    first = _as_date(month).replace(day=1)
    next_month = (first + datetime.timedelta(days=32)).replace(day=1)
    last = next_month - datetime.timedelta(days=1)

    # weekday(): Monday=0 ... Sunday=6
    grid_start = first - datetime.timedelta(days=(first.weekday() + 1) % 7)
    grid_end = last + datetime.timedelta(days=(5 - last.weekday()) % 7)
    return grid_start, grid_end


class CalendarService:
    """
    Builds calendar pages with task indicators and optional holiday names.
    """

    def __init__(self, holiday_country: Optional[str] = None,
                 holiday_subdiv: Optional[str] = None):
        """
        Initialize the calendar.

        Args:
            holiday_country: ISO country code for holiday names, None to disable
            holiday_subdiv: Optional subdivision (state/province) code
        """
        self.holiday_country = holiday_country
        self.holiday_subdiv = holiday_subdiv

        self.holidays = None
        if holiday_country:
            self.holidays = holidays.country_holidays(holiday_country, subdiv=holiday_subdiv)

    @classmethod
    def from_preferences(cls, prefs) -> 'CalendarService':
        """Create a calendar configured from user preferences"""
        return cls(holiday_country=prefs.holiday_country, holiday_subdiv=prefs.holiday_subdiv)

    def get_holiday_name(self, date_obj: datetime.date) -> str:
        """
        Get the name of the holiday for a given date.

        Returns:
            Holiday name or empty string if not a holiday (or holidays disabled)
        """
        if self.holidays is None:
            return ""
        return self.holidays.get(date_obj, "")

    def month_grid(self, month: DayInput,
                   today: Optional[datetime.date] = None,
                   selected: Optional[DayInput] = None,
                   tasks: Iterable[Task] = ()) -> List[CalendarDay]:
        """
        Build the rectangular 7-column grid for a month.

        Args:
            month: Any day within the target month
            today: Reference "today" (defaults to the local date)
            selected: The currently selected day, if any
            tasks: Tasks used for the per-day indicators

        Returns:
            35 or 42 days, Sunday first, each tagged for display
        """
        target = _as_date(month)
        today = today or datetime.date.today()
        selected_date = _as_date(selected) if selected is not None else None
        tasks = list(tasks)

        grid_start, grid_end = grid_bounds(target)
        days = []
        current = grid_start
        while current <= grid_end:
            day_tasks = tasks_overlapping_day(tasks, current)
            days.append(CalendarDay(
                day=current,
                in_month=(current.year, current.month) == (target.year, target.month),
                is_today=current == today,
                is_selected=current == selected_date,
                task_count=len(day_tasks),
                has_completed=any(t.is_completed for t in day_tasks),
                holiday_name=self.get_holiday_name(current),
            ))
            current += datetime.timedelta(days=1)

        return days
