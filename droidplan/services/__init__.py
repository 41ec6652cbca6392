"""Services layer - Business logic"""

from .calendar_service import CalendarService
from .breakdown_service import BreakdownService
from .planner_service import PlannerService

__all__ = ["CalendarService", "BreakdownService", "PlannerService"]
