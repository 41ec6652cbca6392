"""DroidPlan - personal task planning core with calendar, stats and expenses"""

__version__ = "1.0.0"
