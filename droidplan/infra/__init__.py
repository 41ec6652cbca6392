"""Infrastructure layer - Configuration and persistence"""

from .db import DatabaseEngine, StorageEntryModel, get_engine, init_db
from .repository import TaskRepository, ExpenseRepository, BudgetRepository

__all__ = [
    "DatabaseEngine", "StorageEntryModel", "get_engine", "init_db",
    "TaskRepository", "ExpenseRepository", "BudgetRepository",
]
