"""
Repository Pattern Implementation.

Architecture Decision: Why Repository Pattern?
Separates data access logic from business logic. Makes it easy to:
- Switch database implementations
- Mock data for testing
- Keep the core functions free of any storage state

Each collection lives under its own storage key and is overwritten as a whole
on every save (no incremental diffing, no transaction log).
"""

import json
import logging
import math
from typing import Any, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from droidplan.domain.models import Task, Expense
from droidplan.infra.db import StorageEntryModel, get_engine

logger = logging.getLogger(__name__)

TASKS_KEY = "droidplan_tasks"
EXPENSES_KEY = "droidplan_expenses"
MONTHLY_LIMIT_KEY = "droidplan_monthly_limit"

ModelT = TypeVar("ModelT", bound=BaseModel)


class StorageRepository:
    """
    Raw access to the key/value storage table.

    Values are JSON documents; callers decide what lives under each key.
    """

    def __init__(self, session: Optional[AsyncSession] = None):
        self.session = session

    async def _get_session(self) -> AsyncSession:
        """Get session - either injected or create new one"""
        if self.session:
            return self.session
        engine = get_engine()
        return engine.get_session()

    async def read(self, key: str) -> Optional[Any]:
        """
        Read and decode the value stored under a key.

        Returns:
            The decoded JSON value, or None if the key is missing or unreadable
        """
        session = await self._get_session()
        async with session:
            entry = await session.get(StorageEntryModel, key)
            if entry is None:
                return None
            raw = entry.value

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Discarding unreadable value under '{key}': {e}")
            return None

    async def write(self, key: str, value: Any) -> None:
        """Overwrite the value stored under a key"""
        session = await self._get_session()
        async with session:
            await session.merge(StorageEntryModel(key=key, value=json.dumps(value)))
            await session.commit()

    async def remove(self, key: str) -> int:
        """Delete a key. Returns count of deleted rows."""
        session = await self._get_session()
        async with session:
            result = await session.execute(
                delete(StorageEntryModel).where(StorageEntryModel.key == key)
            )
            await session.commit()
            return result.rowcount


class CollectionRepository(StorageRepository, Generic[ModelT]):
    """
    Persists a whole collection of domain models under one storage key.

    Converts between domain models (Pydantic) and the stored JSON array.
    """

    storage_key: str
    model: Type[ModelT]

    async def get_all(self) -> List[ModelT]:
        """Load the full collection, skipping records that fail validation"""
        data = await self.read(self.storage_key)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning(f"Expected a list under '{self.storage_key}', got {type(data).__name__}")
            return []

        items = []
        for record in data:
            try:
                items.append(self.model.model_validate(record))
            except ValidationError as e:
                logger.warning(f"Skipping invalid {self.model.__name__} record: {e.error_count()} error(s)")
        return items

    async def save_all(self, items: List[ModelT]) -> None:
        """Overwrite the stored collection"""
        payload = [item.model_dump(mode="json", by_alias=True) for item in items]
        await self.write(self.storage_key, payload)
        logger.info(f"Saved {len(payload)} record(s) under '{self.storage_key}'")

    async def delete_all(self) -> int:
        """Delete the whole collection. Returns count of deleted rows."""
        return await self.remove(self.storage_key)


class TaskRepository(CollectionRepository[Task]):
    """Handles Task collection persistence"""
    storage_key = TASKS_KEY
    model = Task


class ExpenseRepository(CollectionRepository[Expense]):
    """Handles Expense collection persistence"""
    storage_key = EXPENSES_KEY
    model = Expense


class BudgetRepository(StorageRepository):
    """
    Handles the monthly spending limit setting.
    """

    async def get_monthly_limit(self, default: float = 0.0) -> float:
        """Get the stored monthly limit, or the default if none is stored"""
        value = await self.read(MONTHLY_LIMIT_KEY)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return default
        return float(value)

    async def set_monthly_limit(self, limit: float) -> float:
        """Store a new monthly limit"""
        if math.isnan(limit) or limit < 0:
            raise ValueError(f"Monthly limit must be a non-negative number, got {limit}")
        await self.write(MONTHLY_LIMIT_KEY, limit)
        return limit
