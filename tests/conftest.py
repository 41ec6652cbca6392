"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from droidplan.domain.models import UserPreferences
from droidplan.i18n import set_language
from droidplan.infra.db import Base
from droidplan.infra.repository import TaskRepository, ExpenseRepository, BudgetRepository
from droidplan.services.planner_service import PlannerService


@pytest_asyncio.fixture
async def db_engine():
    """Create an in-memory SQLite database for testing"""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Create a new session for a test"""
    async_session = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
def task_repo(db_session):
    return TaskRepository(session=db_session)


@pytest.fixture
def expense_repo(db_session):
    return ExpenseRepository(session=db_session)


@pytest.fixture
def budget_repo(db_session):
    return BudgetRepository(session=db_session)


@pytest.fixture
def planner(task_repo, expense_repo, budget_repo):
    """Planner wired to the in-memory database with default preferences"""
    return PlannerService(
        task_repo=task_repo,
        expense_repo=expense_repo,
        budget_repo=budget_repo,
        preferences=UserPreferences(language="en"),
    )


@pytest.fixture(autouse=True)
def english_messages():
    """User-facing messages are asserted in English"""
    set_language("en")
    yield
    set_language("en")

