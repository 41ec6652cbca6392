"""
Data Seeder for DroidPlan.
Populates the database with realistic tasks and expenses for demo purposes.
"""

import asyncio
import logging
import sys
import random
from datetime import datetime, timedelta, date
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from droidplan.domain.models import ExpenseCategory
from droidplan.infra.config import get_settings
from droidplan.infra.db import init_db
from droidplan.infra.repository import TaskRepository, ExpenseRepository
from droidplan.services.planner_service import PlannerService


async def reset_database():
    """Delete the existing database file to ensure a fresh seed"""
    db_path = get_settings().data_dir / 'droidplan.db'
    if db_path.exists():
        print(f"Removing existing database at: {db_path}")
        try:
            db_path.unlink()
            print("Database removed.")
        except PermissionError:
            print("ERROR: Could not remove database. It might be in use.")
            sys.exit(1)
    else:
        print(f"No existing database found at: {db_path}")


async def seed():
    await reset_database()
    print("Starting data seeding...")

    # Initialize DB (creates tables if needed)
    await init_db()
    planner = PlannerService()

    # 1. Tasks for the coming week, 9am - 5pm on weekdays
    # - 9:00 - 12:00: Deep Work
    # - 13:00 - 14:00: Meetings / Admin
    # - one multi-day task spanning Wednesday to Friday
    today = date.today()
    for offset in range(7):
        current = today + timedelta(days=offset)
        if current.weekday() >= 5:  # Sat=5, Sun=6
            continue

        day_date = datetime.combine(current, datetime.min.time())
        await planner.add_task(
            "Deep work block",
            day_date.replace(hour=9),
            day_date.replace(hour=12),
            day_date.replace(hour=12),
        )
        task = await planner.add_task(
            random.choice(["Team sync", "Inbox zero", "Plan next sprint"]),
            day_date.replace(hour=13),
            day_date.replace(hour=14),
            day_date.replace(hour=17),
        )
        if offset == 0:
            await planner.add_subtask(task.id, "Prepare notes")
            await planner.toggle_task(task.id)
        print(f"Generated tasks for {current}")

    wednesday = today + timedelta(days=(2 - today.weekday()) % 7)
    start = datetime.combine(wednesday, datetime.min.time()).replace(hour=10)
    await planner.add_task("Conference trip", start, start + timedelta(days=2), start + timedelta(days=2, hours=2))

    # 2. Expenses over the last three months
    for offset in range(0, 90, 4):
        spent_on = today - timedelta(days=offset)
        expense = await planner.add_expense(
            round(random.uniform(3, 80), 2),
            random.choice(list(ExpenseCategory)),
            spent_on,
            note="Seeded",
        )
        if offset > 30:
            await planner.toggle_expense_confirmed(expense.id)

    await planner.set_monthly_limit(get_settings().preferences.default_monthly_limit)

    tasks = await TaskRepository().get_all()
    expenses = await ExpenseRepository().get_all()
    print(f"Seeding complete: {len(tasks)} tasks, {len(expenses)} expenses.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())
