"""Populate the database with sample tasks.

Run with ``python -m tasklist.seed``.
"""
import logging
import random

from .config import LOG_LEVEL
from .database import create_tables, get_session
from .logging_setup import setup_logging
from .models import User
from .routers.auth import register_user
from .service import TaskService
from .store import TaskStore

logger = logging.getLogger(__name__)

SAMPLE_DESCRIPTIONS = [
    "Buy milk",
    "Call the dentist",
    "Renew library books",
    "Water the plants",
    "Pay the electricity bill",
    "Book train tickets",
    "Clean out the garage",
    "Reply to Sam's email",
    "Back up the laptop",
    "Plan the weekend hike",
]


def seed_tasks(service: TaskService, user_id: str, count: int) -> None:
    for description in random.sample(SAMPLE_DESCRIPTIONS, count):
        service.create_task(user_id, description)


def run(db) -> None:
    service = TaskService(TaskStore(db))
    users = db.query(User).all()

    if not users:
        user = register_user(db, "test@example.com", "password", "Test User")
        seed_tasks(service, user.id, 5)
        logger.info("Created test user test@example.com / password with 5 tasks")
        return

    for user in users:
        count = random.randint(3, 8)
        seed_tasks(service, user.id, count)
        logger.info("Added %d tasks for %s", count, user.email)


def main() -> None:
    setup_logging(LOG_LEVEL)
    create_tables()
    with get_session() as db:
        run(db)


if __name__ == "__main__":
    main()
