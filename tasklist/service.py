import logging
from dataclasses import replace
from typing import List

from .config import DESCRIPTION_MAX_LENGTH
from .errors import ForbiddenError, ValidationError
from .models import Task
from .store import TaskPatch, TaskStore

logger = logging.getLogger(__name__)


def validate_description(description: str) -> str:
    """Return the trimmed description or raise ``ValidationError``."""
    value = (description or "").strip()
    if not value:
        raise ValidationError({"description": ["The description field is required."]})
    if len(value) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError({
            "description": [
                f"The description field must not be greater than {DESCRIPTION_MAX_LENGTH} characters."
            ]
        })
    return value


class TaskService:
    """Owner-scoped task operations.

    Every mutation returns the caller's refreshed ordered task list.
    """

    def __init__(self, store: TaskStore):
        self.store = store

    def list_tasks(self, user_id: str) -> List[Task]:
        return self.store.list_by_owner(user_id)

    def get_task(self, user_id: str, task_id: int) -> Task:
        return self._owned_task(user_id, task_id)

    def create_task(self, user_id: str, description: str) -> List[Task]:
        description = validate_description(description)
        task = self.store.create(user_id, description)
        logger.info("Task %s created by user %s", task.id, user_id)
        return self.list_tasks(user_id)

    def update_task(self, user_id: str, task_id: int, patch: TaskPatch) -> List[Task]:
        self._owned_task(user_id, task_id)
        if patch.is_empty():
            return self.list_tasks(user_id)
        if patch.description is not None:
            patch = replace(patch, description=validate_description(patch.description))

        self.store.update(task_id, patch)
        logger.info("Task %s updated by user %s", task_id, user_id)
        return self.list_tasks(user_id)

    def delete_task(self, user_id: str, task_id: int) -> List[Task]:
        self._owned_task(user_id, task_id)
        self.store.delete(task_id)
        logger.info("Task %s deleted by user %s", task_id, user_id)
        return self.list_tasks(user_id)

    def _owned_task(self, user_id: str, task_id: int) -> Task:
        task = self.store.get(task_id)
        if task.user_id != user_id:
            logger.warning("User %s denied access to task %s", user_id, task_id)
            raise ForbiddenError(task_id)
        return task
