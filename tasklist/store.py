from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.orm import Session

from .errors import NotFoundError
from .models import Task, utcnow


@dataclass(frozen=True)
class TaskPatch:
    """Partial update of a task. Fields left as ``None`` are not touched."""

    description: Optional[str] = None
    completed: Optional[bool] = None

    def is_empty(self) -> bool:
        return self.description is None and self.completed is None


class TaskStore:
    """Persistence for task records. Performs no validation."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, owner_id: str, description: str) -> Task:
        task = Task(user_id=owner_id, description=description, completed=False)
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        return task

    def get(self, task_id: int) -> Task:
        task = self.db.get(Task, task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    def list_by_owner(self, owner_id: str) -> List[Task]:
        """Incomplete tasks first, newest first within each group.

        Equal ``created_at`` values fall back to ``id`` descending.
        """
        return (
            self.db.query(Task)
            .filter(Task.user_id == owner_id)
            .order_by(Task.completed.asc(), Task.created_at.desc(), Task.id.desc())
            .all()
        )

    def update(self, task_id: int, patch: TaskPatch) -> Task:
        task = self.get(task_id)
        if patch.description is not None:
            task.description = patch.description
        if patch.completed is not None:
            task.completed = patch.completed
        task.updated_at = utcnow()

        self.db.commit()
        self.db.refresh(task)
        return task

    def delete(self, task_id: int) -> None:
        task = self.get(task_id)
        self.db.delete(task)
        self.db.commit()
