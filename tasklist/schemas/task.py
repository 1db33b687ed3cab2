from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ..store import TaskPatch


class TaskCreate(BaseModel):
    """Schema for creating new tasks."""
    description: str = ""


class TaskUpdate(BaseModel):
    """Schema for updating existing tasks. Omitted fields are left unchanged."""
    description: Optional[str] = None
    completed: Optional[bool] = None

    def to_patch(self) -> TaskPatch:
        return TaskPatch(description=self.description, completed=self.completed)


class Task(BaseModel):
    """Task as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str
    completed: bool
    created_at: datetime
    updated_at: datetime
