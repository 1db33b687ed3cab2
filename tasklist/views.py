from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .errors import ValidationError
from .models import Task
from .service import TaskService
from .store import TaskPatch


@dataclass
class TaskListView:
    """UI state of the task list page for one user.

    Holds the displayed tasks, the pending text of the new-task form and at
    most one task in inline-edit mode together with its draft description.
    Every submit replaces ``tasks`` with the list the service returns.
    """

    service: TaskService
    user_id: str
    tasks: List[Task] = field(default_factory=list)
    new_task: str = ""
    editing_task_id: Optional[int] = None
    edit_description: str = ""
    errors: Dict[str, List[str]] = field(default_factory=dict)

    def load(self) -> "TaskListView":
        self.tasks = self.service.list_tasks(self.user_id)
        return self

    @property
    def incomplete_tasks(self) -> List[Task]:
        return [task for task in self.tasks if not task.completed]

    @property
    def completed_tasks(self) -> List[Task]:
        return [task for task in self.tasks if task.completed]

    def begin_edit(self, task_id: int) -> None:
        """Enter edit mode for a displayed, incomplete task.

        Unknown ids leave the view untouched.
        """
        for task in self.incomplete_tasks:
            if task.id == task_id:
                self.editing_task_id = task.id
                self.edit_description = task.description
                return

    def cancel_edit(self) -> None:
        self.editing_task_id = None
        self.edit_description = ""

    def submit_new_task(self, description: str) -> bool:
        self.new_task = description
        try:
            self.tasks = self.service.create_task(self.user_id, description)
        except ValidationError as exc:
            self.errors = exc.errors
            return False
        self.new_task = ""
        self.errors = {}
        return True

    def submit_edit(self, task_id: int, description: str) -> bool:
        """Save an inline edit. Completed tasks are not editable here."""
        if self.service.get_task(self.user_id, task_id).completed:
            self.cancel_edit()
            self.errors = {"description": ["Completed tasks cannot be edited."]}
            return False

        self.editing_task_id = task_id
        self.edit_description = description
        try:
            self.tasks = self.service.update_task(
                self.user_id, task_id, TaskPatch(description=description)
            )
        except ValidationError as exc:
            self.errors = exc.errors
            return False
        self.cancel_edit()
        self.errors = {}
        return True

    def set_completed(self, task_id: int, completed: bool) -> None:
        self.tasks = self.service.update_task(
            self.user_id, task_id, TaskPatch(completed=completed)
        )
        if self.editing_task_id == task_id and completed:
            self.cancel_edit()

    def delete(self, task_id: int) -> None:
        self.tasks = self.service.delete_task(self.user_id, task_id)
        if self.editing_task_id == task_id:
            self.cancel_edit()

    def context(self) -> dict:
        return {
            "tasks": self.tasks,
            "incomplete_tasks": self.incomplete_tasks,
            "completed_tasks": self.completed_tasks,
            "new_task": self.new_task,
            "editing_task_id": self.editing_task_id,
            "edit_description": self.edit_description,
            "errors": self.errors,
        }
