from typing import Dict, List


class TaskError(Exception):
    """Base class for task operation failures."""


class ValidationError(TaskError):
    """Submitted task fields failed validation.

    ``errors`` maps a field name to its messages, ready to be rendered next to
    the offending form field.
    """

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        super().__init__("; ".join(msg for messages in errors.values() for msg in messages))


class NotFoundError(TaskError):
    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


class ForbiddenError(TaskError):
    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task {task_id} belongs to another user")
