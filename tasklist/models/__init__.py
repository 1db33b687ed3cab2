from .task import Task, utcnow
from .user import User

__all__ = ["Task", "User", "utcnow"]
