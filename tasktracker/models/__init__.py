"""Models package."""
from .task import Task, TaskStatus, TaskPriority, utcnow
from .user import User

__all__ = ["Task", "TaskStatus", "TaskPriority", "User", "utcnow"]
