"""Database models."""
from todo_api.models.task import Task
from todo_api.models.user import User

__all__ = [
    "User",
    "Task",
]
