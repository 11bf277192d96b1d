"""Service layer for business logic."""
from todo_api.services.task_service import (
    create_task,
    delete_task,
    get_owned_task,
    list_tasks,
    update_task,
)

__all__ = [
    "create_task",
    "get_owned_task",
    "list_tasks",
    "update_task",
    "delete_task",
]
