"""Pydantic schemas for request/response validation."""
from todo_api.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from todo_api.schemas.user import TokenResponse, UserCreate, UserLogin, UserResponse

__all__ = [
    # User schemas
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "TokenResponse",
    # Task schemas
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
]
