"""Task Pydantic schemas."""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TaskBase(BaseModel):
    """Base task schema."""

    name: str = Field(..., min_length=1, max_length=100, description="Task name")
    is_complete: bool = Field(default=False, description="Completion flag")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskCreate(TaskBase):
    """Schema for creating a task.

    Owner fields sent by the client are dropped; the owner is always the caller.
    """

    pass


class TaskUpdate(TaskBase):
    """Schema for replacing a task's mutable fields."""

    pass


class TaskResponse(TaskBase):
    """Schema for task response."""

    id: int

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )
