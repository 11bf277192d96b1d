"""User Pydantic schemas."""
from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Schema for creating a user.

    Both fields are optional at the schema level so that missing and blank
    values get the same 400 from registration.
    """

    username: str | None = Field(None, max_length=100, description="Username")
    password: str | None = Field(None, description="Password")


class UserLogin(BaseModel):
    """Schema for user login."""

    username: str | None = Field(None, description="Username")
    password: str | None = Field(None, description="Password")


class UserResponse(BaseModel):
    """Schema for user response. Never carries the password hash."""

    id: int
    username: str

    model_config = {"from_attributes": True}


class TokenResponse(BaseModel):
    """Schema for token response."""

    token: str
