"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    """Sign up. Omitting the password creates a passwordless user."""

    username: str = Field(..., min_length=1, max_length=255)
    email: EmailStr | None = None
    description: str | None = Field(None, max_length=2000)
    password: str | None = Field(None, min_length=8, max_length=128)


class UserUpdate(BaseModel):
    """Update profile fields."""

    username: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    description: str | None = Field(None, max_length=2000)


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str | None
    description: str | None
    is_admin: bool
    has_password: bool
    created_at: datetime
    updated_at: datetime
