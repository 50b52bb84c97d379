"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from garagelog.schemas.user import UserResponse


class Credentials(BaseModel):
    """Login request. Passwordless users send an empty password."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field("", max_length=128)


class TokenResponse(BaseModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    expires_at: datetime


class AuthResponse(TokenResponse):
    """Login response with token and user info."""

    user: UserResponse


class ClaimsResponse(BaseModel):
    """Decoded token claims."""

    user_id: int
    username: str
    is_admin: bool
    expires_at: datetime


class PasswordChange(BaseModel):
    """Change (or clear, with an empty new_password) a user's password."""

    username: str = Field(..., max_length=255)
    current_password: str | None = Field(None, max_length=128)
    new_password: str | None = Field(None, max_length=128)

    @field_validator("new_password")
    @classmethod
    def check_length(cls, value: str | None) -> str | None:
        if value and len(value) < 8:
            raise ValueError("Password must be at least 8 characters")
        return value
