"""Request/response schemas for auth and account endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """New account. Field rules are enforced by the account service."""

    username: str = Field(..., description="Username (3+ characters)")
    email: str = Field(..., description="Email address")
    password: str = Field(..., description="Password (6+ characters)")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., description="Email address")
    password: str = Field(..., description="Password")


class UpdateProfileRequest(BaseModel):
    """Omitted fields keep their current value."""

    username: str | None = None
    email: str | None = None


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str


class DeleteAccountRequest(BaseModel):
    password: str


class UserOut(BaseModel):
    """Public view of a user (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: Literal["common", "admin"]
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    """User plus JWT access token returned after register or login."""

    user: UserOut
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")


class CurrentUser(BaseModel):
    """Authenticated identity taken from token claims."""

    id: int
    email: str
    role: Literal["common", "admin"]


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserOut]
