"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    CurrentUser,
    DeleteAccountRequest,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserOut,
    UsersListResponse,
)
from app.schemas.health import HealthResponse

__all__ = [
    "AuthResponse",
    "ChangePasswordRequest",
    "CurrentUser",
    "DeleteAccountRequest",
    "HealthResponse",
    "LoginRequest",
    "RegisterRequest",
    "UpdateProfileRequest",
    "UserOut",
    "UsersListResponse",
]
