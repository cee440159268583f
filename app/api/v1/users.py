"""Profile endpoints for the signed-in user, plus the admin user list."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.v1.deps import get_account_service, get_current_user, require_admin
from app.schemas.auth import (
    ChangePasswordRequest,
    CurrentUser,
    DeleteAccountRequest,
    UpdateProfileRequest,
    UserOut,
    UsersListResponse,
)
from app.services.accounts import AccountService

router = APIRouter()


@router.get("", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> UsersListResponse:
    """List all users, newest first (admin only)."""
    return UsersListResponse(users=service.list_users())


@router.get("/me", response_model=UserOut)
def get_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> UserOut:
    return service.get_profile(current_user.id)


@router.put("/me", response_model=UserOut)
def update_me(
    body: UpdateProfileRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> UserOut:
    return service.update_profile(current_user.id, username=body.username, email=body.email)


@router.put("/me/password", status_code=status.HTTP_204_NO_CONTENT)
def change_my_password(
    body: ChangePasswordRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> None:
    service.change_password(current_user.id, body.current_password, body.new_password)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_me(
    body: DeleteAccountRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[AccountService, Depends(get_account_service)],
) -> None:
    """Delete the signed-in account. Tokens already issued stay valid until they expire."""
    service.delete_account(current_user.id, body.password)
