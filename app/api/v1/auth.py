"""Registration and login endpoints; both return the user and a JWT access token."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.v1.deps import get_account_service
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from app.services.accounts import AccountResult, AccountService

router = APIRouter()


def _auth_response(result: AccountResult, service: AccountService) -> AuthResponse:
    return AuthResponse(
        user=result.user,
        access_token=result.token,
        token_type="bearer",
        expires_in=service.tokens.expire_minutes * 60,
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    service: Annotated[AccountService, Depends(get_account_service)],
) -> AuthResponse:
    """Create a 'common' account and sign it in."""
    result = service.register(body.username, body.email, body.password)
    return _auth_response(result, service)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    service: Annotated[AccountService, Depends(get_account_service)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    result = service.login(body.email, body.password)
    return _auth_response(result, service)
