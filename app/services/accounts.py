"""Account service: registration, login, profile and password management.

Each operation is an independent workflow over the account store: validate the
input, check uniqueness, hash or verify the password, persist, and mint a
session token where the caller is signing in. Expected failures are raised as
the typed errors in app.core.errors. Users leave this module as UserOut, so the
password hash never crosses the service boundary.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache

from app.core.errors import (
    DuplicateEmail,
    DuplicateUsername,
    InvalidCredentials,
    NotFound,
    SamePassword,
    ValidationError,
)
from app.core.security import (
    BCRYPT_ROUNDS,
    EMAIL_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    hash_password,
    verify_password,
)
from app.core.tokens import SessionClaims, TokenIssuer
from app.models import User, UserRole
from app.schemas.auth import UserOut
from app.services.account_store import AccountStore, UniqueConstraintViolation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountResult:
    """A user (without password hash) plus a freshly minted session token."""

    user: UserOut
    token: str


@lru_cache
def _dummy_hash(rounds: int) -> str:
    """Hash checked when the email is unknown, so both login failures cost one bcrypt verify."""
    return hash_password("not-a-real-password", rounds=rounds)


def _normalize_username(username: str | None) -> str:
    username = (username or "").strip()
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        raise ValidationError(
            "username",
            f"Username must be between {USERNAME_MIN_LEN} and {USERNAME_MAX_LEN} characters.",
        )
    return username


def _normalize_email(email: str | None) -> str:
    email = (email or "").strip().lower()
    if "@" not in email or len(email) > EMAIL_MAX_LEN:
        raise ValidationError("email", "A valid email address is required.")
    return email


def _validate_new_password(password: str | None, field: str = "password") -> str:
    password = password or ""
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        raise ValidationError(
            field,
            f"Password must be between {PASSWORD_MIN_LEN} and {PASSWORD_MAX_LEN} characters.",
        )
    return password


def _require(value: str | None, field: str, message: str) -> str:
    if not value:
        raise ValidationError(field, message)
    return value


def _claims_for(user: User) -> SessionClaims:
    return SessionClaims(id=user.id, email=user.email, role=user.role)


def _public(user: User) -> UserOut:
    return UserOut.model_validate(user)


class AccountService:
    """Orchestrates validation, uniqueness, hashing, persistence and token issuance."""

    def __init__(
        self,
        store: AccountStore,
        tokens: TokenIssuer,
        bcrypt_rounds: int = BCRYPT_ROUNDS,
    ) -> None:
        self.store = store
        self.tokens = tokens
        self.bcrypt_rounds = bcrypt_rounds

    def _duplicate_for(
        self,
        violation: UniqueConstraintViolation,
        email: str,
        user_id: int | None = None,
    ) -> Exception:
        # Unknown index name: ask the store whether another row now holds the email.
        field = violation.field
        if field is None:
            existing = self.store.find_by_email(email)
            taken = existing is not None and existing.id != user_id
            field = "email" if taken else "username"
        logger.warning("Uniqueness race lost on %s", field)
        return DuplicateEmail() if field == "email" else DuplicateUsername()

    def _load(self, user_id: int) -> User:
        user = self.store.find_by_id(user_id)
        if user is None:
            raise NotFound()
        return user

    def register(
        self,
        username: str,
        email: str,
        password: str,
        role: str = UserRole.common.value,
    ) -> AccountResult:
        """Create an account and sign it in."""
        username = _normalize_username(username)
        email = _normalize_email(email)
        password = _validate_new_password(password)
        if role not in (r.value for r in UserRole):
            raise ValidationError("role", "Role must be 'common' or 'admin'.")

        if self.store.find_by_email(email) is not None:
            raise DuplicateEmail()
        if self.store.find_by_username(username) is not None:
            raise DuplicateUsername()

        password_hash = hash_password(password, rounds=self.bcrypt_rounds)
        try:
            user = self.store.insert(username, email, password_hash, role)
        except UniqueConstraintViolation as e:
            raise self._duplicate_for(e, email) from e

        logger.info("Account registered", extra={"user_id": user.id, "role": user.role})
        return AccountResult(user=_public(user), token=self.tokens.issue(_claims_for(user)))

    def login(self, email: str, password: str) -> AccountResult:
        """Check email and password; unknown email and wrong password fail identically."""
        email = _normalize_email(email)
        password = _require(password, "password", "Password is required.")

        user = self.store.find_by_email(email)
        if user is None:
            verify_password(password, _dummy_hash(self.bcrypt_rounds))
            logger.info("Login failed", extra={"reason": "not_found_or_bad_password"})
            raise InvalidCredentials()
        if not verify_password(password, user.password_hash):
            logger.info("Login failed", extra={"reason": "not_found_or_bad_password"})
            raise InvalidCredentials()

        logger.info("Login succeeded", extra={"user_id": user.id})
        return AccountResult(user=_public(user), token=self.tokens.issue(_claims_for(user)))

    def get_profile(self, user_id: int) -> UserOut:
        """Return the user or raise NotFound."""
        return _public(self._load(user_id))

    def update_profile(
        self,
        user_id: int,
        username: str | None = None,
        email: str | None = None,
    ) -> UserOut:
        """Change username and/or email; omitted fields keep their current value."""
        current = self._load(user_id)
        new_username = _normalize_username(current.username if username is None else username)
        new_email = _normalize_email(current.email if email is None else email)

        if new_email != current.email.lower():
            existing = self.store.find_by_email(new_email)
            if existing is not None and existing.id != current.id:
                raise DuplicateEmail()
        if new_username.lower() != current.username.lower():
            existing = self.store.find_by_username(new_username)
            if existing is not None and existing.id != current.id:
                raise DuplicateUsername()

        try:
            user = self.store.update_profile(user_id, new_username, new_email)
        except UniqueConstraintViolation as e:
            raise self._duplicate_for(e, new_email, user_id=user_id) from e
        if user is None:
            raise NotFound()

        logger.info("Profile updated", extra={"user_id": user_id})
        return _public(user)

    def change_password(self, user_id: int, current_password: str, new_password: str) -> None:
        """Replace the password after verifying the current one."""
        if current_password == new_password:
            raise SamePassword()
        _require(current_password, "current_password", "Current password is required.")
        _require(new_password, "new_password", "New password is required.")
        _validate_new_password(new_password, field="new_password")

        user = self._load(user_id)
        if not verify_password(current_password, user.password_hash):
            logger.info("Password change rejected", extra={"user_id": user_id})
            raise InvalidCredentials()

        self.store.update_password(user_id, hash_password(new_password, rounds=self.bcrypt_rounds))
        logger.info("Password changed", extra={"user_id": user_id})

    def delete_account(self, user_id: int, password: str) -> None:
        """Delete the account once the password checks out."""
        _require(password, "password", "Password is required.")

        user = self._load(user_id)
        if not verify_password(password, user.password_hash):
            logger.info("Account deletion rejected", extra={"user_id": user_id})
            raise InvalidCredentials()

        self.store.delete_by_id(user_id)
        logger.info("Account deleted", extra={"user_id": user_id})

    def list_users(self) -> list[UserOut]:
        """All users, newest first."""
        return [_public(u) for u in self.store.list_all()]
