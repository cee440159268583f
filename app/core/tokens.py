"""Stateless session tokens: HS256 JWTs carrying id, email and role claims."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import jwt

from app.core.errors import InvalidToken

if TYPE_CHECKING:
    from app.core.config import Settings

ROLES = ("common", "admin")


@dataclass(frozen=True)
class TokenConfig:
    """Signing configuration, built once at startup and shared read-only."""

    secret: str = field(repr=False)
    algorithm: str = "HS256"
    expire_minutes: int = 24 * 60

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenConfig":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )


@dataclass(frozen=True)
class SessionClaims:
    """Identity claims embedded in a session token."""

    id: int
    email: str
    role: str

    def as_dict(self) -> dict[str, Any]:
        return {"id": self.id, "email": self.email, "role": self.role}


class TokenIssuer:
    """Issues and verifies session tokens with a single process-wide secret."""

    def __init__(self, config: TokenConfig) -> None:
        self._config = config

    @property
    def expire_minutes(self) -> int:
        return self._config.expire_minutes

    def issue(self, claims: SessionClaims, now: datetime | None = None) -> str:
        """Sign ``claims`` with iat=now and exp=now + expire_minutes."""
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            **claims.as_dict(),
            "iat": issued_at,
            "exp": issued_at + timedelta(minutes=self._config.expire_minutes),
        }
        return jwt.encode(payload, self._config.secret, algorithm=self._config.algorithm)

    def verify(self, token: str) -> SessionClaims:
        """
        Check signature, structure and expiry; return the claims as issued.
        Raises InvalidToken when any check fails.
        """
        try:
            payload = jwt.decode(
                token,
                self._config.secret,
                algorithms=[self._config.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.PyJWTError as e:
            raise InvalidToken() from e

        user_id = payload.get("id")
        email = payload.get("email")
        role = payload.get("role")
        # bool is an int subclass; a token with id=true is not ours.
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise InvalidToken("Invalid token payload")
        if not isinstance(email, str) or role not in ROLES:
            raise InvalidToken("Invalid token payload")
        return SessionClaims(id=user_id, email=email, role=role)
