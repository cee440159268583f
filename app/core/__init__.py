"""Core: settings, database sessions, password hashing, session tokens and typed errors."""

from app.core.config import get_settings, settings
from app.core.database import SessionLocal, get_db
from app.core.errors import AccountError
from app.core.tokens import SessionClaims, TokenConfig, TokenIssuer

__all__ = [
    "AccountError",
    "SessionClaims",
    "SessionLocal",
    "TokenConfig",
    "TokenIssuer",
    "get_db",
    "get_settings",
    "settings",
]
