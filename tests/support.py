"""Shared helpers: an in-memory SQLite database with the users schema."""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.tokens import TokenConfig, TokenIssuer
from app.models import Base
from app.services.account_store import AccountStore
from app.services.accounts import AccountService

TEST_SECRET = "unit-test-secret"


def memory_sessionmaker() -> sessionmaker:
    """One shared in-memory database per call; every session sees the same data."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


def memory_session() -> Session:
    return memory_sessionmaker()()


def make_issuer(expire_minutes: int = 24 * 60) -> TokenIssuer:
    return TokenIssuer(TokenConfig(secret=TEST_SECRET, expire_minutes=expire_minutes))


def make_service(session: Session) -> AccountService:
    return AccountService(AccountStore(session), make_issuer(), bcrypt_rounds=4)
