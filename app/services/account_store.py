"""Account store: the only module that queries or writes the users table.

Every method is a single round trip (plus commit for writes). There is no
transaction spanning several calls, so a uniqueness pre-check in the service can
race with a concurrent writer. The expression indexes on lower(email) and
lower(username) are the backstop: a losing insert/update surfaces here as
UniqueConstraintViolation, which the service turns into a duplicate error.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import StoreError
from app.models import User

logger = logging.getLogger(__name__)

# Index name -> field, matched against the driver's constraint error text.
UNIQUE_INDEX_FIELDS = {
    "ix_users_email_lower": "email",
    "ix_users_username_lower": "username",
}


class UniqueConstraintViolation(Exception):
    """The store rejected a write on the email or username unique index."""

    def __init__(self, field: str | None) -> None:
        self.field = field
        super().__init__(f"unique constraint violated on {field or 'unknown field'}")


def _violated_field(error: IntegrityError) -> str | None:
    text = str(error.orig)
    for index_name, field in UNIQUE_INDEX_FIELDS.items():
        if index_name in text:
            return field
    return None


class AccountStore:
    """Narrow query interface over the users table for one SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        """Roll back on failure; translate constraint errors and hide the rest behind StoreError."""
        try:
            yield
        except IntegrityError as e:
            self.session.rollback()
            field = _violated_field(e)
            if field is None and "unique" not in str(e.orig).lower():
                logger.exception("Store integrity failure during %s", operation)
                raise StoreError() from e
            raise UniqueConstraintViolation(field) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("Store failure during %s", operation)
            raise StoreError() from e

    def insert(self, username: str, email: str, password_hash: str, role: str) -> User:
        """Insert a user row; email must already be lowercased."""
        user = User(username=username, email=email, password_hash=password_hash, role=role)
        with self._guard("insert"):
            self.session.add(user)
            self.session.commit()
            self.session.refresh(user)
        return user

    def find_by_email(self, email: str) -> User | None:
        with self._guard("find_by_email"):
            return (
                self.session.query(User)
                .filter(func.lower(User.email) == email.lower())
                .first()
            )

    def find_by_username(self, username: str) -> User | None:
        with self._guard("find_by_username"):
            return (
                self.session.query(User)
                .filter(func.lower(User.username) == username.lower())
                .first()
            )

    def find_by_id(self, user_id: int) -> User | None:
        with self._guard("find_by_id"):
            return self.session.get(User, user_id)

    def update_profile(self, user_id: int, username: str, email: str) -> User | None:
        """Set username and email and refresh updated_at. Returns None if the row is gone."""
        with self._guard("update_profile"):
            user = self.session.get(User, user_id)
            if user is None:
                return None
            user.username = username
            user.email = email
            user.updated_at = func.now()
            self.session.commit()
            self.session.refresh(user)
        return user

    def update_password(self, user_id: int, password_hash: str) -> None:
        with self._guard("update_password"):
            self.session.query(User).filter(User.id == user_id).update(
                {User.password_hash: password_hash, User.updated_at: func.now()},
                synchronize_session="fetch",
            )
            self.session.commit()

    def delete_by_id(self, user_id: int) -> None:
        with self._guard("delete_by_id"):
            self.session.query(User).filter(User.id == user_id).delete()
            self.session.commit()

    def list_all(self) -> list[User]:
        """All users, newest first."""
        with self._guard("list_all"):
            return (
                self.session.query(User)
                .order_by(User.created_at.desc(), User.id.desc())
                .all()
            )
