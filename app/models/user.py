"""ORM model for application users (auth and RBAC)."""

from enum import Enum

from sqlalchemy import CheckConstraint, Column, DateTime, Index, Integer, String, func

from app.models.base import Base


class UserRole(str, Enum):
    common = "common"
    admin = "admin"


class User(Base):
    """
    User account for registration, login and JWT authentication.

    email is stored lowercased. Uniqueness of email and username is enforced
    case-insensitively by the expression indexes declared below the class.
    """

    __tablename__ = "users"
    __table_args__ = (CheckConstraint("role IN ('common', 'admin')", name="role"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=UserRole.common.value, server_default="common")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r} role={self.role!r}>"


# Uniqueness backstop for concurrent register/update races
Index("ix_users_email_lower", func.lower(User.email), unique=True)
Index("ix_users_username_lower", func.lower(User.username), unique=True)
