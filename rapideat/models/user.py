"""
User model for authentication and authorization.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from rapideat.core.clock import to_iso_z, utcnow
from rapideat.core.config import settings


class UserRole(str, Enum):
    """User role enumeration."""
    ADMIN = "admin"
    USER = "user"


class User(SQLModel, table=True):
    """
    User database model.

    Attributes:
        id: Primary key.
        name: Display name.
        email: Unique email address, stored lower-cased.
        password_hash: Bcrypt digest. Never leaves the server.
        role: User role (admin or user).
        created_at: Account creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = settings.auth_users_table

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)
    password_hash: str
    role: UserRole = UserRole.USER
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)


class SafeUser(SQLModel):
    """Schema for reading user data (no password hash field at all)."""
    id: str
    name: str
    email: str
    role: UserRole
    created_at: str
    updated_at: str

    @classmethod
    def from_user(cls, user: User) -> "SafeUser":
        return cls(
            id=str(user.id) if user.id is not None else "",
            name=user.name,
            email=user.email,
            role=user.role,
            created_at=to_iso_z(user.created_at),
            updated_at=to_iso_z(user.updated_at),
        )
