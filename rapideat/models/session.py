"""
Login session model.

Only the keyed lookup hash of a session token is stored; the raw token
lives in the client's cookie and nowhere else.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from rapideat.core.clock import utcnow
from rapideat.core.config import settings


class AuthSession(SQLModel, table=True):
    """
    Active login grant.

    Sessions are immutable: they are inserted at login and deleted at logout
    or on first access after expiry, never extended in place.

    Attributes:
        id: Primary key.
        user_id: Owning user. Weak reference, no foreign key.
        token_hash: HMAC of the raw token (unique).
        created_at: Issuance timestamp.
        expires_at: Session is invalid from this instant on.
        user_agent: Client user agent at issuance, if known.
        ip: Client address at issuance, if known.
    """

    __tablename__ = settings.auth_sessions_table

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    token_hash: str = Field(unique=True, index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    expires_at: datetime = Field(sa_type=DateTime)
    user_agent: Optional[str] = None
    ip: Optional[str] = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


@dataclass(frozen=True)
class IssuedSession:
    """Raw token handed back exactly once, when a session is created."""
    token: str
    expires_at: datetime
    max_age: int

    def __repr__(self) -> str:
        return f"IssuedSession(expires_at={self.expires_at!r}, max_age={self.max_age})"
