"""
Credential store: persistence for user records.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from rapideat.core.database import translate_store_errors
from rapideat.core.exceptions import DuplicateEmail
from rapideat.models.user import User

from .validators import normalize_email

logger = logging.getLogger(__name__)


class UserStore:
    """
    Reads and writes User rows.

    Email uniqueness is enforced by the unique index on the email column,
    so two concurrent inserts of the same address cannot both succeed.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, user: User) -> User:
        """
        Insert a new user and return it with its assigned id.

        Raises:
            DuplicateEmail: If the email is already registered.
            StoreUnavailable: If the database cannot be reached.
        """
        user.email = normalize_email(user.email)
        with translate_store_errors("user"):
            self.db.add(user)
            try:
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                logger.info("Rejected duplicate registration")
                raise DuplicateEmail()
            await self.db.refresh(user)
        return user

    async def find_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive lookup by email."""
        with translate_store_errors("user"):
            result = await self.db.execute(
                select(User).where(User.email == normalize_email(email))
            )
            return result.scalar_one_or_none()

    async def find_by_id(self, user_id: int) -> Optional[User]:
        with translate_store_errors("user"):
            return await self.db.get(User, user_id)
