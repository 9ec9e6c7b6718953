"""
Session store: persistence for login sessions keyed by token lookup hash.
"""

from typing import Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from rapideat.core.database import translate_store_errors
from rapideat.models.session import AuthSession


class SessionStore:
    """
    Reads, inserts and deletes AuthSession rows.

    There is no update: a session is created once and later deleted.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, session: AuthSession) -> AuthSession:
        with translate_store_errors("session"):
            self.db.add(session)
            await self.db.commit()
            await self.db.refresh(session)
        return session

    async def find_by_lookup_hash(self, lookup_hash: str) -> Optional[AuthSession]:
        with translate_store_errors("session"):
            result = await self.db.execute(
                select(AuthSession).where(AuthSession.token_hash == lookup_hash)
            )
            return result.scalar_one_or_none()

    async def delete_by_lookup_hash(self, lookup_hash: str) -> int:
        """
        Delete the session with this lookup hash.

        Idempotent: deleting a missing session is not an error.

        Returns:
            int: Number of rows removed (0 or 1).
        """
        with translate_store_errors("session"):
            result = await self.db.execute(
                delete(AuthSession).where(AuthSession.token_hash == lookup_hash)
            )
            await self.db.commit()
        return result.rowcount or 0
