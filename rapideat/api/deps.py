"""
API Dependencies.

Shared dependencies for authentication, database sessions, etc.
"""

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from rapideat.core.config import settings
from rapideat.core.database import get_db, get_optional_db
from rapideat.models.user import SafeUser
from rapideat.services.auth import SessionManager


def get_session_token(request: Request) -> Optional[str]:
    """
    Read the raw session token from the session cookie.

    Returns:
        str | None: The token, or None if the cookie is absent or empty.
    """
    return request.cookies.get(settings.auth_session_cookie) or None


async def get_session_manager(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SessionManager:
    """Session manager bound to the request's database session."""
    return SessionManager(db)


async def get_optional_user(
    token: Annotated[Optional[str], Depends(get_session_token)],
    manager: Annotated[SessionManager, Depends(get_session_manager)],
) -> Optional[SafeUser]:
    """
    Dependency to get the current user if authenticated, otherwise None.

    Args:
        token: Raw session token from the cookie.
        manager: Session manager for this request.

    Returns:
        SafeUser | None: The authenticated user or None.
    """
    return await manager.resolve_current_user(token)


async def get_current_user(
    user: Annotated[Optional[SafeUser], Depends(get_optional_user)],
) -> SafeUser:
    """
    Dependency to get the current authenticated user.

    Raises:
        HTTPException: If there is no valid session.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user


# Type aliases for cleaner dependency injection
CurrentUser = Annotated[SafeUser, Depends(get_current_user)]
OptionalUser = Annotated[Optional[SafeUser], Depends(get_optional_user)]
Manager = Annotated[SessionManager, Depends(get_session_manager)]
SessionToken = Annotated[Optional[str], Depends(get_session_token)]
OptionalDbSession = Annotated[Optional[AsyncSession], Depends(get_optional_db)]
