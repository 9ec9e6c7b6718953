"""
Session manager.

Orchestrates register, login, logout and current-user resolution on top of
the credential store, the session store, the password hasher and the token
codec. Tokens go in and come out as plain parameters; reading and writing
the cookie is the HTTP layer's job.

Request states:
    UNAUTHENTICATED -> (valid credentials) -> AUTHENTICATED(session)
    AUTHENTICATED -> (logout | expiry detected) -> UNAUTHENTICATED
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Callable, Iterator, Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from rapideat.core.clock import utcnow
from rapideat.core.config import Settings, settings
from rapideat.core.exceptions import (
    AuthError,
    DuplicateEmail,
    InvalidCredentials,
    OrphanSession,
    StoreUnavailable,
    ValidationError,
)
from rapideat.core.security import (
    derive_lookup_hash,
    generate_session_token,
    get_password_hash,
    verify_password,
)
from rapideat.models.session import AuthSession, IssuedSession
from rapideat.models.user import SafeUser, User, UserRole

from .credential_store import UserStore
from .session_store import SessionStore
from .validators import (
    collect_field_errors,
    normalize_email,
    validate_login,
    validate_registration,
)

logger = logging.getLogger(__name__)


@contextmanager
def _auth_boundary(operation: str) -> Iterator[None]:
    """Let taxonomy errors through; log anything else and make it generic."""
    try:
        yield
    except AuthError:
        raise
    except Exception as exc:
        logger.exception(f"Unexpected error during {operation}")
        raise AuthError() from exc


class SessionManager:
    """
    Login/registration orchestration for one request.

    Args:
        db: Request-scoped database session.
        config: Settings providing TTL and the lookup-hash secret.
        clock: Returns the current naive-UTC time.
    """

    def __init__(
        self,
        db: AsyncSession,
        config: Settings = settings,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.config = config
        self.clock = clock
        self.users = UserStore(db)
        self.sessions = SessionStore(db)

    def _lookup_hash(self, token: str) -> str:
        return derive_lookup_hash(token, self.config.auth_secret)

    async def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        confirm_password: Optional[str],
        user_agent: Optional[str] = None,
        ip: Optional[str] = None,
    ) -> IssuedSession:
        """
        Create an account and log it in.

        Returns:
            IssuedSession: The new session's raw token and expiry.

        Raises:
            ValidationError: One message per invalid field.
            DuplicateEmail: Email already registered.
            StoreUnavailable: Database unreachable.
        """
        field_errors = collect_field_errors(
            validate_registration(name, email, password, confirm_password)
        )
        if field_errors:
            raise ValidationError(field_errors)

        with _auth_boundary("register"):
            email = normalize_email(email)
            if await self.users.find_by_email(email) is not None:
                raise DuplicateEmail()

            password_hash = await run_in_threadpool(get_password_hash, password)
            now = self.clock()
            user = await self.users.insert(
                User(
                    name=name.strip(),
                    email=email,
                    password_hash=password_hash,
                    role=UserRole.USER,
                    created_at=now,
                    updated_at=now,
                )
            )
            logger.info(f"Registered user {user.id}")
            return await self.issue_session(user.id, user_agent=user_agent, ip=ip)

    async def login(
        self,
        email: Optional[str],
        password: Optional[str],
        user_agent: Optional[str] = None,
        ip: Optional[str] = None,
    ) -> IssuedSession:
        """
        Check credentials and open a session.

        Unknown emails and wrong passwords are reported on different fields.

        Raises:
            ValidationError: Malformed email or empty password.
            InvalidCredentials: Tagged "email" or "password".
            StoreUnavailable: Database unreachable.
        """
        field_errors = collect_field_errors(validate_login(email, password))
        if field_errors:
            raise ValidationError(field_errors)

        with _auth_boundary("login"):
            user = await self.users.find_by_email(email)
            if user is None:
                raise InvalidCredentials("email", "Email not found")

            valid = await run_in_threadpool(verify_password, password, user.password_hash)
            if not valid:
                logger.info(f"Failed login for user {user.id}")
                raise InvalidCredentials("password", "Incorrect password")

            return await self.issue_session(user.id, user_agent=user_agent, ip=ip)

    async def issue_session(
        self,
        user_id: int,
        user_agent: Optional[str] = None,
        ip: Optional[str] = None,
    ) -> IssuedSession:
        """
        Create a session for a user.

        The only path that creates sessions, and the only place a raw token
        is ever returned.
        """
        with _auth_boundary("session issuance"):
            token = generate_session_token()
            now = self.clock()
            expires_at = now + timedelta(days=self.config.auth_session_ttl_days)

            await self.sessions.insert(
                AuthSession(
                    user_id=user_id,
                    token_hash=self._lookup_hash(token),
                    created_at=now,
                    expires_at=expires_at,
                    user_agent=user_agent,
                    ip=ip,
                )
            )
            logger.info(f"Issued session for user {user_id}, expires {expires_at.isoformat()}")
            return IssuedSession(
                token=token,
                expires_at=expires_at,
                max_age=self.config.session_max_age,
            )

    async def resolve_current_user(self, token: Optional[str]) -> Optional[SafeUser]:
        """
        Return the user owning a session token, or None.

        Missing, unknown, expired and orphaned sessions all yield None.
        Expired and orphaned records are deleted on the way. Errors also
        yield None: a failed check never authenticates.
        """
        if not token:
            return None

        lookup_hash = self._lookup_hash(token)
        try:
            session = await self.sessions.find_by_lookup_hash(lookup_hash)
            if session is None:
                return None

            if session.is_expired(self.clock()):
                await self.sessions.delete_by_lookup_hash(lookup_hash)
                logger.info(f"Removed expired session of user {session.user_id}")
                return None

            try:
                user = await self._owner_of(session)
            except OrphanSession as exc:
                await self.sessions.delete_by_lookup_hash(lookup_hash)
                logger.info(f"Removed orphaned session: {exc}")
                return None

            return SafeUser.from_user(user)
        except StoreUnavailable:
            return None
        except Exception:
            logger.exception("Unexpected error while resolving session")
            return None

    async def destroy_session(self, token: Optional[str]) -> bool:
        """
        Log out the session behind a token.

        Idempotent. Returns True when the caller should clear the client's
        cookie, False when there was no token to act on.
        """
        if not token:
            return False

        with _auth_boundary("logout"):
            removed = await self.sessions.delete_by_lookup_hash(self._lookup_hash(token))
        if removed:
            logger.info("Session destroyed")
        return True

    async def _owner_of(self, session: AuthSession) -> User:
        user = await self.users.find_by_id(session.user_id)
        if user is None:
            raise OrphanSession(session.user_id)
        return user
