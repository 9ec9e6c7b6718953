"""
Tests for the session manager: register, login, resolve, logout.
"""

import asyncio
from datetime import datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel, select

from rapideat.core.clock import utcnow
from rapideat.core.exceptions import (
    AuthError,
    DuplicateEmail,
    InvalidCredentials,
    StoreUnavailable,
    ValidationError,
)
from rapideat.core.security import derive_lookup_hash
from rapideat.models.session import AuthSession
from rapideat.models.user import User, UserRole
from rapideat.services.auth import SessionManager


async def _register_alice(manager: SessionManager):
    return await manager.register("Alice", "alice@example.com", "password123", "password123")


@pytest.mark.asyncio
async def test_register_then_resolve(manager: SessionManager):
    """A fresh registration is immediately logged in as a plain user."""
    issued = await manager.register("Alice", "Alice@Example.com", "password123", "password123")

    user = await manager.resolve_current_user(issued.token)

    assert user is not None
    assert user.name == "Alice"
    assert user.email == "alice@example.com"
    assert user.role == UserRole.USER
    assert user.created_at.endswith("Z")
    assert len(issued.token) == 64
    assert issued.max_age == 7 * 24 * 60 * 60


@pytest.mark.asyncio
async def test_raw_token_never_stored(manager: SessionManager, test_db):
    """Only the keyed hash of the token reaches the database."""
    issued = await _register_alice(manager)

    rows = (await test_db.execute(select(AuthSession))).scalars().all()

    assert len(rows) == 1
    assert rows[0].token_hash == derive_lookup_hash(issued.token, "test-secret")
    assert rows[0].token_hash != issued.token
    assert issued.token not in repr(issued)


@pytest.mark.asyncio
async def test_session_expiry_matches_ttl(test_db):
    fixed = datetime(2024, 5, 1, 12, 0, 0)
    manager = SessionManager(test_db, clock=lambda: fixed)

    issued = await _register_alice(manager)

    assert issued.expires_at == fixed + timedelta(days=7)


@pytest.mark.asyncio
async def test_stored_expiry_round_trips_as_naive_utc(test_engine):
    """expires_at read back from the database compares cleanly with the clock."""
    async_session = sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    fixed = utcnow().replace(microsecond=0)

    async with async_session() as db:
        issued = await SessionManager(db, clock=lambda: fixed).issue_session(42)

    async with async_session() as db:
        stored = (await db.execute(select(AuthSession))).scalars().one()

    assert stored.expires_at == issued.expires_at
    assert stored.expires_at.tzinfo is None
    assert stored.created_at == fixed
    assert not stored.is_expired(utcnow())
    assert stored.is_expired(stored.expires_at)


@pytest.mark.asyncio
async def test_register_duplicate_email_case_insensitive(manager: SessionManager, test_db):
    """Second registration of the same address fails on the email field."""
    await _register_alice(manager)

    with pytest.raises(DuplicateEmail) as exc_info:
        await manager.register("Alice Two", "ALICE@example.com", "password456", "password456")

    assert exc_info.value.field_errors == {"email": "Email already in use"}
    users = (await test_db.execute(select(User))).scalars().all()
    assert len(users) == 1


@pytest.mark.asyncio
async def test_concurrent_registrations_create_one_user(tmp_path):
    """Two simultaneous sign-ups for one email: one session, one DuplicateEmail."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'race.db'}", connect_args={"timeout": 10}
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    async_session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def register(db: AsyncSession, name: str):
        return await SessionManager(db).register(name, "race@example.com", "password123", "password123")

    try:
        async with async_session() as first, async_session() as second:
            results = await asyncio.gather(
                register(first, "First"),
                register(second, "Second"),
                return_exceptions=True,
            )

        issued = [r for r in results if not isinstance(r, BaseException)]
        duplicates = [r for r in results if isinstance(r, DuplicateEmail)]
        assert len(issued) == 1
        assert len(duplicates) == 1

        async with async_session() as db:
            users = (await db.execute(select(User))).scalars().all()
        assert [u.email for u in users] == ["race@example.com"]
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_register_reports_all_invalid_fields(manager: SessionManager, test_db):
    with pytest.raises(ValidationError) as exc_info:
        await manager.register("A", "bad-email", "short", "other")

    assert set(exc_info.value.field_errors) == {"name", "email", "password", "confirm_password"}
    assert exc_info.value.message == "Please fix the highlighted fields"
    assert (await test_db.execute(select(User))).scalars().all() == []


@pytest.mark.asyncio
async def test_login_success(manager: SessionManager, regular_user: User):
    issued = await manager.login("USER@example.com", "testpassword")

    user = await manager.resolve_current_user(issued.token)
    assert user is not None
    assert user.id == str(regular_user.id)


@pytest.mark.asyncio
async def test_login_wrong_password_tagged_password(manager: SessionManager, regular_user: User):
    with pytest.raises(InvalidCredentials) as exc_info:
        await manager.login("user@example.com", "wrongpassword")

    assert exc_info.value.field == "password"
    assert exc_info.value.field_errors == {"password": "Incorrect password"}
    assert exc_info.value.message == "Invalid credentials"


@pytest.mark.asyncio
async def test_login_unknown_email_tagged_email(manager: SessionManager):
    with pytest.raises(InvalidCredentials) as exc_info:
        await manager.login("nobody@example.com", "whatever123")

    assert exc_info.value.field_errors == {"email": "Email not found"}


@pytest.mark.asyncio
async def test_login_validation(manager: SessionManager):
    with pytest.raises(ValidationError) as exc_info:
        await manager.login("nope", "")

    assert exc_info.value.field_errors == {
        "email": "Please enter a valid email",
        "password": "Password is required",
    }


@pytest.mark.asyncio
async def test_each_login_issues_distinct_session(manager: SessionManager, regular_user: User, test_db):
    first = await manager.login("user@example.com", "testpassword")
    second = await manager.login("user@example.com", "testpassword")

    assert first.token != second.token
    rows = (await test_db.execute(select(AuthSession))).scalars().all()
    assert len(rows) == 2


@pytest.mark.asyncio
async def test_resolve_without_or_with_unknown_token(manager: SessionManager):
    assert await manager.resolve_current_user(None) is None
    assert await manager.resolve_current_user("") is None
    assert await manager.resolve_current_user("f" * 64) is None


@pytest.mark.asyncio
async def test_expired_session_is_removed(test_db, regular_user: User):
    """Past expiry: no user, and the record is gone for good."""
    manager = SessionManager(test_db)
    issued = await manager.issue_session(regular_user.id)
    lookup_hash = derive_lookup_hash(issued.token, "test-secret")

    later = SessionManager(test_db, clock=lambda: utcnow() + timedelta(days=8))

    assert await later.resolve_current_user(issued.token) is None
    assert await later.sessions.find_by_lookup_hash(lookup_hash) is None
    assert await manager.resolve_current_user(issued.token) is None


@pytest.mark.asyncio
async def test_session_invalid_exactly_at_expiry(test_db, regular_user: User):
    fixed = datetime(2024, 5, 1, 12, 0, 0)
    issued = await SessionManager(test_db, clock=lambda: fixed).issue_session(regular_user.id)

    just_before = SessionManager(test_db, clock=lambda: fixed + timedelta(days=7, seconds=-1))
    at_expiry = SessionManager(test_db, clock=lambda: fixed + timedelta(days=7))

    assert await just_before.resolve_current_user(issued.token) is not None
    assert await at_expiry.resolve_current_user(issued.token) is None


@pytest.mark.asyncio
async def test_orphaned_session_is_removed(manager: SessionManager, test_db):
    """A session whose user is gone resolves to nobody and is deleted."""
    issued = await manager.issue_session(9999)

    assert await manager.resolve_current_user(issued.token) is None
    rows = (await test_db.execute(select(AuthSession))).scalars().all()
    assert rows == []


@pytest.mark.asyncio
async def test_destroy_session_is_idempotent(manager: SessionManager):
    issued = await _register_alice(manager)

    assert await manager.destroy_session(issued.token) is True
    assert await manager.destroy_session(issued.token) is True
    assert await manager.destroy_session(None) is False
    assert await manager.resolve_current_user(issued.token) is None


@pytest.mark.asyncio
async def test_rotated_secret_invalidates_sessions(test_db):
    manager = SessionManager(test_db)
    issued = await _register_alice(manager)

    rotated = SessionManager(test_db, config=manager.config.model_copy(update={"auth_secret": "rotated"}))

    assert await rotated.resolve_current_user(issued.token) is None


@pytest.mark.asyncio
async def test_safe_user_never_serializes_password_hash(manager: SessionManager, test_db):
    issued = await _register_alice(manager)
    stored = (await test_db.execute(select(User))).scalars().one()

    user = await manager.resolve_current_user(issued.token)

    assert "password_hash" not in user.model_dump()
    assert "password_hash" not in user.model_dump_json()
    assert stored.password_hash not in user.model_dump_json()


@pytest.mark.asyncio
async def test_resolve_is_fail_safe_on_store_errors(manager: SessionManager, regular_user: User, monkeypatch):
    """Errors during validity checks resolve to unauthenticated."""
    issued = await manager.issue_session(regular_user.id)

    async def unavailable(*args, **kwargs):
        raise StoreUnavailable()

    async def broken(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(manager.users, "find_by_id", unavailable)
    assert await manager.resolve_current_user(issued.token) is None

    monkeypatch.setattr(manager.users, "find_by_id", broken)
    assert await manager.resolve_current_user(issued.token) is None


@pytest.mark.asyncio
async def test_store_unavailable_propagates_from_login(manager: SessionManager, monkeypatch):
    async def unavailable(*args, **kwargs):
        raise StoreUnavailable()

    monkeypatch.setattr(manager.users, "find_by_email", unavailable)

    with pytest.raises(StoreUnavailable):
        await manager.login("alice@example.com", "password123")


@pytest.mark.asyncio
async def test_unexpected_errors_become_generic(manager: SessionManager, monkeypatch):
    """Internal error text never leaves the manager."""
    async def broken(*args, **kwargs):
        raise RuntimeError("connection string postgres://secret@db")

    monkeypatch.setattr(manager.users, "find_by_email", broken)

    with pytest.raises(AuthError) as exc_info:
        await _register_alice(manager)

    assert type(exc_info.value) is AuthError
    assert exc_info.value.message == "Something went wrong, please try again."
    assert "secret" not in str(exc_info.value)


@pytest.mark.asyncio
async def test_alice_scenario(manager: SessionManager):
    """Register, resolve, fail a login, log out, resolve again."""
    issued = await _register_alice(manager)

    user = await manager.resolve_current_user(issued.token)
    assert (user.name, user.email, user.role) == ("Alice", "alice@example.com", UserRole.USER)

    with pytest.raises(InvalidCredentials) as exc_info:
        await manager.login("ALICE@EXAMPLE.COM", "wrongpass")
    assert exc_info.value.field == "password"

    assert await manager.destroy_session(issued.token) is True
    assert await manager.resolve_current_user(issued.token) is None
