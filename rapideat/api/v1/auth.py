"""
Authentication endpoints.

Handles registration, login, logout and session lookup. Forms are posted as
form-encoded bodies and every outcome is reported as an AuthFormState.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Form, Request, Response, status
from fastapi.responses import JSONResponse, RedirectResponse

from rapideat.api.deps import CurrentUser, Manager, OptionalDbSession, OptionalUser, SessionToken
from rapideat.core.config import settings
from rapideat.core.exceptions import (
    AuthError,
    DuplicateEmail,
    InvalidCredentials,
    StoreUnavailable,
    ValidationError,
)
from rapideat.models.auth import AuthFormState
from rapideat.models.session import IssuedSession
from rapideat.models.user import SafeUser
from rapideat.services.auth import (
    LOGIN_SUCCESS_MESSAGE,
    REGISTER_SUCCESS_MESSAGE,
    SessionManager,
    success_state,
    to_form_state,
)

logger = logging.getLogger(__name__)

router = APIRouter()

FormField = Annotated[Optional[str], Form()]


def _status_for(error: AuthError) -> int:
    if isinstance(error, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(error, DuplicateEmail):
        return status.HTTP_409_CONFLICT
    if isinstance(error, InvalidCredentials):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(error, StoreUnavailable):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _form_response(state: AuthFormState, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=state.model_dump(mode="json", exclude_none=True),
    )


def _set_session_cookie(response: Response, issued: IssuedSession) -> None:
    """Attach the raw session token as an HTTP-only cookie."""
    response.set_cookie(
        key=settings.auth_session_cookie,
        value=issued.token,
        max_age=issued.max_age,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def _clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.auth_session_cookie,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def _client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


@router.post("/register", response_model=AuthFormState, status_code=status.HTTP_201_CREATED)
async def register(
    request: Request,
    manager: Manager,
    name: FormField = None,
    email: FormField = None,
    password: FormField = None,
    confirm_password: FormField = None,
):
    """
    Register a new user and log them in.

    Returns:
        AuthFormState: Success with a session cookie, or the error state.
    """
    try:
        issued = await manager.register(
            name,
            email,
            password,
            confirm_password,
            user_agent=request.headers.get("user-agent"),
            ip=_client_ip(request),
        )
    except AuthError as exc:
        return _form_response(to_form_state(exc), _status_for(exc))

    response = _form_response(success_state(REGISTER_SUCCESS_MESSAGE), status.HTTP_201_CREATED)
    _set_session_cookie(response, issued)
    return response


@router.post("/login", response_model=AuthFormState)
async def login(
    request: Request,
    manager: Manager,
    email: FormField = None,
    password: FormField = None,
):
    """
    Authenticate a user and set the session cookie.

    Returns:
        AuthFormState: Success with a session cookie, or the error state.
    """
    try:
        issued = await manager.login(
            email,
            password,
            user_agent=request.headers.get("user-agent"),
            ip=_client_ip(request),
        )
    except AuthError as exc:
        return _form_response(to_form_state(exc), _status_for(exc))

    response = _form_response(success_state(LOGIN_SUCCESS_MESSAGE), status.HTTP_200_OK)
    _set_session_cookie(response, issued)
    return response


@router.post("/logout")
async def logout(db: OptionalDbSession, token: SessionToken):
    """
    End the current session and send the client home.

    Safe to call repeatedly, without a session, or without a database.
    """
    clear_cookie = token is not None
    if db is not None:
        try:
            clear_cookie = await SessionManager(db).destroy_session(token)
        except AuthError:
            logger.warning("Logout could not reach the session store; clearing cookie anyway")
    else:
        logger.warning("Logout without a configured database; clearing cookie only")

    response = RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    if clear_cookie:
        _clear_session_cookie(response)
    return response


@router.get("/me", response_model=SafeUser)
async def get_current_user_info(current_user: CurrentUser):
    """
    Get current authenticated user's information.

    Returns:
        SafeUser: Current user data.
    """
    return current_user


@router.get("/session")
async def get_session_info(current_user: OptionalUser):
    """
    Report whether the request carries a valid session.

    Unlike /me this never fails with 401.
    """
    return {
        "authenticated": current_user is not None,
        "user": current_user.model_dump(mode="json") if current_user else None,
    }
