"""
Conversion of auth outcomes into AuthFormState.
"""

from rapideat.core.exceptions import AuthError
from rapideat.models.auth import AuthFormState, AuthStatus

REGISTER_SUCCESS_MESSAGE = "Welcome aboard! Redirecting..."
LOGIN_SUCCESS_MESSAGE = "Logged in successfully!"


def success_state(message: str) -> AuthFormState:
    return AuthFormState(status=AuthStatus.SUCCESS, message=message)


def to_form_state(error: Exception) -> AuthFormState:
    """
    Describe a failed operation for the form that submitted it.

    Anything outside the auth taxonomy becomes the generic message, so
    internal details never reach the client.
    """
    if not isinstance(error, AuthError):
        error = AuthError()

    return AuthFormState(
        status=AuthStatus.ERROR,
        message=error.message,
        field_errors=error.field_errors or None,
    )
