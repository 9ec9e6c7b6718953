"""
Form-state schemas returned by the auth endpoints.
"""

from enum import Enum
from typing import Dict, Optional

from sqlmodel import SQLModel


class AuthStatus(str, Enum):
    """Outcome of one auth operation."""
    IDLE = "idle"
    SUCCESS = "success"
    ERROR = "error"


class AuthFormState(SQLModel):
    """
    Result of a register/login/logout submission.

    Attributes:
        status: idle, success or error.
        message: Human-readable summary.
        field_errors: Field name -> message for inline display.
    """
    status: AuthStatus
    message: Optional[str] = None
    field_errors: Optional[Dict[str, str]] = None


def initial_auth_state() -> AuthFormState:
    """State of a form that has not been submitted yet."""
    return AuthFormState(status=AuthStatus.IDLE)
