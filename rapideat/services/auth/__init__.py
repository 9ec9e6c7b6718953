"""
Authentication and session lifecycle service.
"""

from .credential_store import UserStore
from .session_store import SessionStore
from .session_manager import SessionManager
from .form_state import (
    LOGIN_SUCCESS_MESSAGE,
    REGISTER_SUCCESS_MESSAGE,
    success_state,
    to_form_state,
)
from .validators import (
    collect_field_errors,
    normalize_email,
    validate_login,
    validate_registration,
)

__all__ = [
    "UserStore",
    "SessionStore",
    "SessionManager",
    "LOGIN_SUCCESS_MESSAGE",
    "REGISTER_SUCCESS_MESSAGE",
    "success_state",
    "to_form_state",
    "collect_field_errors",
    "normalize_email",
    "validate_login",
    "validate_registration",
]
