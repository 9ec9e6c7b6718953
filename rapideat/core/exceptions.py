"""
Error taxonomy for authentication and storage failures.

Everything the session manager lets escape is one of these; the HTTP layer
turns them into form states without ever seeing a driver error.
"""

from typing import Dict, Optional


class RapidEatError(Exception):
    """Base exception for RapidEat."""
    pass


class AuthError(RapidEatError):
    """
    Authentication failure that can be reported back to the user.

    The bare class doubles as the generic "something went wrong" failure.
    """

    default_message = "Something went wrong, please try again."

    def __init__(self, message: Optional[str] = None, field_errors: Optional[Dict[str, str]] = None):
        self.message = message or self.default_message
        self.field_errors = dict(field_errors or {})
        super().__init__(self.message)


class ValidationError(AuthError):
    """One or more submitted fields are invalid (one message per field)."""

    default_message = "Please fix the highlighted fields"

    def __init__(self, field_errors: Dict[str, str]):
        super().__init__(field_errors=field_errors)


class DuplicateEmail(AuthError):
    """Email is already registered."""

    default_message = "This email is already registered"

    def __init__(self, email_message: str = "Email already in use"):
        super().__init__(field_errors={"email": email_message})


class InvalidCredentials(AuthError):
    """Login failed; tagged on the field whose check failed."""

    default_message = "Invalid credentials"

    def __init__(self, field: str, field_message: str):
        self.field = field
        super().__init__(field_errors={field: field_message})


class StoreUnavailable(AuthError):
    """Database could not be reached. Details are logged, never shown."""

    default_message = "Unable to reach the database. Please try again later."


class OrphanSession(RapidEatError):
    """Session points at a user that no longer exists. Never surfaced."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"Session owner {user_id} no longer exists")
