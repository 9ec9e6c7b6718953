"""
Form validators for register and login.

Each validator checks every field and returns (field, message) pairs in
order. collect_field_errors() keeps the first message per field.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from email_validator import EmailNotValidError, validate_email

FieldIssue = Tuple[str, str]

MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 8


def normalize_email(email: Optional[str]) -> str:
    """Emails are stored and compared stripped and lower-cased."""
    return (email or "").strip().lower()


def is_valid_email(email: str) -> bool:
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _check_email(email: str) -> List[FieldIssue]:
    if not is_valid_email(email):
        return [("email", "Please enter a valid email")]
    return []


def validate_registration(
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    confirm_password: Optional[str],
) -> List[FieldIssue]:
    """
    Check a registration form.

    Rules: name at least 2 characters, valid email, password at least 8
    characters, confirmation equal to password.
    """
    issues: List[FieldIssue] = []
    password = password or ""

    if len((name or "").strip()) < MIN_NAME_LENGTH:
        issues.append(("name", "Name is too short"))
    issues.extend(_check_email(normalize_email(email)))
    if len(password) < MIN_PASSWORD_LENGTH:
        issues.append(("password", "Password must be at least 8 characters"))
    if password != (confirm_password or ""):
        issues.append(("confirm_password", "Passwords do not match"))

    return issues


def validate_login(email: Optional[str], password: Optional[str]) -> List[FieldIssue]:
    """Check a login form: valid email, non-empty password."""
    issues = _check_email(normalize_email(email))
    if not password:
        issues.append(("password", "Password is required"))
    return issues


def collect_field_errors(issues: Iterable[FieldIssue]) -> Dict[str, str]:
    """Map issues to {field: message}; the first issue per field wins."""
    field_errors: Dict[str, str] = {}
    for field, message in issues:
        field_errors.setdefault(field, message)
    return field_errors
