"""Input validators for identifiers and credentials."""

import re

from quiz.exceptions import InvalidIdError, ValidationError
from quiz.models.documents import new_object_id

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

__all__ = ["new_object_id", "validate_object_id", "validate_email", "validate_password"]


def validate_object_id(value: str, resource: str = "quiz") -> str:
    """Validate a document identifier coming from a path or body.

    Returns the normalized id, raises InvalidIdError if malformed.
    """
    normalized = (value or "").strip().lower()
    if not OBJECT_ID_PATTERN.match(normalized):
        raise InvalidIdError(
            message=f"Invalid {resource} ID format",
            details={"id": (value or "")[:40]},
        )
    return normalized


def validate_email(email: str) -> str:
    """Validate and normalize an email address (trimmed, lowercase)."""
    normalized = (email or "").strip().lower()
    if not EMAIL_PATTERN.match(normalized):
        raise ValidationError(message="Invalid email address", errors=["email"])
    return normalized


def validate_password(password: str, min_length: int = 6) -> str:
    """Validate password length. Passwords are never trimmed."""
    if not password or len(password) < min_length:
        raise ValidationError(
            message=f"Password must be at least {min_length} characters long",
            errors=["password"],
        )
    return password
