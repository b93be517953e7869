"""Input validation and sanitization shared by the auth and post flows."""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from blogapi.core.errors import ValidationError

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")
ANGLE_BRACKETS = re.compile(r"[<>]")

PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 50
USERNAME_MAX_LEN = 255
EMAIL_MAX_LEN = 255
TITLE_MIN_LEN = 3
TITLE_MAX_LEN = 200
CONTENT_MIN_LEN = 10


def is_valid_email(email: str) -> bool:
    """True for a basic local@domain.tld shape; no deliverability checks."""
    return bool(EMAIL_PATTERN.match(email))


def password_problem(password: str | None) -> str | None:
    """Return a message describing why the password is unacceptable, or None."""
    if not password or len(password) < PASSWORD_MIN_LEN:
        return f"Password must be at least {PASSWORD_MIN_LEN} characters long"
    if len(password) > PASSWORD_MAX_LEN:
        return f"Password cannot exceed {PASSWORD_MAX_LEN} characters"
    return None


def validate_password(password: str | None) -> None:
    problem = password_problem(password)
    if problem:
        raise ValidationError(problem)


def sanitize_input(value: Any) -> str:
    """Trim whitespace and drop '<' and '>'. Non-strings become ''."""
    if not isinstance(value, str):
        return ""
    return ANGLE_BRACKETS.sub("", value.strip())


def missing_fields(data: Mapping[str, Any], required: Sequence[str]) -> list[str]:
    """Names from required that are absent, falsy or whitespace-only in data."""
    missing = []
    for name in required:
        value = data.get(name)
        if not value or (isinstance(value, str) and not value.strip()):
            missing.append(name)
    return missing


def require_fields(data: Mapping[str, Any], required: Sequence[str]) -> None:
    missing = missing_fields(data, required)
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def validate_post_title(title: str) -> None:
    if len(title) < TITLE_MIN_LEN:
        raise ValidationError(f"Title must be at least {TITLE_MIN_LEN} characters")
    if len(title) > TITLE_MAX_LEN:
        raise ValidationError(f"Title cannot exceed {TITLE_MAX_LEN} characters")


def validate_post_content(content: str) -> None:
    if len(content) < CONTENT_MIN_LEN:
        raise ValidationError(f"Content must be at least {CONTENT_MIN_LEN} characters")
