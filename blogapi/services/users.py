"""User service functions: registration, credential checks and lookups."""

import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blogapi.core.errors import AuthenticationError, ConflictError, ValidationError
from blogapi.core.security import PasswordHasher
from blogapi.models.user import ROLE_USER, ROLES, User
from blogapi.services.validation import (
    EMAIL_MAX_LEN,
    USERNAME_MAX_LEN,
    is_valid_email,
    require_fields,
    validate_password,
)

logger = logging.getLogger(__name__)

DUPLICATE_USER_MESSAGE = "User with this email or username already exists"
# Same text for unknown email and wrong password so accounts cannot be enumerated.
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_id(session: Session, user_id: int) -> User | None:
    return session.get(User, user_id)


def get_user_by_email(session: Session, email: str) -> User | None:
    result = session.execute(select(User).where(User.email == normalize_email(email)))
    return result.scalar_one_or_none()


def find_conflicting_user(session: Session, username: str, email: str) -> User | None:
    """Any user already holding this username or this email."""
    result = session.execute(
        select(User).where(or_(User.email == email, User.username == username)).limit(1)
    )
    return result.scalar_one_or_none()


def validate_registration(username: str | None, email: str | None, password: str | None) -> None:
    """Raise ValidationError for missing fields, a bad email or a bad password."""
    require_fields(
        {"username": username, "email": email, "password": password},
        ["username", "email", "password"],
    )
    if len(username.strip()) > USERNAME_MAX_LEN:
        raise ValidationError(f"Username cannot exceed {USERNAME_MAX_LEN} characters")
    if len(email.strip()) > EMAIL_MAX_LEN or not is_valid_email(email.strip()):
        raise ValidationError("Invalid email format")
    validate_password(password)


def create_user(
    session: Session,
    username: str | None,
    email: str | None,
    password: str | None,
    hasher: PasswordHasher,
    role: str = ROLE_USER,
) -> User:
    """
    Validate input, reject duplicates and insert a new user.

    The single insert is the only write, so a failure leaves nothing behind.
    """
    validate_registration(username, email, password)
    if role not in ROLES:
        raise ValidationError(f"Role must be one of: {', '.join(ROLES)}")

    username = username.strip()
    email = normalize_email(email)
    if find_conflicting_user(session, username, email) is not None:
        raise ConflictError(DUPLICATE_USER_MESSAGE)

    user = User(
        username=username,
        email=email,
        password_hash=hasher.hash(password),
        role=role,
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same name/email.
        session.rollback()
        raise ConflictError(DUPLICATE_USER_MESSAGE) from e
    session.refresh(user)
    logger.info("User registered: id=%s email=%s role=%s", user.id, user.email, user.role)
    return user


def authenticate_user(
    session: Session,
    email: str | None,
    password: str | None,
    hasher: PasswordHasher,
) -> User:
    """Return the user for these credentials or raise AuthenticationError."""
    require_fields({"email": email, "password": password}, ["email", "password"])

    user = get_user_by_email(session, email)
    if user is None:
        logger.warning("Login failed: unknown email")
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
    if not hasher.verify(password, user.password_hash):
        logger.warning("Login failed: bad password for user id=%s", user.id)
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

    logger.info("User logged in: id=%s email=%s", user.id, user.email)
    return user
