"""Registration, login and profile routes plus the auth dependencies
(get_current_user, require_admin) used by every protected route."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from blogapi.core.database import get_db
from blogapi.core.errors import AuthenticationError, AuthorizationError, NotFoundError
from blogapi.core.security import (
    PasswordHasher,
    TokenError,
    TokenService,
    get_password_hasher,
    get_token_service,
)
from blogapi.schemas.auth import (
    AuthResponse,
    Identity,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    UserPublic,
)
from blogapi.services.users import authenticate_user, create_user, get_user_by_id

logger = logging.getLogger(__name__)

router = APIRouter()

# Missing or unparseable headers come through as None; bearer_token rejects them.
bearer_scheme = HTTPBearer(auto_error=False)

BEARER_SCHEME = "Bearer"
MISSING_TOKEN_MESSAGE = "Authentication required. Please provide a valid token."


def bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str:
    """Return the token from parsed 'Authorization: Bearer <token>' credentials.

    The scheme must be spelled exactly 'Bearer'.
    """
    if credentials is None or credentials.scheme != BEARER_SCHEME:
        raise AuthenticationError(MISSING_TOKEN_MESSAGE)
    token = credentials.credentials.strip()
    if not token:
        raise AuthenticationError(MISSING_TOKEN_MESSAGE)
    return token


def authenticate_request(
    token: str,
    db: Session,
    tokens: TokenService,
) -> Identity:
    """
    Resolve a raw bearer token into an Identity.

    Bad signature, malformed token and expiry all produce the same 401 so the
    caller cannot tell them apart. A valid token whose user no longer exists is
    also a 401.
    """
    try:
        claims = tokens.verify(token)
    except TokenError as e:
        logger.warning("Rejected token: %s", type(e).__name__)
        raise AuthenticationError("Invalid or expired token") from e

    user = get_user_by_id(db, claims.id)
    if user is None:
        logger.warning("Token subject %s no longer exists", claims.id)
        raise AuthenticationError("User not found. Token is invalid.")
    return Identity.model_validate(user)


def authorize_admin(identity: Identity | None) -> Identity:
    """Pass an admin identity through; 401 without one, 403 for non-admins."""
    if identity is None:
        raise AuthenticationError("Authentication required")
    if not identity.is_admin:
        raise AuthorizationError("Access denied. Admin privileges required.")
    return identity


def get_current_user(
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> Identity:
    """Dependency: require a valid Bearer JWT and return the caller's Identity."""
    return authenticate_request(bearer_token(credentials), db, tokens)


def require_admin(
    current_user: Annotated[Identity, Depends(get_current_user)],
) -> Identity:
    """Dependency: require an authenticated user with role 'admin'."""
    return authorize_admin(current_user)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthResponse:
    """
    Create an account with role 'user' and return a JWT for it.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = create_user(db, body.username, body.email, body.password, hasher)
    return AuthResponse(
        message="User registered successfully",
        token=tokens.issue(user),
        user=UserPublic.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthResponse:
    """Authenticate with email and password; returns a JWT access token."""
    user = authenticate_user(db, body.email, body.password, hasher)
    return AuthResponse(
        message="Login successful",
        token=tokens.issue(user),
        user=UserPublic.model_validate(user),
    )


@router.get("/profile", response_model=ProfileResponse)
def profile(
    current_user: Annotated[Identity, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ProfileResponse:
    """Public profile of the authenticated user."""
    user = get_user_by_id(db, current_user.id)
    if user is None:
        raise NotFoundError("User not found")
    return ProfileResponse.model_validate(user)
