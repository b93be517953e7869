"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any, Protocol

import bcrypt
import jwt

from blogapi.core.config import get_settings
from blogapi.schemas.auth import TokenClaims

# bcrypt only looks at the first 72 bytes of input.
BCRYPT_MAX_BYTES = 72

REQUIRED_CLAIMS = ("id", "email", "username", "role", "iat", "exp")


class TokenError(Exception):
    """Base for token verification failures."""


class TokenInvalid(TokenError):
    """Signature mismatch, malformed structure or missing claims."""


class TokenExpired(TokenError):
    """Signature is fine but the token is past its exp claim."""


class TokenSubject(Protocol):
    id: int
    email: str
    username: str
    role: str


class PasswordHasher:
    """Salted bcrypt hashing with a fixed work factor."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Do not store plain passwords."""
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored hash (constant-time compare)."""
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False


class TokenService:
    """Issue and verify signed, time-limited identity tokens. Stateless."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        lifetime: timedelta = timedelta(hours=1),
    ) -> None:
        if not secret:
            raise ValueError("Token secret must be non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime

    def issue(self, user: TokenSubject, now: datetime | None = None) -> str:
        """Create a JWT carrying the user's id, email, username and role."""
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "id": user.id,
            "email": user.email,
            "username": user.username,
            "role": user.role,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a JWT; return its claims.
        Raises TokenExpired past exp, TokenInvalid for anything else wrong.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpired("Token has expired") from e
        except jwt.PyJWTError as e:
            raise TokenInvalid(f"Invalid token: {e}") from e

        missing = [name for name in REQUIRED_CLAIMS if name not in payload]
        if missing:
            raise TokenInvalid(f"Token missing claims: {', '.join(missing)}")
        if not isinstance(payload["id"], int) or isinstance(payload["id"], bool):
            raise TokenInvalid("Token id claim must be an integer")

        return TokenClaims(
            id=payload["id"],
            email=payload["email"],
            username=payload["username"],
            role=payload["role"],
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Dependency: hasher built from settings (override in tests)."""
    return PasswordHasher(rounds=get_settings().BCRYPT_ROUNDS)


@lru_cache
def get_token_service() -> TokenService:
    """Dependency: token service built from settings (override in tests)."""
    settings = get_settings()
    return TokenService(
        secret=settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        lifetime=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    )
