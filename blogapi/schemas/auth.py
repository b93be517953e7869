"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# Fields are optional at the schema level so missing values reach the
# required-field check and come back as a single 400 listing every name.


class RegisterRequest(BaseModel):
    """Registration payload."""

    username: str | None = Field(default=None, description="Unique username")
    email: str | None = Field(default=None, description="Unique email address")
    password: str | None = Field(default=None, description="Password (6-50 characters)")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str | None = Field(default=None, description="Email address")
    password: str | None = Field(default=None, description="Password")


class UserPublic(BaseModel):
    """User fields safe to return to clients (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: str


class AuthResponse(BaseModel):
    """Returned by register and login."""

    message: str
    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")
    user: UserPublic


class ProfileResponse(UserPublic):
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )


class Identity(BaseModel):
    """Authenticated caller, resolved from a verified token and the user store."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    username: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class TokenClaims(BaseModel):
    """Decoded token payload."""

    id: int
    email: str
    username: str
    role: str
    issued_at: datetime
    expires_at: datetime
