"""Pydantic request/response schemas."""

from blogapi.schemas.auth import (
    AuthResponse,
    Identity,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    TokenClaims,
    UserPublic,
)
from blogapi.schemas.category import CategoryCreate, CategoryResponse
from blogapi.schemas.health import HealthResponse
from blogapi.schemas.post import (
    MessageResponse,
    Pagination,
    PostCreate,
    PostListResponse,
    PostResponse,
    PostUpdate,
)

__all__ = [
    "AuthResponse",
    "CategoryCreate",
    "CategoryResponse",
    "HealthResponse",
    "Identity",
    "LoginRequest",
    "MessageResponse",
    "Pagination",
    "PostCreate",
    "PostListResponse",
    "PostResponse",
    "PostUpdate",
    "ProfileResponse",
    "RegisterRequest",
    "TokenClaims",
    "UserPublic",
]
