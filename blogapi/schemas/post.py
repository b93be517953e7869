"""Request/response schemas for posts."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Body for POST /posts. title and content are checked by the service."""

    title: str | None = None
    content: str | None = None
    category: int | None = Field(default=None, description="Category id")


class PostUpdate(BaseModel):
    """Body for PUT /posts/{id}. Only fields present in the request are applied."""

    title: str | None = None
    content: str | None = None
    category: int | None = None
    published: bool | None = None


class PostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    author: int = Field(
        validation_alias=AliasChoices("author_id", "author"), description="Author user id"
    )
    category: int | None = Field(
        default=None, validation_alias=AliasChoices("category_id", "category")
    )
    slug: str
    published: bool
    views: int
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updated_at", "updatedAt"),
        serialization_alias="updatedAt",
    )


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class PostListResponse(BaseModel):
    """Response for GET /posts."""

    posts: list[PostResponse]
    pagination: Pagination


class MessageResponse(BaseModel):
    message: str
