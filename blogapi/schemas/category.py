"""Request/response schemas for categories."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    name: str | None = Field(default=None, description="Category name (2-100 chars)")


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )
