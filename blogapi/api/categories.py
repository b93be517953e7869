"""Category routes: anyone can list, only admins can create."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blogapi.api.auth import require_admin
from blogapi.core.database import get_db
from blogapi.schemas.auth import Identity
from blogapi.schemas.category import CategoryCreate, CategoryResponse
from blogapi.services.categories import create_category, list_categories

router = APIRouter()


@router.get("", response_model=list[CategoryResponse])
def get_categories(
    db: Annotated[Session, Depends(get_db)],
) -> list[CategoryResponse]:
    return [CategoryResponse.model_validate(c) for c in list_categories(db)]


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def post_category(
    body: CategoryCreate,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[Identity, Depends(require_admin)],
) -> CategoryResponse:
    """Create a category (admin only)."""
    return CategoryResponse.model_validate(create_category(db, body.name))
