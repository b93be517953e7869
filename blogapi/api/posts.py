"""Post routes: public reads, authenticated writes with ownership checks."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from blogapi.api.auth import get_current_user
from blogapi.core.database import get_db
from blogapi.schemas.auth import Identity
from blogapi.schemas.post import (
    MessageResponse,
    PostCreate,
    PostListResponse,
    PostResponse,
    PostUpdate,
)
from blogapi.services import posts as post_service

router = APIRouter()


@router.get("", response_model=PostListResponse)
def list_posts(
    db: Annotated[Session, Depends(get_db)],
    category: Annotated[int | None, Query(description="Category id")] = None,
    published: Annotated[bool | None, Query()] = None,
    page: Annotated[int, Query()] = post_service.DEFAULT_PAGE,
    limit: Annotated[int, Query(description="Clamped to 1..100")] = post_service.DEFAULT_LIMIT,
) -> PostListResponse:
    """
    Page through posts, newest first. Filter by category and/or published flag.
    A page past the end returns no posts but still reports the total.
    """
    result = post_service.list_posts(
        db, category=category, published=published, page=page, limit=limit
    )
    return PostListResponse(
        posts=[PostResponse.model_validate(p) for p in result.posts],
        pagination=result.pagination,
    )


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> PostResponse:
    """Return one post and count the view."""
    return PostResponse.model_validate(post_service.view_post(db, post_id))


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    body: PostCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[Identity, Depends(get_current_user)],
) -> PostResponse:
    """Create a post authored by the caller."""
    return PostResponse.model_validate(post_service.create_post(db, current_user, body))


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: int,
    body: PostUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[Identity, Depends(get_current_user)],
) -> PostResponse:
    """Edit a post. Only its author may do this; admins included in that rule."""
    return PostResponse.model_validate(
        post_service.update_post(db, current_user, post_id, body)
    )


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[Identity, Depends(get_current_user)],
) -> MessageResponse:
    """Delete a post. Allowed for its author or any admin."""
    post_service.delete_post(db, current_user, post_id)
    return MessageResponse(message="Post deleted successfully")
