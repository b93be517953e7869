"""Post service: listing, view counting, and ownership-checked mutation."""

import logging
import math
import re
from dataclasses import dataclass
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blogapi.core.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from blogapi.models import Category, Post
from blogapi.schemas.auth import Identity
from blogapi.schemas.post import Pagination, PostCreate, PostUpdate
from blogapi.services.validation import (
    require_fields,
    sanitize_input,
    validate_post_content,
    validate_post_title,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
SLUG_FALLBACK = "post"
SLUG_MAX_LEN = 240
SLUG_ATTEMPTS = 3

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


@dataclass
class PostPage:
    posts: list[Post]
    pagination: Pagination


def slugify(title: str) -> str:
    """Lowercase, collapse runs of non [a-z0-9] into '-', trim edge dashes."""
    slug = _NON_SLUG_CHARS.sub("-", title.lower()).strip("-")
    return slug[:SLUG_MAX_LEN].rstrip("-") or SLUG_FALLBACK


def unique_slug(session: Session, base: str) -> str:
    """base, or base-2, base-3, ... whichever is not taken yet."""
    taken = set(
        session.execute(
            select(Post.slug).where((Post.slug == base) | Post.slug.like(f"{base}-%"))
        ).scalars()
    )
    if base not in taken:
        return base
    n = 2
    while f"{base}-{n}" in taken:
        n += 1
    return f"{base}-{n}"


def prepare_new_post(session: Session, post: Post) -> Post:
    """Pre-persist step for new posts: derive the slug once from the title."""
    if not post.slug:
        post.slug = unique_slug(session, slugify(post.title))
    return post


def can_update(identity: Identity, post: Post) -> bool:
    """Only the author may edit. Admins get no override here."""
    return post.author_id == identity.id


def can_delete(identity: Identity, post: Post) -> bool:
    """The author or any admin may delete."""
    return post.author_id == identity.id or identity.is_admin


def _check_category(session: Session, category_id: int | None) -> None:
    if category_id is not None and session.get(Category, category_id) is None:
        raise ValidationError("Category not found")


def _get_post_or_404(session: Session, post_id: int) -> Post:
    post = session.get(Post, post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post


def list_posts(
    session: Session,
    category: int | None = None,
    published: bool | None = None,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
) -> PostPage:
    """
    One page of posts, newest first, with totals for the whole filter.

    page below 1 is read as 1; limit is clamped into 1..MAX_LIMIT and the
    clamped value is what the pagination block reports.
    """
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_LIMIT)
    filters = []
    if category is not None:
        filters.append(Post.category_id == category)
    if published is not None:
        filters.append(Post.published == published)

    skip = (page - 1) * limit
    posts = list(
        session.execute(
            select(Post)
            .where(*filters)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(skip)
            .limit(limit)
        ).scalars()
    )
    total = session.execute(select(func.count()).select_from(Post).where(*filters)).scalar_one()

    return PostPage(
        posts=posts,
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit),
        ),
    )


def view_post(session: Session, post_id: int) -> Post:
    """Fetch a post and count the view. The increment is one atomic UPDATE."""
    result = session.execute(
        update(Post).where(Post.id == post_id).values(views=Post.views + 1)
    )
    if result.rowcount == 0:
        session.rollback()
        raise NotFoundError("Post not found")
    session.commit()
    return _get_post_or_404(session, post_id)


def create_post(session: Session, identity: Identity, data: PostCreate) -> Post:
    require_fields(data.model_dump(), ["title", "content"])
    title = sanitize_input(data.title)
    content = sanitize_input(data.content)
    validate_post_title(title)
    validate_post_content(content)
    _check_category(session, data.category)

    post = Post(
        title=title,
        content=content,
        author_id=identity.id,
        category_id=data.category,
    )
    for attempt in range(1, SLUG_ATTEMPTS + 1):
        prepare_new_post(session, post)
        session.add(post)
        try:
            session.commit()
            break
        except IntegrityError as e:
            session.rollback()
            logger.warning("Slug %r taken at insert (attempt %s)", post.slug, attempt)
            if attempt == SLUG_ATTEMPTS:
                raise ConflictError("Could not allocate a unique slug; please retry") from e
            post.slug = None
    session.refresh(post)
    logger.info("Post created: id=%s author=%s", post.id, identity.id)
    return post


def update_post(session: Session, identity: Identity, post_id: int, data: PostUpdate) -> Post:
    """
    Apply the supplied fields to a post owned by identity.

    Empty title/content are ignored; category may be cleared with null;
    published is applied when given. The slug is left alone.
    """
    post = _get_post_or_404(session, post_id)
    if not can_update(identity, post):
        logger.warning("Update denied: post=%s user=%s", post.id, identity.id)
        raise AuthorizationError("You can only update your own posts")

    supplied = data.model_fields_set
    changes: dict[str, Any] = {}
    if data.title:
        changes["title"] = sanitize_input(data.title)
        validate_post_title(changes["title"])
    if data.content:
        changes["content"] = sanitize_input(data.content)
        validate_post_content(changes["content"])
    if "category" in supplied:
        _check_category(session, data.category)
        changes["category_id"] = data.category
    if "published" in supplied and data.published is not None:
        changes["published"] = data.published

    for field, value in changes.items():
        setattr(post, field, value)
    session.commit()
    session.refresh(post)
    logger.info("Post updated: id=%s fields=%s", post.id, sorted(changes))
    return post


def delete_post(session: Session, identity: Identity, post_id: int) -> None:
    post = _get_post_or_404(session, post_id)
    if not can_delete(identity, post):
        logger.warning("Delete denied: post=%s user=%s", post.id, identity.id)
        raise AuthorizationError("You can only delete your own posts")
    session.delete(post)
    session.commit()
    logger.info("Post deleted: id=%s by=%s", post_id, identity.id)
