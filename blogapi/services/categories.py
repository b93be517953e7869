"""Category service: public listing and admin-only creation."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blogapi.core.errors import ConflictError, ValidationError
from blogapi.models import Category
from blogapi.services.validation import require_fields, sanitize_input

logger = logging.getLogger(__name__)

NAME_MIN_LEN = 2
NAME_MAX_LEN = 100


def list_categories(session: Session) -> list[Category]:
    return list(session.execute(select(Category).order_by(Category.name)).scalars())


def create_category(session: Session, name: str | None) -> Category:
    require_fields({"name": name}, ["name"])
    name = sanitize_input(name)
    if not (NAME_MIN_LEN <= len(name) <= NAME_MAX_LEN):
        raise ValidationError(
            f"Category name must be {NAME_MIN_LEN}-{NAME_MAX_LEN} characters"
        )
    existing = session.execute(select(Category).where(Category.name == name)).scalar_one_or_none()
    if existing is not None:
        raise ConflictError("Category already exists")

    category = Category(name=name)
    session.add(category)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise ConflictError("Category already exists") from e
    session.refresh(category)
    logger.info("Category created: id=%s name=%s", category.id, category.name)
    return category
