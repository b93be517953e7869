"""ORM model for blog posts."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from blogapi.models.base import Base, utcnow


class Post(Base):
    """
    A blog post owned by its author.

    author_id is set once at creation and is the only input to ownership checks.
    slug is derived from the first title and never regenerated.
    """

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(
        Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True
    )
    slug = Column(String(255), nullable=False, unique=True)
    published = Column(Boolean, nullable=False, default=False, index=True)
    views = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
