"""SQLAlchemy ORM models."""

from blogapi.models.base import Base
from blogapi.models.category import Category
from blogapi.models.post import Post
from blogapi.models.user import User

__all__ = ["Base", "Category", "Post", "User"]
