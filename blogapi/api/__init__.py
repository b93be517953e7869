"""API routes mounted under API_PREFIX."""

from fastapi import APIRouter

from blogapi.api import auth, categories, posts

router = APIRouter()
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(posts.router, prefix="/posts", tags=["posts"])
router.include_router(categories.router, prefix="/categories", tags=["categories"])
