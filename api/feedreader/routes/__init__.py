"""API routers for the Feed Reader API."""

from .feeds import router as feeds_router
from .articles import router as articles_router

__all__ = ["feeds_router", "articles_router"]
