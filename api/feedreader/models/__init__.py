"""Data models for the Feed Reader API."""

from .feeds import Feed, FeedCreate, FeedListResponse, FeedRow
from .articles import (
    Article,
    ArticleCreate,
    ArticleFilter,
    ArticleListResponse,
    ArticleRow
)

__all__ = [
    "Feed",
    "FeedCreate",
    "FeedListResponse",
    "FeedRow",
    "Article",
    "ArticleCreate",
    "ArticleFilter",
    "ArticleListResponse",
    "ArticleRow"
]
