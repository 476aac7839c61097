"""Pydantic models for articles."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ConfigDict

from ..pagination import Cursor


PUBLISHED_ON_FORMAT = "%a, %d %b %Y"


class ArticleFilter(str, Enum):
    """Named article subsets the list endpoint can page through."""

    ALL = "all"
    UNREAD = "unread"
    READ = "read"
    FAVORITED = "favorited"

    def predicates(self) -> Dict[str, Any]:
        """Column equality predicates selecting this subset."""
        if self is ArticleFilter.UNREAD:
            return {"read": False}
        if self is ArticleFilter.READ:
            return {"read": True}
        if self is ArticleFilter.FAVORITED:
            return {"favorited": True}
        return {}


class ArticleCreate(BaseModel):
    """Model for adding an article by hand."""

    feed_id: int = Field(description="Feed the article belongs to")
    link: str = Field(..., min_length=1, description="Article URL")
    title: str = Field(..., min_length=1, description="Article title")
    author: str = Field(default="", description="Article author")
    description: str = Field(default="", description="Summary or body")
    published: str = Field(
        ...,
        min_length=1,
        description="Publish date in any common format",
        examples=["Mon, 02 Jan 2006 15:04:05 GMT", "2006-01-02T15:04:05Z"]
    )


class Article(BaseModel):
    """Complete article model."""

    id: int = Field(description="Article identifier")
    feed_id: int = Field(description="Feed the article belongs to")
    title: str = Field(description="Article title")
    author: str = Field(default="", description="Article author")
    description: str = Field(default="", description="Summary or body")
    link: str = Field(description="Article URL")
    published: int = Field(description="Publish time, UTC seconds since the epoch")
    published_on: str = Field(description="Human readable publish date")
    read: bool = Field(default=False, description="Whether the article was read")
    read_date: Optional[datetime] = Field(default=None, description="When the article was read")
    favorited: bool = Field(default=False, description="Whether the article is a favorite")
    created_at: datetime = Field(description="When the article was stored")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 42,
                "feed_id": 7,
                "title": "Hello",
                "author": "Jane",
                "description": "First post",
                "link": "https://blog.example.com/hello",
                "published": 1136214245,
                "published_on": "Mon, 02 Jan 2006",
                "read": False,
                "read_date": None,
                "favorited": False,
                "created_at": "2024-01-01T12:00:00Z"
            }
        }
    )


class ArticleListResponse(BaseModel):
    """Response model for listing articles."""

    cursor: Cursor = Field(description="Pagination cursor")
    items: list[Article] = Field(description="Articles on this page")


# Database row model (for internal use)
class ArticleRow(BaseModel):
    """Model representing an articles table row."""

    id: int
    feed_id: int
    title: str
    author: str
    description: str
    link: str
    published: int
    read: bool
    read_date: Optional[datetime] = None
    favorited: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    def to_article(self) -> Article:
        """Convert to public Article model."""
        published_on = datetime.fromtimestamp(self.published, tz=timezone.utc).strftime(PUBLISHED_ON_FORMAT)
        return Article(published_on=published_on, **self.model_dump())
