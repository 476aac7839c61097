"""Pydantic models for feeds."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from ..pagination import Cursor


class FeedCreate(BaseModel):
    """Model for subscribing to a new feed."""

    link: str = Field(
        ...,
        min_length=1,
        description="URL of the RSS or Atom document",
        examples=["https://blog.example.com/rss.xml"]
    )


class Feed(BaseModel):
    """Complete feed model."""

    id: int = Field(description="Feed identifier, also its pagination key")
    title: str = Field(description="Channel title")
    rss_link: str = Field(description="URL the feed is fetched from")
    site_link: str = Field(description="Home page of the site publishing the feed")
    description: str = Field(default="", description="Channel description")
    created_at: datetime = Field(description="When the feed was added")
    last_updated: Optional[datetime] = Field(default=None, description="Last successful refresh")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 7,
                "title": "Example Blog",
                "rss_link": "https://blog.example.com/rss.xml",
                "site_link": "https://blog.example.com",
                "description": "Posts about examples",
                "created_at": "2024-01-01T12:00:00Z",
                "last_updated": "2024-01-01T13:00:00Z"
            }
        }
    )


class FeedListResponse(BaseModel):
    """Response model for listing feeds."""

    cursor: Cursor = Field(description="Pagination cursor")
    items: list[Feed] = Field(description="Feeds on this page")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "cursor": {"next": "6", "prev": "", "hasNext": True, "hasPrev": False},
                "items": [
                    {
                        "id": 7,
                        "title": "Example Blog",
                        "rss_link": "https://blog.example.com/rss.xml",
                        "site_link": "https://blog.example.com",
                        "description": "Posts about examples",
                        "created_at": "2024-01-01T12:00:00Z",
                        "last_updated": None
                    }
                ]
            }
        }
    )


# Database row model (for internal use)
class FeedRow(BaseModel):
    """Model representing a feeds table row."""

    id: int
    title: str
    rss_link: str
    site_link: str
    description: str
    created_at: datetime
    last_updated: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    def to_feed(self) -> Feed:
        """Convert to public Feed model."""
        return Feed(**self.model_dump())
