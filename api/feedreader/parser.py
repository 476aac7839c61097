"""RSS and Atom decoding for feed subscriptions and refreshes."""

import calendar
import logging
from datetime import datetime, timezone
from typing import List, Optional

import feedparser
import httpx
from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)


class FeedFetchError(Exception):
    """The feed document could not be downloaded."""


class FeedParseError(Exception):
    """The downloaded document is not a usable feed."""


class ParsedItem(BaseModel):
    """One entry of a parsed feed."""

    title: str = ""
    link: str = ""
    author: str = ""
    description: str = ""
    published: Optional[datetime] = None


class ParsedFeed(BaseModel):
    """Channel metadata and entries of a parsed feed."""

    title: str = ""
    link: str = ""
    description: str = ""
    items: List[ParsedItem] = Field(default_factory=list)


def _entry_time(entry) -> Optional[datetime]:
    # feedparser normalizes dates to UTC struct_time
    for key in ("published_parsed", "updated_parsed"):
        value = entry.get(key)
        if value:
            return datetime.fromtimestamp(calendar.timegm(value), tz=timezone.utc)
    return None


class FeedParser:
    """Fetches feed documents over HTTP and decodes them with feedparser."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
        user_agent: str = "feedreader/1.0"
    ):
        self.client = client
        self.timeout = timeout
        self.user_agent = user_agent

    def parse(self, content: bytes) -> ParsedFeed:
        """Decode an RSS or Atom document.

        Raises:
            FeedParseError: If the document has neither a title nor entries
        """
        parsed = feedparser.parse(content)
        channel = parsed.feed

        if not parsed.entries and not channel.get("title"):
            reason = parsed.get("bozo_exception") or "no channel or entries found"
            raise FeedParseError(f"Not a feed: {reason}")

        items = [
            ParsedItem(
                title=entry.get("title", ""),
                link=entry.get("link", ""),
                author=entry.get("author", ""),
                description=entry.get("summary", ""),
                published=_entry_time(entry)
            )
            for entry in parsed.entries
        ]

        return ParsedFeed(
            title=channel.get("title", ""),
            link=channel.get("link", ""),
            description=channel.get("subtitle", "") or channel.get("description", ""),
            items=items
        )

    async def parse_from_uri(self, uri: str) -> ParsedFeed:
        """Download and decode the feed at ``uri``.

        Raises:
            FeedFetchError: If the request fails or returns an error status
            FeedParseError: If the response is not a feed
        """
        logger.debug(f"Fetching feed {uri}")
        try:
            if self.client is not None:
                response = await self.client.get(uri)
            else:
                async with httpx.AsyncClient(
                    timeout=self.timeout,
                    follow_redirects=True,
                    headers={"User-Agent": self.user_agent}
                ) as client:
                    response = await client.get(uri)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(f"Failed to fetch feed {uri}: {e}")
            raise FeedFetchError(f"Failed to fetch {uri}: {e}")

        return self.parse(response.content)
