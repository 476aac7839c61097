"""Feed subscription and refresh operations."""

import logging
from datetime import datetime, timezone
from typing import List
from urllib.parse import urlsplit

from dateutil import parser as date_parser

from .db import articles as articles_db
from .db import feeds as feeds_db
from .errors.problem_details import BadGatewayError, BadRequestError
from .models.articles import Article, ArticleCreate
from .models.feeds import Feed, FeedCreate
from .parser import FeedFetchError, FeedParseError, FeedParser, ParsedFeed


logger = logging.getLogger(__name__)


def site_link_from_uri(uri: str) -> str:
    """Scheme and host of a URL, e.g. ``https://example.com``.

    Raises:
        BadRequestError: If the URL has no scheme or host
    """
    parts = urlsplit(uri)
    if not parts.scheme or not parts.netloc:
        raise BadRequestError(f"'{uri}' is not an absolute URL")
    return f"{parts.scheme}://{parts.netloc}"


def parse_published(value: str) -> int:
    """Parse a date in any common format to UTC seconds.

    Dates without a timezone are taken as UTC.

    Raises:
        BadRequestError: If the value is not a recognizable date
    """
    try:
        published = date_parser.parse(value)
    except (ValueError, OverflowError) as e:
        raise BadRequestError(f"Invalid published date '{value}': {e}")

    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    return int(published.timestamp())


class FeedService:
    """Operations that combine the feed parser with storage."""

    def __init__(self, parser: FeedParser):
        self.parser = parser

    async def _fetch(self, uri: str) -> ParsedFeed:
        try:
            return await self.parser.parse_from_uri(uri)
        except (FeedFetchError, FeedParseError) as e:
            raise BadGatewayError(str(e), feed=uri)

    async def create_feed(self, request: FeedCreate) -> Feed:
        """Subscribe to the feed at ``request.link``.

        The channel title falls back to the link itself, and the site link
        to the scheme and host of the feed URL.
        """
        site_link = site_link_from_uri(request.link)
        parsed = await self._fetch(request.link)

        return await feeds_db.create_feed(
            title=parsed.title or request.link,
            rss_link=request.link,
            site_link=parsed.link or site_link,
            description=parsed.description
        )

    async def create_article(self, request: ArticleCreate) -> Article:
        """Store an article supplied by the client."""
        published = parse_published(request.published)
        return await articles_db.create_article(
            feed_id=request.feed_id,
            link=request.link,
            title=request.title,
            author=request.author,
            description=request.description,
            published=published
        )

    async def refresh_feed(self, feed: Feed) -> List[Article]:
        """Fetch a feed and store the entries not seen before.

        Entries are matched on their link, ignoring case. Entries without a
        link are skipped; entries without a date are stamped with the
        current time.

        Returns:
            The newly stored articles
        """
        parsed = await self._fetch(feed.rss_link)
        known = await articles_db.article_links_for_feed(feed.id)
        now = int(datetime.now(timezone.utc).timestamp())

        fresh = []
        for item in parsed.items:
            if not item.link or item.link.lower() in known:
                continue
            known.add(item.link.lower())
            fresh.append({
                "link": item.link,
                "title": item.title or item.link,
                "author": item.author,
                "description": item.description,
                "published": int(item.published.timestamp()) if item.published else now
            })

        created = await articles_db.create_articles(feed.id, fresh) if fresh else []
        await feeds_db.touch_feed_updated(feed.id)

        logger.info(f"Refreshed feed {feed.id} ({feed.title}): {len(created)} new articles")
        return created
