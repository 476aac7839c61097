"""Database operations for feeds."""

import logging
from typing import AsyncIterator, Optional

import asyncpg

from ..models.feeds import Feed, FeedRow
from ..pagination import FEED_KEYS, Order, Page, PaginatedQuery, PaginationOptions
from ..errors.problem_details import (
    NotFoundError, ConflictError, InternalServerError, ProblemDetailException
)
from .connection import get_db_pool
from .windows import PostgresWindowFetcher


logger = logging.getLogger(__name__)

FEED_COLUMNS = (
    "id", "title", "rss_link", "site_link", "description", "created_at", "last_updated"
)


def _row_to_feed(row) -> Feed:
    return FeedRow.model_validate(dict(row)).to_feed()


def feed_window_fetcher() -> PostgresWindowFetcher:
    """Window fetcher over the feeds table, keyed by id."""
    return PostgresWindowFetcher(
        keys=FEED_KEYS,
        table="feeds",
        columns=FEED_COLUMNS,
        filterable=(),
        row_factory=_row_to_feed
    )


async def create_feed(
    title: str,
    rss_link: str,
    site_link: str,
    description: str = ""
) -> Feed:
    """Store a new feed subscription.

    Args:
        title: Channel title
        rss_link: URL the feed is fetched from
        site_link: Home page of the publishing site
        description: Channel description

    Returns:
        Created feed

    Raises:
        ConflictError: If the feed is already subscribed
        InternalServerError: If database operation fails
    """
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO feeds (title, rss_link, site_link, description)
                VALUES ($1, $2, $3, $4)
                RETURNING {', '.join(FEED_COLUMNS)}
                """,
                title,
                rss_link,
                site_link,
                description
            )

            if not row:
                raise InternalServerError("Failed to create feed")

            feed = _row_to_feed(row)
            logger.info(f"Created feed {feed.id} for {rss_link}")
            return feed

    except ProblemDetailException:
        raise
    except asyncpg.UniqueViolationError:
        raise ConflictError(f"Feed '{rss_link}' already exists")
    except asyncpg.PostgresError as e:
        logger.error(f"Database error creating feed: {e}")
        raise InternalServerError(f"Database error: {e}")


async def get_feed(feed_id: int) -> Feed:
    """Get a feed by id.

    Raises:
        NotFoundError: If the feed doesn't exist
        InternalServerError: If database operation fails
    """
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT {', '.join(FEED_COLUMNS)} FROM feeds WHERE id = $1",
                feed_id
            )
    except asyncpg.PostgresError as e:
        logger.error(f"Database error retrieving feed: {e}")
        raise InternalServerError(f"Database error: {e}")

    if not row:
        raise NotFoundError(f"Feed '{feed_id}' not found")
    return _row_to_feed(row)


async def list_feeds(options: PaginationOptions, timeout: Optional[float] = None) -> Page:
    """List one page of feeds ordered by id.

    Raises:
        StoreUnavailableError: If the database pool is not initialized
        QueryFailureError: If either window query fails
        PaginationCancelledError: If ``timeout`` is exceeded
    """
    page = await PaginatedQuery(feed_window_fetcher(), timeout).fetch(options)
    logger.debug(f"Listed {len(page.items)} feeds")
    return page


async def iter_all_feeds(page_size: int = 50) -> AsyncIterator[Feed]:
    """Yield every feed, oldest first, following the next cursor."""
    options = PaginationOptions(limit=page_size, order=Order.ASCENDING)
    while True:
        page = await list_feeds(options)
        for feed in page.items:
            yield feed
        if not page.cursor.has_next:
            return
        options = PaginationOptions(
            cursor=page.cursor.next, limit=page_size, order=Order.ASCENDING
        )


async def touch_feed_updated(feed_id: int) -> None:
    """Record a successful refresh of a feed."""
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            await conn.execute(
                "UPDATE feeds SET last_updated = now() WHERE id = $1",
                feed_id
            )
    except asyncpg.PostgresError as e:
        logger.error(f"Database error updating feed {feed_id}: {e}")
        raise InternalServerError(f"Database error: {e}")


async def delete_feed(feed_id: int) -> bool:
    """Delete a feed and, through the foreign key, its articles.

    Returns:
        True if the feed was deleted, False if not found
    """
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            result = await conn.execute("DELETE FROM feeds WHERE id = $1", feed_id)
    except asyncpg.PostgresError as e:
        logger.error(f"Database error deleting feed: {e}")
        raise InternalServerError(f"Database error: {e}")

    # "DELETE 1" means one row deleted
    deleted = result.split()[-1] == "1"
    if deleted:
        logger.info(f"Deleted feed {feed_id}")
    return deleted
