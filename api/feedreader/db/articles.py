"""Database operations for articles."""

import logging
from typing import Iterable, List, Optional, Set

import asyncpg

from ..models.articles import Article, ArticleFilter, ArticleRow
from ..pagination import ARTICLE_KEYS, Page, PaginatedQuery, PaginationOptions
from ..errors.problem_details import (
    NotFoundError, ConflictError, InternalServerError, ProblemDetailException
)
from .connection import get_db_pool
from .windows import PostgresWindowFetcher


logger = logging.getLogger(__name__)

ARTICLE_COLUMNS = (
    "id", "feed_id", "title", "author", "description", "link",
    "published", "read", "read_date", "favorited", "created_at"
)
RETURNING = f"RETURNING {', '.join(ARTICLE_COLUMNS)}"


def _row_to_article(row) -> Article:
    return ArticleRow.model_validate(dict(row)).to_article()


def article_window_fetcher() -> PostgresWindowFetcher:
    """Window fetcher over the articles table, keyed by (published, id)."""
    return PostgresWindowFetcher(
        keys=ARTICLE_KEYS,
        table="articles",
        columns=ARTICLE_COLUMNS,
        filterable=("read", "favorited", "feed_id"),
        row_factory=_row_to_article
    )


async def create_article(
    feed_id: int,
    link: str,
    title: str,
    author: str,
    description: str,
    published: int
) -> Article:
    """Store a single article.

    Args:
        feed_id: Feed the article belongs to
        link: Article URL, unique across the store
        title: Article title
        author: Article author
        description: Summary or body
        published: Publish time in UTC seconds

    Returns:
        Created article

    Raises:
        NotFoundError: If the feed doesn't exist
        ConflictError: If an article with the same link exists
        InternalServerError: If database operation fails
    """
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO articles (feed_id, link, title, author, description, published)
                VALUES ($1, $2, $3, $4, $5, $6)
                {RETURNING}
                """,
                feed_id, link, title, author, description, published
            )

            if not row:
                raise InternalServerError("Failed to create article")

            article = _row_to_article(row)
            logger.info(f"Created article {article.id} in feed {feed_id}")
            return article

    except ProblemDetailException:
        raise
    except asyncpg.ForeignKeyViolationError:
        raise NotFoundError(f"Feed '{feed_id}' not found")
    except asyncpg.UniqueViolationError:
        raise ConflictError(f"Article '{link}' already exists")
    except asyncpg.PostgresError as e:
        logger.error(f"Database error creating article: {e}")
        raise InternalServerError(f"Database error: {e}")


async def create_articles(feed_id: int, articles: Iterable[dict]) -> List[Article]:
    """Store a batch of articles, skipping links that are already stored.

    Each item carries ``link``, ``title``, ``author``, ``description`` and
    ``published``. The batch is written in one transaction.
    """
    pool = await get_db_pool()
    created = []

    try:
        async with pool.acquire() as conn:
            async with conn.transaction():
                for item in articles:
                    row = await conn.fetchrow(
                        f"""
                        INSERT INTO articles (feed_id, link, title, author, description, published)
                        VALUES ($1, $2, $3, $4, $5, $6)
                        ON CONFLICT (link) DO NOTHING
                        {RETURNING}
                        """,
                        feed_id,
                        item["link"],
                        item["title"],
                        item.get("author", ""),
                        item.get("description", ""),
                        item["published"]
                    )
                    if row:
                        created.append(_row_to_article(row))
    except asyncpg.ForeignKeyViolationError:
        raise NotFoundError(f"Feed '{feed_id}' not found")
    except asyncpg.PostgresError as e:
        logger.error(f"Database error storing articles for feed {feed_id}: {e}")
        raise InternalServerError(f"Database error: {e}")

    logger.info(f"Stored {len(created)} new articles for feed {feed_id}")
    return created


async def get_article(article_id: int) -> Article:
    """Get an article by id.

    Raises:
        NotFoundError: If the article doesn't exist
        InternalServerError: If database operation fails
    """
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT {', '.join(ARTICLE_COLUMNS)} FROM articles WHERE id = $1",
                article_id
            )
    except asyncpg.PostgresError as e:
        logger.error(f"Database error retrieving article: {e}")
        raise InternalServerError(f"Database error: {e}")

    if not row:
        raise NotFoundError(f"Article '{article_id}' not found")
    return _row_to_article(row)


async def list_articles(
    options: PaginationOptions,
    article_filter: ArticleFilter = ArticleFilter.ALL,
    timeout: Optional[float] = None
) -> Page:
    """List one page of articles ordered by publish time.

    Raises:
        StoreUnavailableError: If the database pool is not initialized
        QueryFailureError: If either window query fails
        PaginationCancelledError: If ``timeout`` is exceeded
    """
    page = await PaginatedQuery(article_window_fetcher(), timeout).fetch(
        options, article_filter.predicates()
    )
    logger.debug(f"Listed {len(page.items)} {article_filter.value} articles")
    return page


async def list_articles_by_feed(feed_id: int) -> List[Article]:
    """List every article of a feed, newest first."""
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {', '.join(ARTICLE_COLUMNS)} FROM articles
                WHERE feed_id = $1
                ORDER BY published DESC, id DESC
                """,
                feed_id
            )
    except asyncpg.PostgresError as e:
        logger.error(f"Database error listing articles of feed {feed_id}: {e}")
        raise InternalServerError(f"Database error: {e}")

    return [_row_to_article(row) for row in rows]


async def article_links_for_feed(feed_id: int) -> Set[str]:
    """Lower-cased links of every stored article of a feed."""
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            rows = await conn.fetch("SELECT link FROM articles WHERE feed_id = $1", feed_id)
    except asyncpg.PostgresError as e:
        logger.error(f"Database error listing article links of feed {feed_id}: {e}")
        raise InternalServerError(f"Database error: {e}")

    return {row["link"].lower() for row in rows}


async def mark_article_read(article_id: int) -> Article:
    """Mark an article read, stamping the read date the first time."""
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE articles
                SET read = TRUE, read_date = COALESCE(read_date, now())
                WHERE id = $1
                {RETURNING}
                """,
                article_id
            )
    except asyncpg.PostgresError as e:
        logger.error(f"Database error marking article read: {e}")
        raise InternalServerError(f"Database error: {e}")

    if not row:
        raise NotFoundError(f"Article '{article_id}' not found")
    logger.info(f"Marked article {article_id} read")
    return _row_to_article(row)


async def mark_article_favorite(article_id: int) -> Article:
    """Toggle the favorite flag of an article."""
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE articles
                SET favorited = NOT favorited
                WHERE id = $1
                {RETURNING}
                """,
                article_id
            )
    except asyncpg.PostgresError as e:
        logger.error(f"Database error toggling article favorite: {e}")
        raise InternalServerError(f"Database error: {e}")

    if not row:
        raise NotFoundError(f"Article '{article_id}' not found")
    logger.info(f"Set favorite={row['favorited']} on article {article_id}")
    return _row_to_article(row)
