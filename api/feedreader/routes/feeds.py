"""Feeds API endpoints."""

import logging

from fastapi import APIRouter, Request, Response

from ..db import articles as articles_db
from ..db import feeds as feeds_db
from ..errors.problem_details import NotFoundError
from ..models.articles import Article
from ..models.feeds import Feed, FeedCreate, FeedListResponse
from .dependencies import Pagination, QueryTimeout, Service, add_link_header


logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/feeds",
    tags=["Feeds"],
    responses={
        404: {"description": "Not Found"},
        503: {"description": "Database unavailable"}
    }
)


@router.get(
    "",
    response_model=FeedListResponse,
    summary="List feeds",
    description="List subscribed feeds with cursor-based pagination ordered by feed id.",
)
async def list_feeds(
    request: Request,
    response: Response,
    options: Pagination,
    timeout: QueryTimeout
) -> FeedListResponse:
    """List feeds one page at a time.

    Query parameters ``limit``, ``cursor`` and ``order`` are parsed
    leniently; bad values fall back to their defaults instead of failing.
    Follow ``cursor.next`` or ``cursor.prev`` from the response to move
    between pages.
    """
    page = await feeds_db.list_feeds(options, timeout=timeout)
    add_link_header(request, response, page, options)

    logger.info(f"Retrieved {len(page.items)} feeds")
    return FeedListResponse(cursor=page.cursor, items=page.items)


@router.post(
    "",
    response_model=Feed,
    status_code=201,
    summary="Subscribe to a feed",
    responses={
        201: {"description": "Feed created"},
        409: {"description": "Feed already subscribed"},
        502: {"description": "Feed could not be fetched or parsed"}
    }
)
async def create_feed(feed_data: FeedCreate, service: Service) -> Feed:
    """Fetch the feed at ``link`` and store its channel metadata."""
    logger.info(f"Subscribing to feed {feed_data.link}")
    return await service.create_feed(feed_data)


@router.get("/{feed_id}", response_model=Feed, summary="Get a feed")
async def get_feed(feed_id: int) -> Feed:
    return await feeds_db.get_feed(feed_id)


@router.delete(
    "/{feed_id}",
    status_code=204,
    summary="Unsubscribe from a feed",
    description="Delete a feed together with its articles."
)
async def delete_feed(feed_id: int) -> Response:
    deleted = await feeds_db.delete_feed(feed_id)
    if not deleted:
        raise NotFoundError(f"Feed '{feed_id}' not found")
    return Response(status_code=204)


@router.post(
    "/{feed_id}/refresh",
    response_model=list[Article],
    summary="Refresh a feed",
    description="Fetch the feed now and return the articles that were new."
)
async def refresh_feed(feed_id: int, service: Service) -> list[Article]:
    feed = await feeds_db.get_feed(feed_id)
    return await service.refresh_feed(feed)


@router.get(
    "/{feed_id}/articles",
    response_model=list[Article],
    summary="List articles of a feed"
)
async def list_feed_articles(feed_id: int) -> list[Article]:
    await feeds_db.get_feed(feed_id)
    return await articles_db.list_articles_by_feed(feed_id)
