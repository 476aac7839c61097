"""Shared FastAPI dependencies for the API routes."""

from typing import Annotated, Any, Dict, Optional

from fastapi import Depends, Request, Response

from ..config import get_settings
from ..pagination import Page, PaginationOptions, create_link_header
from ..parser import FeedParser
from ..service import FeedService


def pagination_options(request: Request) -> PaginationOptions:
    """Read limit, cursor and order leniently from the query string."""
    return PaginationOptions.from_params(
        request.query_params,
        default_limit=get_settings().default_page_size
    )


def get_feed_service() -> FeedService:
    settings = get_settings()
    return FeedService(
        FeedParser(
            timeout=settings.fetch_timeout_seconds,
            user_agent=settings.user_agent
        )
    )


def query_timeout() -> Optional[float]:
    return get_settings().query_timeout_seconds


def add_link_header(
    request: Request,
    response: Response,
    page: Page,
    options: PaginationOptions,
    extra: Optional[Dict[str, Any]] = None
) -> None:
    """Attach RFC 8288 next/prev links for ``page`` to ``response``."""
    params = {"limit": str(options.limit), "order": options.order.value, **(extra or {})}
    link_header = create_link_header(
        base_url=str(request.url).split("?")[0],
        params=params,
        cursor=page.cursor
    )
    if link_header:
        response.headers["Link"] = link_header


Pagination = Annotated[PaginationOptions, Depends(pagination_options)]
Service = Annotated[FeedService, Depends(get_feed_service)]
QueryTimeout = Annotated[Optional[float], Depends(query_timeout)]
