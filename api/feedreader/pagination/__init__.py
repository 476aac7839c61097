"""Pagination module for cursor-based (keyset) pagination."""

from .options import Order, PaginationOptions, DEFAULT_LIMIT, MAX_LIMIT
from .cursor import Cursor, Page, build_page
from .keys import KeySpec, FEED_KEYS, ARTICLE_KEYS
from .query import WindowFetcher, PaginatedQuery
from .links import create_link_header

__all__ = [
    "Order",
    "PaginationOptions",
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "Cursor",
    "Page",
    "build_page",
    "KeySpec",
    "FEED_KEYS",
    "ARTICLE_KEYS",
    "WindowFetcher",
    "PaginatedQuery",
    "create_link_header"
]
