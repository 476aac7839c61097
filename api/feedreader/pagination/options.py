"""Page request options parsed from raw query parameters."""

from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_LIMIT = 10
MAX_LIMIT = 200


class Order(str, Enum):
    """Traversal order over the pagination key."""

    ASCENDING = "ascending"
    DESCENDING = "descending"

    def opposite(self) -> "Order":
        if self is Order.ASCENDING:
            return Order.DESCENDING
        return Order.ASCENDING


class PaginationOptions(BaseModel):
    """Options for a single page request.

    An empty cursor means "start of traversal" in the configured order.
    """

    cursor: str = Field(default="", description="Opaque cursor returned as next or prev")
    limit: int = Field(
        default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="Number of items per page"
    )
    order: Order = Field(default=Order.DESCENDING, description="Traversal order")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_params(
        cls,
        params: Optional[Mapping[str, Any]],
        default_limit: int = DEFAULT_LIMIT
    ) -> "PaginationOptions":
        """Build options from raw key-value input.

        Parsing never fails: a missing, non-numeric, non-positive or over
        ``MAX_LIMIT`` limit becomes ``default_limit``, a missing cursor
        becomes the empty string and an unknown order becomes descending.

        Args:
            params: Raw request parameters (query string or similar)
            default_limit: Limit used when none, or a bad one, is supplied

        Returns:
            Normalized pagination options
        """
        params = params or {}
        return cls(
            cursor=_parse_cursor(params.get("cursor")),
            limit=_parse_limit(params.get("limit"), default_limit),
            order=_parse_order(params.get("order")),
        )


def _parse_limit(raw: Any, default: int) -> int:
    if default <= 0 or default > MAX_LIMIT:
        default = DEFAULT_LIMIT
    if raw is None or isinstance(raw, bool):
        return default
    try:
        limit = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    if limit <= 0 or limit > MAX_LIMIT:
        return default
    return limit


def _parse_cursor(raw: Any) -> str:
    if raw is None:
        return ""
    return str(raw)


def _parse_order(raw: Any) -> Order:
    if raw is None:
        return Order.DESCENDING
    try:
        return Order(str(raw).strip().lower())
    except ValueError:
        return Order.DESCENDING
