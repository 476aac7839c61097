"""Pagination keys for the entity kinds that can be paged.

Each kind carries its own key extraction. A key is one or more integers
joined with ``:``; the same integers drive the SQL row comparison.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from .options import Order


logger = logging.getLogger(__name__)

INT64_MAX = 2 ** 63 - 1
INT64_MIN = -(2 ** 63)
KEY_SEPARATOR = ":"


@dataclass(frozen=True)
class KeySpec:
    """How one entity kind is keyed and ordered."""

    name: str
    columns: Tuple[str, ...]
    key_of: Callable[[Any], str]
    min_key: str
    max_key: str

    def sentinel(self, order: Order) -> str:
        """Key standing in for "no boundary yet" in the given order."""
        if order is Order.DESCENDING:
            return self.max_key
        return self.min_key

    def parse(self, token: str) -> Optional[Tuple[int, ...]]:
        """Split a key into its integer parts, or None if it is not a key."""
        parts = token.split(KEY_SEPARATOR)
        if len(parts) != len(self.columns):
            return None
        try:
            values = tuple(int(part) for part in parts)
        except ValueError:
            return None
        if any(v < INT64_MIN or v > INT64_MAX for v in values):
            return None
        return values

    def boundary(self, token: str, order: Order) -> Tuple[int, ...]:
        """Resolve a cursor token to a boundary, falling back to the sentinel."""
        if token:
            values = self.parse(token)
            if values is not None:
                return values
            logger.warning(f"Ignoring malformed {self.name} cursor {token!r}")
        return self.parse(self.sentinel(order))


def feed_key(feed: Any) -> str:
    return str(_field(feed, "id"))


def article_key(article: Any) -> str:
    return f"{_field(article, 'published')}{KEY_SEPARATOR}{_field(article, 'id')}"


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item[name]
    return getattr(item, name)


FEED_KEYS = KeySpec(
    name="feed",
    columns=("id",),
    key_of=feed_key,
    min_key="0",
    max_key=str(INT64_MAX),
)

# Articles share publish timestamps, so the id breaks ties.
ARTICLE_KEYS = KeySpec(
    name="article",
    columns=("published", "id"),
    key_of=article_key,
    min_key=f"{INT64_MIN}{KEY_SEPARATOR}0",
    max_key=f"{INT64_MAX}{KEY_SEPARATOR}{INT64_MAX}",
)
