"""Cursor construction from a forward and a backward window."""

from typing import Callable, Generic, List, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict, Field


T = TypeVar("T")


class Cursor(BaseModel):
    """Tokens for moving to the neighbouring pages.

    Tokens are pagination keys (or the sentinel) and are opaque to callers.
    """

    next: str = Field(default="", description="Cursor for the next page")
    prev: str = Field(default="", description="Cursor for the previous page")
    has_next: bool = Field(default=False, alias="hasNext", description="Whether a next page exists")
    has_prev: bool = Field(default=False, alias="hasPrev", description="Whether a previous page exists")

    model_config = ConfigDict(populate_by_name=True)


class Page(BaseModel, Generic[T]):
    """A trimmed page of items plus its cursor."""

    items: List[T] = Field(default_factory=list, description="Items in primary order")
    cursor: Cursor = Field(default_factory=Cursor, description="Pagination cursor")


def build_page(
    forward: Sequence[T],
    backward: Sequence[T],
    limit: int,
    sentinel: str,
    key: Callable[[T], str]
) -> Page[T]:
    """Merge two raw windows into a page and its cursor.

    ``forward`` holds up to ``limit + 1`` items beyond the boundary in
    primary order; it supplies the page and the next token. ``backward``
    holds up to ``limit + 1`` items on the other side of the boundary in
    the opposite order; it only decides whether a previous page exists and
    where it starts.

    Forward rules:
        * empty window: no next page, empty page.
        * ``limit + 1`` items: the extra row is lookahead. The page is the
          first ``limit`` items and ``next`` is the key of the last of them.
        * anything shorter: the window is terminal. The page is the whole
          window, ``next`` is the key of its last item and ``has_next`` is
          False. This holds even when the window is shorter than ``limit``
          by more than one row.

    Backward rules:
        * zero or one item: no previous page.
        * at least ``limit`` items: ``prev`` is the key of the second item.
        * otherwise: ``prev`` is the sentinel, meaning the previous page is
          the first page of the traversal.

    Args:
        forward: Window fetched away from the traversal start
        backward: Window fetched towards the traversal start
        limit: Requested page size (positive)
        sentinel: Start-of-traversal key for the requested order
        key: Pagination key extraction for the entity type

    Returns:
        Page with at most ``limit`` items
    """
    if limit <= 0:
        raise ValueError("limit must be positive")

    cursor = Cursor()
    items: List[T] = []

    if len(forward) > limit:
        items = list(forward[:limit])
        cursor.has_next = True
        cursor.next = key(forward[limit - 1])
    elif forward:
        items = list(forward)
        cursor.next = key(forward[-1])

    if len(backward) > 1:
        cursor.has_prev = True
        if len(backward) >= limit:
            cursor.prev = key(backward[1])
        else:
            cursor.prev = sentinel

    return Page(items=items, cursor=cursor)
