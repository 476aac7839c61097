"""Paginated reads built from two windowed queries."""

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence

from ..errors.problem_details import PaginationCancelledError
from .cursor import Page, build_page
from .keys import KeySpec
from .options import Order, PaginationOptions


logger = logging.getLogger(__name__)

Filters = Mapping[str, Any]


class WindowFetcher(Protocol):
    """Storage side of a paginated read.

    Both windows AND ``filters`` into their query. An empty ``boundary``
    means the start of traversal, and the fetcher substitutes the sentinel
    for ``order``.
    """

    keys: KeySpec

    async def forward_window(
        self, filters: Filters, boundary: str, row_limit: int, order: Order
    ) -> Sequence[Any]:
        """Rows strictly beyond ``boundary`` in ``order``, ordered by ``order``."""
        ...

    async def backward_window(
        self, filters: Filters, boundary: str, row_limit: int, order: Order
    ) -> Sequence[Any]:
        """Rows strictly before ``boundary`` in ``order``, ordered the other way."""
        ...


class PaginatedQuery:
    """Fetch one page through a ``WindowFetcher``.

    Holds no state between calls. The two window reads run concurrently;
    if one fails the other is cancelled and the failure is re-raised as is.
    Cancelling the calling task cancels both reads. When ``timeout`` is set
    and exceeded, ``PaginationCancelledError`` is raised.
    """

    def __init__(self, fetcher: WindowFetcher, timeout: Optional[float] = None):
        self.fetcher = fetcher
        self.timeout = timeout

    async def fetch(
        self,
        options: PaginationOptions,
        filters: Optional[Filters] = None
    ) -> Page:
        filters = dict(filters or {})
        row_limit = options.limit + 1
        windows = self._fetch_windows(filters, options.cursor, row_limit, options.order)

        if self.timeout is None:
            forward, backward = await windows
        else:
            try:
                forward, backward = await asyncio.wait_for(windows, self.timeout)
            except asyncio.TimeoutError:
                logger.warning(
                    f"Page computation for {self.fetcher.keys.name} exceeded {self.timeout}s"
                )
                raise PaginationCancelledError(
                    f"Page computation exceeded {self.timeout} seconds"
                )

        keys = self.fetcher.keys
        page = build_page(
            forward,
            backward,
            options.limit,
            keys.sentinel(options.order),
            keys.key_of
        )
        logger.debug(
            f"Paged {len(page.items)} {keys.name} rows "
            f"(forward={len(forward)}, backward={len(backward)}, cursor={options.cursor!r})"
        )
        return page

    async def _fetch_windows(
        self,
        filters: Dict[str, Any],
        boundary: str,
        row_limit: int,
        order: Order
    ):
        forward_task = asyncio.ensure_future(
            self.fetcher.forward_window(filters, boundary, row_limit, order)
        )
        backward_task = asyncio.ensure_future(
            self.fetcher.backward_window(filters, boundary, row_limit, order)
        )
        tasks = (forward_task, backward_task)

        try:
            done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        except asyncio.CancelledError:
            await _cancel_all(tasks)
            raise

        for task in tasks:
            if task in done and not task.cancelled() and task.exception() is not None:
                await _cancel_all(tasks)
                raise task.exception()

        return forward_task.result(), backward_task.result()


async def _cancel_all(tasks) -> None:
    for task in tasks:
        if not task.done():
            task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
