"""Background refresh of every subscribed feed on a fixed interval."""

import asyncio
import contextlib
import logging
from typing import Optional

from .db import feeds as feeds_db
from .errors.problem_details import ProblemDetailException
from .service import FeedService


logger = logging.getLogger(__name__)


class Poller:
    """Checks feeds for new articles every ``interval_seconds``."""

    def __init__(self, service: FeedService, interval_seconds: float, page_size: int = 50):
        self.service = service
        self.interval_seconds = interval_seconds
        self.page_size = page_size
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int:
        """Refresh every feed once, walking the feed list page by page.

        A feed that fails to refresh is logged and skipped.

        Returns:
            Number of new articles stored
        """
        total = 0
        async for feed in feeds_db.iter_all_feeds(page_size=self.page_size):
            try:
                new = await self.service.refresh_feed(feed)
            except Exception:
                logger.exception(f"Failed to refresh feed {feed.id} ({feed.title})")
                continue
            total += len(new)
        return total

    async def poll(self) -> None:
        """Refresh all feeds after each interval until cancelled.

        A failed poll is logged and retried after the next interval.
        """
        logger.info(f"Polling feeds every {self.interval_seconds}s")
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                added = await self.run_once()
            except ProblemDetailException as e:
                logger.error(f"Could not list feeds: {e}")
                continue
            except Exception:
                logger.exception("Poll failed")
                continue
            logger.info(f"Poll complete, {added} new articles")

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self.poll(), name="feed-poller")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Feed poller stopped")
