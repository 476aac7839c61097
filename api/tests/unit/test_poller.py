"""Tests for the background feed poller."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

from feedreader.errors.problem_details import StoreUnavailableError
from feedreader.poller import Poller


def feeds_iter(feeds):
    async def iterate(page_size=50):
        for feed in feeds:
            yield feed
    return iterate


class TestPoller:
    """Test polling runs and task lifecycle."""

    async def test_run_once_refreshes_every_feed(self, sample_feed, sample_article):
        other = sample_feed.model_copy(update={"id": 8})
        service = MagicMock()
        service.refresh_feed = AsyncMock(side_effect=[[sample_article], [sample_article, sample_article]])

        with patch("feedreader.poller.feeds_db.iter_all_feeds", feeds_iter([sample_feed, other])):
            added = await Poller(service, 60).run_once()

        assert added == 3
        assert [c.args[0].id for c in service.refresh_feed.await_args_list] == [7, 8]

    async def test_failed_feed_is_skipped(self, sample_feed, sample_article, caplog):
        other = sample_feed.model_copy(update={"id": 8})
        service = MagicMock()
        service.refresh_feed = AsyncMock(side_effect=[RuntimeError("boom"), [sample_article]])

        with patch("feedreader.poller.feeds_db.iter_all_feeds", feeds_iter([sample_feed, other])):
            added = await Poller(service, 60).run_once()

        assert added == 1
        assert "Failed to refresh feed 7" in caplog.text

    async def test_poll_survives_store_outage(self):
        poller = Poller(MagicMock(), 0)
        calls = []

        async def run_once():
            calls.append(1)
            if len(calls) == 1:
                raise StoreUnavailableError()
            if len(calls) == 3:
                raise asyncio.CancelledError()
            return 0

        poller.run_once = run_once
        task = asyncio.create_task(poller.poll())
        while not task.done():
            await asyncio.sleep(0)

        assert task.cancelled()
        assert len(calls) == 3

    async def test_poll_survives_unexpected_error(self, caplog):
        poller = Poller(MagicMock(), 0)
        calls = []

        async def run_once():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("boom")
            if len(calls) == 3:
                raise asyncio.CancelledError()
            return 0

        poller.run_once = run_once
        task = asyncio.create_task(poller.poll())
        while not task.done():
            await asyncio.sleep(0)

        assert task.cancelled()
        assert len(calls) == 3
        assert "Poll failed" in caplog.text
        assert "RuntimeError: boom" in caplog.text

    async def test_start_and_stop(self):
        poller = Poller(MagicMock(), 3600)

        poller.start()
        assert poller.running
        task = poller._task
        poller.start()
        assert poller._task is task

        await poller.stop()
        assert not poller.running
        assert task.cancelled()

    async def test_stop_without_start(self):
        await Poller(MagicMock(), 3600).stop()
