"""Tests for window query construction and store failure mapping."""

import asyncio
from unittest.mock import patch

import asyncpg
import pytest

from feedreader.db.articles import ARTICLE_COLUMNS, article_window_fetcher
from feedreader.db.feeds import feed_window_fetcher
from feedreader.db.windows import build_order_clause, build_where_clause
from feedreader.errors.problem_details import QueryFailureError, StoreUnavailableError
from feedreader.models.feeds import Feed
from feedreader.pagination import ARTICLE_KEYS, FEED_KEYS, Order
from feedreader.pagination.keys import INT64_MAX


class TestClauses:
    """Test WHERE and ORDER BY construction."""

    def test_single_column_descending(self):
        where, params = build_where_clause(FEED_KEYS, {}, (10,), Order.DESCENDING)
        assert where == "id < $1::bigint"
        assert params == [10]

    def test_single_column_ascending(self):
        where, params = build_where_clause(FEED_KEYS, {}, (10,), Order.ASCENDING)
        assert where == "id > $1::bigint"

    def test_row_comparison_with_filters(self):
        where, params = build_where_clause(
            ARTICLE_KEYS, {"read": False, "favorited": True}, (100, 7), Order.DESCENDING
        )
        assert where == "favorited = $1 AND read = $2 AND (published, id) < ($3::bigint, $4::bigint)"
        assert params == [True, False, 100, 7]

    def test_order_clause(self):
        assert build_order_clause(ARTICLE_KEYS, Order.DESCENDING) == "ORDER BY published DESC, id DESC"
        assert build_order_clause(FEED_KEYS, Order.ASCENDING) == "ORDER BY id ASC"


class TestBuildQuery:
    """Test the SELECT each window issues."""

    def test_forward_descending_query(self):
        fetcher = article_window_fetcher()
        query, params = fetcher.build_query(
            {"read": False}, "100:7", 3, Order.DESCENDING, Order.DESCENDING
        )
        assert query == (
            f"SELECT {', '.join(ARTICLE_COLUMNS)} FROM articles "
            "WHERE read = $1 AND (published, id) < ($2::bigint, $3::bigint) "
            "ORDER BY published DESC, id DESC "
            "LIMIT $4"
        )
        assert params == [False, 100, 7, 3]

    def test_backward_runs_opposite_direction(self):
        fetcher = feed_window_fetcher()
        query, params = fetcher.build_query({}, "5", 11, Order.ASCENDING, Order.DESCENDING)
        assert "WHERE id > $1::bigint" in query
        assert "ORDER BY id ASC" in query
        assert params == [5, 11]

    def test_empty_boundary_uses_order_sentinel(self):
        fetcher = feed_window_fetcher()
        _, params = fetcher.build_query({}, "", 3, Order.DESCENDING, Order.DESCENDING)
        assert params == [INT64_MAX, 3]

        # backward window of a descending traversal looks above the sentinel
        _, params = fetcher.build_query({}, "", 3, Order.ASCENDING, Order.DESCENDING)
        assert params == [INT64_MAX, 3]

    def test_unknown_filter_column_rejected(self):
        fetcher = article_window_fetcher()
        with pytest.raises(ValueError):
            fetcher.build_query(
                {"1=1; DROP TABLE articles; --": 1}, "", 3, Order.DESCENDING, Order.DESCENDING
            )

    def test_feeds_are_not_filterable(self):
        with pytest.raises(ValueError):
            feed_window_fetcher().build_query({"read": True}, "", 3, Order.DESCENDING, Order.DESCENDING)


class TestWindowFetch:
    """Test reads against a mocked pool."""

    async def test_rows_become_models(self, mock_db_pool, sample_feed):
        pool, conn = mock_db_pool
        conn.fetch.return_value = [sample_feed.model_dump()]

        with patch("feedreader.db.windows.require_db_pool", return_value=pool):
            rows = await feed_window_fetcher().forward_window({}, "", 3, Order.DESCENDING)

        assert rows == [sample_feed]
        assert isinstance(rows[0], Feed)
        query, *params = conn.fetch.call_args.args
        assert "ORDER BY id DESC" in query
        assert params == [INT64_MAX, 3]

    async def test_backward_window_query(self, mock_db_pool):
        pool, conn = mock_db_pool
        conn.fetch.return_value = []

        with patch("feedreader.db.windows.require_db_pool", return_value=pool):
            await feed_window_fetcher().backward_window({}, "4", 3, Order.DESCENDING)

        query, *params = conn.fetch.call_args.args
        assert "id > $1::bigint" in query
        assert "ORDER BY id ASC" in query
        assert params == [4, 3]

    async def test_uninitialized_pool_fails_fast(self):
        with patch("feedreader.db.connection.db_manager.pool", None):
            with pytest.raises(StoreUnavailableError):
                await feed_window_fetcher().forward_window({}, "", 3, Order.DESCENDING)

    async def test_postgres_error_is_query_failure(self, mock_db_pool):
        pool, conn = mock_db_pool
        conn.fetch.side_effect = asyncpg.UndefinedTableError("relation does not exist")

        with patch("feedreader.db.windows.require_db_pool", return_value=pool):
            with pytest.raises(QueryFailureError):
                await article_window_fetcher().forward_window({}, "", 3, Order.DESCENDING)

    async def test_connection_error_is_store_unavailable(self, mock_db_pool):
        pool, conn = mock_db_pool
        conn.fetch.side_effect = ConnectionRefusedError("refused")

        with patch("feedreader.db.windows.require_db_pool", return_value=pool):
            with pytest.raises(StoreUnavailableError):
                await article_window_fetcher().forward_window({}, "", 3, Order.DESCENDING)

    async def test_command_timeout_is_query_failure(self, mock_db_pool):
        pool, conn = mock_db_pool
        conn.fetch.side_effect = asyncio.TimeoutError()

        with patch("feedreader.db.windows.require_db_pool", return_value=pool):
            with pytest.raises(QueryFailureError):
                await feed_window_fetcher().forward_window({}, "", 3, Order.DESCENDING)
