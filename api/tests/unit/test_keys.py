"""Tests for pagination key extraction and parsing."""

import logging

from feedreader.pagination import ARTICLE_KEYS, FEED_KEYS, Order
from feedreader.pagination.keys import INT64_MAX, INT64_MIN


class TestFeedKeys:
    """Feeds are keyed by their numeric id."""

    def test_key_of_model(self, sample_feed):
        assert FEED_KEYS.key_of(sample_feed) == "7"

    def test_key_of_mapping(self):
        assert FEED_KEYS.key_of({"id": 12}) == "12"

    def test_sentinels(self):
        assert FEED_KEYS.sentinel(Order.DESCENDING) == str(INT64_MAX)
        assert FEED_KEYS.sentinel(Order.ASCENDING) == "0"

    def test_parse(self):
        assert FEED_KEYS.parse("42") == (42,)
        assert FEED_KEYS.parse("abc") is None
        assert FEED_KEYS.parse("1:2") is None
        assert FEED_KEYS.parse(str(INT64_MAX + 1)) is None


class TestArticleKeys:
    """Articles are keyed by publish second and id."""

    def test_key_of_model(self, sample_article):
        assert ARTICLE_KEYS.key_of(sample_article) == "1136214245:42"

    def test_parse(self):
        assert ARTICLE_KEYS.parse("1136214245:42") == (1136214245, 42)
        assert ARTICLE_KEYS.parse("-5:3") == (-5, 3)
        assert ARTICLE_KEYS.parse("1136214245") is None
        assert ARTICLE_KEYS.parse("a:b") is None

    def test_sentinels_bound_every_key(self):
        high = ARTICLE_KEYS.parse(ARTICLE_KEYS.sentinel(Order.DESCENDING))
        low = ARTICLE_KEYS.parse(ARTICLE_KEYS.sentinel(Order.ASCENDING))
        assert high == (INT64_MAX, INT64_MAX)
        assert low == (INT64_MIN, 0)
        assert low < (0, 1) < high


class TestBoundary:
    """Cursor tokens resolve to boundaries leniently."""

    def test_empty_token_uses_sentinel(self):
        assert FEED_KEYS.boundary("", Order.DESCENDING) == (INT64_MAX,)
        assert FEED_KEYS.boundary("", Order.ASCENDING) == (0,)

    def test_valid_token(self):
        assert ARTICLE_KEYS.boundary("10:2", Order.DESCENDING) == (10, 2)

    def test_malformed_token_uses_sentinel(self, caplog):
        caplog.set_level(logging.WARNING)
        assert FEED_KEYS.boundary("garbage", Order.ASCENDING) == (0,)
        assert "Ignoring malformed feed cursor" in caplog.text
