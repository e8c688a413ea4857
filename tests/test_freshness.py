"""Tests for recency parsing and freshness scoring."""

from datetime import datetime, timedelta, timezone

import pytest

from travel_news.scraper.freshness import (
    freshness_score,
    is_stale,
    parse_datetime,
    published_from_text,
    published_from_url,
)

from tests.helpers import NOW, hours_ago


class TestParseDatetime:

    @pytest.mark.parametrize("value, expected", [
        ("2026-10-17T10:00:00Z", datetime(2026, 10, 17, 10, tzinfo=timezone.utc)),
        ("2026-10-17T12:00:00+02:00", datetime(2026, 10, 17, 10, tzinfo=timezone.utc)),
        ("2026-10-15", datetime(2026, 10, 15, tzinfo=timezone.utc)),
        ("October 15, 2026", datetime(2026, 10, 15, tzinfo=timezone.utc)),
        ("Oct 15, 2026", datetime(2026, 10, 15, tzinfo=timezone.utc)),
    ])
    def test_formats(self, value, expected):
        assert parse_datetime(value) == expected

    @pytest.mark.parametrize("value", [None, "", "last weekend", "Oct 15"])
    def test_unrecognised(self, value):
        assert parse_datetime(value) is None


class TestPublishedFromText:

    @pytest.mark.parametrize("text, age", [
        ("Updated 3 hours ago", timedelta(hours=3)),
        ("an hour ago", timedelta(hours=1)),
        ("45 mins ago", timedelta(minutes=45)),
        ("2 days ago", timedelta(days=2)),
        ("1 week ago", timedelta(days=7)),
        ("Posted yesterday", timedelta(days=1)),
        ("Just now", timedelta(0)),
    ])
    def test_relative_phrases(self, text, age):
        assert published_from_text(text, NOW) == NOW - age

    def test_no_phrase(self):
        assert published_from_text("Ten hidden beaches", NOW) is None
        assert published_from_text("", NOW) is None


class TestPublishedFromUrl:

    def test_full_date(self):
        assert published_from_url("https://example.com/travel/2026/10/15/lisbon") == \
            datetime(2026, 10, 15, tzinfo=timezone.utc)

    def test_month_only(self):
        assert published_from_url("https://example.com/2026/10/lisbon-guide") == \
            datetime(2026, 10, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("url", [
        "https://example.com/travel/lisbon",
        "https://example.com/2026/13/01/lisbon",
        "https://example.com/2026/02/31/lisbon",
    ])
    def test_no_date(self, url):
        assert published_from_url(url) is None


class TestStale:

    def test_older_than_limit(self):
        assert is_stale(NOW - timedelta(days=8), 7, NOW)

    def test_within_limit(self):
        assert not is_stale(NOW - timedelta(days=6), 7, NOW)

    def test_unknown_age_is_never_stale(self):
        assert not is_stale(None, 7, NOW)

    def test_disabled_limit(self):
        assert not is_stale(NOW - timedelta(days=400), None, NOW)


class TestFreshnessScore:

    @pytest.mark.parametrize("hours, expected", [
        (0, 100), (6, 100), (7, 85), (24, 85), (30, 65), (72, 65), (100, 45), (168, 45), (200, 15),
    ])
    def test_age_bands(self, hours, expected):
        assert freshness_score("Any title", hours_ago(hours), NOW) == expected

    def test_future_dates_count_as_fresh(self):
        assert freshness_score("Any title", NOW + timedelta(hours=2), NOW) == 100

    @pytest.mark.parametrize("title, expected", [
        ("Lisbon museums reopen", 30),
        ("New rail routes across the Alps", 40),
        ("The best islands of 2026", 40),
        ("What to pack this week", 40),
        ("Newcastle city guide", 30),
    ])
    def test_unknown_age(self, title, expected):
        assert freshness_score(title, None, NOW) == expected
