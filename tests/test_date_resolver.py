"""Tests for date_resolver.py - relative phrases, literals and the future clamp."""

from datetime import date

import pytest
from extractors.date_resolver import DateResolver, DateSource, resolve_date
from extractors.financial_rules import ConfidenceTier


@pytest.fixture
def resolver(today):
    return DateResolver(today_provider=lambda: today)


class TestKeywords:
    @pytest.mark.parametrize("text", ["beli bakso hari ini", "lunch today", "bayar sekarang"])
    def test_today(self, resolver, today, text):
        assert resolver.resolve(text) == (today, ConfidenceTier.HIGH)

    @pytest.mark.parametrize("text", ["makan kemarin", "coffee yesterday"])
    def test_yesterday(self, resolver, text):
        assert resolver.resolve(text) == (date(2026, 10, 17), ConfidenceTier.HIGH)


class TestRelativeDays:
    def test_days_ago(self, resolver):
        assert resolver.resolve("3 hari yang lalu") == (date(2026, 10, 15), ConfidenceTier.MEDIUM)
        assert resolver.resolve("2 hari lalu") == (date(2026, 10, 16), ConfidenceTier.MEDIUM)

    def test_out_of_range_falls_back_to_default(self, resolver, today):
        assert resolver.resolve_with_source("45 hari yang lalu") == (
            today, ConfidenceTier.LOW, DateSource.DEFAULT
        )

    def test_huge_day_count_is_out_of_range(self, resolver, today):
        assert resolver.resolve_with_source("1" * 5000 + " hari lalu") == (
            today, ConfidenceTier.LOW, DateSource.DEFAULT
        )

    def test_custom_range(self, today):
        resolver = DateResolver(today_provider=lambda: today, max_days_ago=60)
        assert resolver.resolve("45 hari yang lalu") == (date(2026, 9, 3), ConfidenceTier.MEDIUM)


class TestExplicitDates:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("makan 15/10/2026", date(2026, 10, 15)),
            ("2026-10-01 bensin", date(2026, 10, 1)),
            ("05-09-25", date(2025, 9, 5)),
            ("2026-10-18", date(2026, 10, 18)),
        ],
    )
    def test_literals(self, resolver, text, expected):
        assert resolver.resolve_with_source(text) == (expected, ConfidenceTier.MEDIUM, DateSource.EXPLICIT)

    def test_future_date_is_clamped_to_today(self, resolver, today):
        assert resolver.resolve_with_source("beli 20/12/2026") == (
            today, ConfidenceTier.LOW, DateSource.FUTURE_CLAMPED
        )

    def test_impossible_date_is_ignored(self, resolver, today):
        assert resolver.resolve_with_source("31/02/2026") == (today, ConfidenceTier.LOW, DateSource.DEFAULT)


def test_no_date_defaults_to_today(resolver, today):
    assert resolver.resolve_with_source("asdkjasd") == (today, ConfidenceTier.LOW, DateSource.DEFAULT)


def test_resolve_date_convenience(today):
    assert resolve_date("kemarin", today=today) == (date(2026, 10, 17), ConfidenceTier.HIGH)
