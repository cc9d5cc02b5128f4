"""
Date Resolver Module
Maps relative and explicit date phrases to a calendar date that is never
in the future.
"""

import re
import logging
from datetime import date, timedelta
from enum import Enum
from typing import Callable, Optional

from config import config
from .financial_rules import ConfidenceTier

logger = logging.getLogger(__name__)


class DateSource(Enum):
    """Which rule produced a resolved date."""
    KEYWORD = "keyword"
    RELATIVE = "relative"
    EXPLICIT = "explicit"
    FUTURE_CLAMPED = "future_clamped"
    DEFAULT = "default"


TODAY_KEYWORDS = ("hari ini", "today", "sekarang")
YESTERDAY_KEYWORDS = ("kemarin", "yesterday")

DAYS_AGO_PATTERN = re.compile(r'(\d+)\s*(hari|lusa)\s*(yang\s*)?lalu', re.IGNORECASE)

# YYYY-MM-DD is tried first so "2026-10-18" is never read as "26-10-18"
ISO_DATE_PATTERN = re.compile(r'(?<!\d)(\d{4})[/-](\d{1,2})[/-](\d{1,2})(?!\d)')
DMY_DATE_PATTERN = re.compile(r'(?<!\d)(\d{1,2})[/-](\d{1,2})[/-](\d{4}|\d{2})(?!\d)')


class DateResolver:
    """
    Resolves transaction dates against an injectable clock.

    Rules, first match wins:
    - "hari ini" / "today" / "sekarang"  -> today (HIGH)
    - "kemarin" / "yesterday"            -> yesterday (HIGH)
    - "<N> hari yang lalu", 1 <= N <= 30 -> today - N (MEDIUM)
    - explicit YYYY-MM-DD / DD/MM/YYYY   -> that date (MEDIUM), clamped
      to today (LOW) when it lies in the future
    - nothing                            -> today (LOW)
    """

    def __init__(
        self,
        today_provider: Callable[[], date] = date.today,
        max_days_ago: Optional[int] = None
    ):
        self.today_provider = today_provider
        self.max_days_ago = max_days_ago if max_days_ago is not None else config.MAX_DAYS_AGO

    def resolve(self, text: str) -> tuple[date, ConfidenceTier]:
        resolved, tier, _ = self.resolve_with_source(text)
        return resolved, tier

    def resolve_with_source(self, text: str) -> tuple[date, ConfidenceTier, DateSource]:
        """
        Resolve a date and report which rule produced it.

        Args:
            text: Free-form transaction text

        Returns:
            Tuple of (date, confidence tier, source rule)
        """
        lower_text = text.lower()
        today = self.today_provider()

        if any(keyword in lower_text for keyword in TODAY_KEYWORDS):
            return today, ConfidenceTier.HIGH, DateSource.KEYWORD

        if any(keyword in lower_text for keyword in YESTERDAY_KEYWORDS):
            return today - timedelta(days=1), ConfidenceTier.HIGH, DateSource.KEYWORD

        days_ago_match = DAYS_AGO_PATTERN.search(lower_text)
        if days_ago_match:
            days_str = days_ago_match.group(1).lstrip('0') or '0'
            days_ago = int(days_str) if len(days_str) <= len(str(self.max_days_ago)) else None
            if days_ago is not None and 1 <= days_ago <= self.max_days_ago:
                return today - timedelta(days=days_ago), ConfidenceTier.MEDIUM, DateSource.RELATIVE
            logger.debug(f"Ignoring relative date outside range: {days_ago_match.group(0)}")

        explicit = self._parse_explicit_date(lower_text)
        if explicit is not None:
            if explicit > today:
                logger.info(f"Future date {explicit.isoformat()} replaced with today")
                return today, ConfidenceTier.LOW, DateSource.FUTURE_CLAMPED
            return explicit, ConfidenceTier.MEDIUM, DateSource.EXPLICIT

        return today, ConfidenceTier.LOW, DateSource.DEFAULT

    @staticmethod
    def _parse_explicit_date(text: str) -> Optional[date]:
        """First valid calendar date literal in text, or None."""
        for match in ISO_DATE_PATTERN.finditer(text):
            year, month, day = (int(part) for part in match.groups())
            try:
                return date(year, month, day)
            except ValueError:
                logger.debug(f"Invalid calendar date: {match.group(0)}")

        for match in DMY_DATE_PATTERN.finditer(text):
            day_str, month_str, year_str = match.groups()
            year = int(year_str)
            if len(year_str) == 2:
                year += 2000
            try:
                return date(year, int(month_str), int(day_str))
            except ValueError:
                logger.debug(f"Invalid calendar date: {match.group(0)}")

        return None


def resolve_date(text: str, today: Optional[date] = None) -> tuple[date, ConfidenceTier]:
    """
    Convenience function to resolve a date from text.

    Args:
        text: Free-form transaction text
        today: Fixed "today"; the system date is used when omitted
    """
    if today is None:
        return DateResolver().resolve(text)
    return DateResolver(today_provider=lambda: today).resolve(text)
