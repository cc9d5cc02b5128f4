"""Shared fixtures: a fixed clock so date assertions are deterministic."""

from datetime import date

import pytest
from extractors.text_parser import TextParser

FIXED_TODAY = date(2026, 10, 18)


@pytest.fixture
def today() -> date:
    return FIXED_TODAY


@pytest.fixture
def parser(today) -> TextParser:
    return TextParser(today_provider=lambda: today)
