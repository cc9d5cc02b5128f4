"""Tests for financial_validator.py - draft validation before saving."""

from datetime import date

import pytest
from extractors.financial_rules import TransactionType
from extractors.text_parser import TransactionDraft, parse_text
from validators.financial_validator import (
    FUTURE_DATE_MESSAGE,
    DraftValidator,
    ValidationError,
    validate_and_fix_date,
    validate_drafts,
)


def make_draft(
    transaction_type=TransactionType.EXPENSE,
    amount=20000,
    description="bakso",
    category="Makanan",
    draft_date=date(2026, 10, 18),
) -> TransactionDraft:
    """Create a TransactionDraft instance for testing."""
    return TransactionDraft(
        transaction_type=transaction_type,
        amount=amount,
        description=description,
        category=category,
        date=draft_date,
    )


@pytest.fixture
def validator(today):
    return DraftValidator(today_provider=lambda: today)


class TestDraftValidator:
    def test_valid_draft(self, validator):
        assert validator.validate_draft(make_draft()) is True
        assert validator.get_stats()["valid"] == 1
        assert validator.last_errors == []

    def test_parsed_draft_is_valid(self, validator, today):
        result = parse_text("Beli bakso hari ini 20 ribu", today=today)
        assert validator.validate_draft(result.data) is True

    @pytest.mark.parametrize(
        "overrides, stat_key",
        [
            ({"transaction_type": None}, "invalid_type"),
            ({"amount": 0}, "invalid_amount"),
            ({"amount": -500}, "invalid_amount"),
            ({"amount": 10_000_000_001}, "invalid_amount"),
            ({"amount": 2.5}, "invalid_amount"),
            ({"description": "ab"}, "invalid_description"),
            ({"description": "   "}, "invalid_description"),
            ({"category": ""}, "invalid_category"),
            ({"draft_date": date(2026, 10, 19)}, "invalid_date"),
            ({"draft_date": None}, "invalid_date"),
        ],
    )
    def test_invalid_fields(self, validator, overrides, stat_key):
        assert validator.validate_draft(make_draft(**overrides)) is False

        stats = validator.get_stats()
        assert stats[stat_key] == 1
        assert stats["invalid"] == 1
        assert len(validator.last_errors) == 1

    def test_all_errors_are_collected(self, validator):
        draft = make_draft(amount=0, description="", category="")
        assert validator.validate_draft(draft) is False
        assert len(validator.last_errors) == 3

    def test_zero_amount_allowed_when_configured(self, today):
        validator = DraftValidator(allow_zero_amounts=True, today_provider=lambda: today)
        assert validator.validate_draft(make_draft(amount=0)) is True

    def test_strict_mode_raises(self, today):
        validator = DraftValidator(strict_mode=True, today_provider=lambda: today)
        with pytest.raises(ValidationError, match="Invalid amount"):
            validator.validate_draft(make_draft(amount=0))

    def test_validate_drafts_filters_invalid(self, validator):
        drafts = [make_draft(), make_draft(amount=0), make_draft(description="nasi goreng")]
        valid = validator.validate_drafts(drafts)

        assert len(valid) == 2
        assert validator.get_stats()["total_validated"] == 3

    def test_reset_stats(self, validator):
        validator.validate_draft(make_draft(amount=0))
        validator.reset_stats()
        assert validator.get_stats()["invalid"] == 0


class TestValidateAndFixDate:
    def test_empty_date_uses_today(self, today):
        assert validate_and_fix_date(None, today) == ("2026-10-18", None)
        assert validate_and_fix_date("", today) == ("2026-10-18", None)

    def test_future_date_is_replaced(self, today):
        assert validate_and_fix_date("2026-12-25", today) == ("2026-10-18", FUTURE_DATE_MESSAGE)

    def test_past_date_is_kept(self, today):
        assert validate_and_fix_date("2026-10-01", today) == ("2026-10-01", None)

    def test_malformed_date_raises(self, today):
        with pytest.raises(ValueError):
            validate_and_fix_date("18/10/2026", today)


def test_validate_drafts_convenience():
    drafts = [make_draft(draft_date=date(2020, 1, 1)), make_draft(amount=0, draft_date=date(2020, 1, 1))]
    assert len(validate_drafts(drafts)) == 1
