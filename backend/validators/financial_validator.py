"""
Financial Validator Module
Validates (possibly user-edited) transaction drafts before they are handed
to persistence.
"""

import logging
from datetime import date, datetime
from typing import Callable, Optional
from config import config
from extractors.financial_rules import TransactionType
from extractors.text_parser import TransactionDraft

logger = logging.getLogger(__name__)

FUTURE_DATE_MESSAGE = (
    "Tanggal transaksi adalah tanggal masa depan. "
    "Menggunakan tanggal hari ini sebagai gantinya."
)


class ValidationError(Exception):
    """Custom exception for validation errors."""
    pass


def validate_and_fix_date(date_str: Optional[str], today: date) -> tuple[str, Optional[str]]:
    """
    Validate an ISO date string and replace future dates with today.

    Args:
        date_str: Date in YYYY-MM-DD format (empty means today)
        today: Reference date

    Returns:
        tuple: (date_str, error_message)

    Raises:
        ValueError: If date_str is not a valid YYYY-MM-DD date
    """
    if not date_str:
        return today.isoformat(), None

    parsed = datetime.strptime(date_str, '%Y-%m-%d').date()
    if parsed > today:
        return today.isoformat(), FUTURE_DATE_MESSAGE

    return date_str, None


class DraftValidator:
    """Validates transaction drafts."""

    def __init__(
        self,
        strict_mode: bool = False,
        allow_zero_amounts: bool = False,
        min_description_length: Optional[int] = None,
        max_amount: Optional[int] = None,
        today_provider: Callable[[], date] = date.today
    ):
        """
        Initialize validator with configurable settings.

        Args:
            strict_mode: If True, raise exceptions on invalid data.
                        If False, log warnings and return False.
            allow_zero_amounts: If True, allow drafts with 0 amount.
            min_description_length: Minimum characters required in description.
            max_amount: Largest accepted amount in rupiah.
            today_provider: Clock used to reject future dates.
        """
        self.strict_mode = strict_mode
        self.allow_zero_amounts = allow_zero_amounts
        self.min_description_length = (
            min_description_length if min_description_length is not None
            else config.MIN_DESCRIPTION_LENGTH
        )
        self.max_amount = max_amount if max_amount is not None else config.MAX_AMOUNT
        self.today_provider = today_provider
        self.last_errors: list[str] = []
        self.reset_stats()

    def validate_draft(self, draft: TransactionDraft) -> bool:
        """
        Validate a single draft.

        Args:
            draft: TransactionDraft to validate

        Returns:
            True if valid, False if invalid

        Raises:
            ValidationError: If strict_mode is True and validation fails
        """
        self.validation_stats["total_validated"] += 1
        self.last_errors = []

        checks = (
            ("invalid_type", self._validate_type(draft.type), f"Invalid type: {draft.type}"),
            ("invalid_amount", self._validate_amount(draft.amount), f"Invalid amount: {draft.amount}"),
            ("invalid_description", self._validate_description(draft.description),
             "Invalid description: empty or too short"),
            ("invalid_category", self._validate_category(draft.category), "Invalid category: empty"),
            ("invalid_date", self._validate_date(draft.date), f"Invalid date: {draft.date}"),
        )

        for stat_key, is_valid, msg in checks:
            if is_valid:
                continue
            self.validation_stats[stat_key] += 1
            self.last_errors.append(msg)

        if not self.last_errors:
            self.validation_stats["valid"] += 1
            return True

        self.validation_stats["invalid"] += 1
        if self.strict_mode:
            raise ValidationError("; ".join(self.last_errors))
        logger.warning(f"{'; '.join(self.last_errors)} in draft: {draft!r}")
        return False

    def validate_drafts(self, drafts: list[TransactionDraft]) -> list[TransactionDraft]:
        """
        Validate a list of drafts.

        Returns:
            List of valid drafts (invalid ones filtered out)
        """
        valid_drafts = [draft for draft in drafts if self.validate_draft(draft)]

        logger.info(
            f"Validation complete: {self.validation_stats['valid']} valid, "
            f"{self.validation_stats['invalid']} invalid out of "
            f"{self.validation_stats['total_validated']} total"
        )

        return valid_drafts

    @staticmethod
    def _validate_type(txn_type) -> bool:
        return isinstance(txn_type, TransactionType)

    def _validate_amount(self, amount) -> bool:
        """
        Must be:
        - An integer number of rupiah
        - Non-zero (unless allow_zero_amounts is True) and non-negative
        - No larger than max_amount
        """
        if isinstance(amount, bool) or not isinstance(amount, int):
            return False

        if amount < 0 or amount > self.max_amount:
            return False

        if amount == 0 and not self.allow_zero_amounts:
            logger.debug("Amount is zero (rejected - allow_zero_amounts=False)")
            return False

        return True

    def _validate_description(self, description) -> bool:
        if not isinstance(description, str) or not description.strip():
            return False

        if len(description.strip()) < self.min_description_length:
            logger.debug(f"Description too short: '{description}' (min: {self.min_description_length})")
            return False

        return True

    @staticmethod
    def _validate_category(category) -> bool:
        return isinstance(category, str) and bool(category.strip())

    def _validate_date(self, value) -> bool:
        """Date must be a calendar date that is not after today."""
        if not isinstance(value, date) or isinstance(value, datetime):
            return False
        return value <= self.today_provider()

    def get_stats(self) -> dict:
        """Get validation statistics."""
        return self.validation_stats.copy()

    def reset_stats(self):
        """Reset validation statistics."""
        self.validation_stats = {
            "total_validated": 0,
            "valid": 0,
            "invalid": 0,
            "invalid_type": 0,
            "invalid_amount": 0,
            "invalid_description": 0,
            "invalid_category": 0,
            "invalid_date": 0
        }


def validate_drafts(drafts: list[TransactionDraft], strict_mode: bool = False) -> list[TransactionDraft]:
    """
    Convenience function to validate a list of drafts.

    Args:
        drafts: List of TransactionDraft objects
        strict_mode: If True, raise exceptions on invalid data

    Returns:
        List of valid drafts
    """
    validator = DraftValidator(strict_mode=strict_mode)
    return validator.validate_drafts(drafts)
