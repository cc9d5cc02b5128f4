"""
Amount Extractor Module
Finds the most likely Rupiah amount in free-form text.

Candidate strategies are tried in priority order and the first one that
returns a value wins:

1. compound multiplier sum   "1 juta 520 ribu"   HIGH
2. single multiplier         "20 ribu", "500rb"  HIGH
3. grouped currency digits   "Rp 20.000"         HIGH
4. bare large integer        "25000"             MEDIUM
5. small number + verb       "beli 20"           LOW
"""

import math
import re
import logging
from typing import Callable, Optional

from config import config
from .financial_rules import ConfidenceTier

logger = logging.getLogger(__name__)

AmountCandidate = tuple[int, ConfidenceTier]

MULTIPLIERS = {
    "ribu": 1_000, "rb": 1_000, "k": 1_000,
    "juta": 1_000_000, "jt": 1_000_000, "m": 1_000_000,
    "milyar": 1_000_000_000, "miliar": 1_000_000_000, "b": 1_000_000_000,
}

# Number with optional decimal part, optional space, multiplier word.
# The multiplier must end at a space, punctuation, end of text or the next
# number ("1juta520rb"), so "5 kg" or "2 mangga" never match.
MULTIPLIER_PATTERN = re.compile(
    r'(\d+(?:[.,]\d+)?)\s*(ribu|rb|k|juta|jt|milyar|miliar|m|b)(?=\s|$|\W|\d)',
    re.IGNORECASE
)

# Digits grouped by '.' or ',' (at least one 3-digit group), optional
# 2-digit decimal suffix: "rp 20.000", "1.500.000", "5,000,000.00"
CURRENCY_PATTERN = re.compile(
    r'(?:rp\s*)?(?<![\d.,])(\d{1,3}(?:[.,]\d{3})+(?:[.,]\d{2})?)(?![\d]|[.,]\d)',
    re.IGNORECASE
)

LARGE_NUMBER_PATTERN = re.compile(r'(?<![\d.,])(\d{4,})(?![\d]|[.,]\d)')
# Not part of a grouped or decimal number
SMALL_NUMBER_PATTERN = re.compile(r'\b(?<![.,])(\d{1,3})\b(?![.,]\d)')

# Explicit date literals are masked so their digits aren't read as amounts
DATE_LITERAL_PATTERN = re.compile(
    r'(?<!\d)(?:\d{4}[/-]\d{1,2}[/-]\d{1,2}|\d{1,2}[/-]\d{1,2}[/-](?:\d{4}|\d{2}))(?!\d)'
)

TRANSACTION_CONTEXT_PATTERN = re.compile(
    r'(beli|bayar|gaji|transfer|tagihan|pembayaran|pengeluaran|pendapatan)',
    re.IGNORECASE
)

CLOSE_MATCH_RATIO = 0.1


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.floor(value + 0.5))


def exceeds_digits(number_str: str, limit: int) -> bool:
    """True when the integer part of number_str has more digits than limit."""
    integer_part = re.split(r'[.,]', number_str, maxsplit=1)[0].lstrip('0')
    return len(integer_part) > len(str(limit))


def parse_multiplier_number(number_str: str) -> Optional[float]:
    """Parse the number part of a multiplier match; ',' counts as decimal point."""
    try:
        return float(number_str.replace(',', '.'))
    except ValueError:
        return None


def parse_grouped_amount(amount_str: str) -> Optional[float]:
    """
    Resolve a grouped currency string to a number.

    A final group of exactly two digits is cents; every other separator
    is a thousands separator:
        "20.000"       -> 20000
        "1.234.567,89" -> 1234567.89
        "5,000,000.00" -> 5000000.00
    """
    match = re.match(r'^(.*)[.,](\d{2})$', amount_str)
    if match:
        integer_part, cents = match.groups()
        normalized = re.sub(r'[.,]', '', integer_part) + '.' + cents
    else:
        normalized = re.sub(r'[.,]', '', amount_str)

    try:
        return float(normalized)
    except ValueError:
        return None


class AmountScan:
    """Pre-computed matches shared by all strategies for a single text."""

    def __init__(self, text: str, max_amount: int):
        self.text = DATE_LITERAL_PATTERN.sub(' ', text.lower())
        self.max_amount = max_amount
        self.multiplier_matches = list(MULTIPLIER_PATTERN.finditer(self.text))
        self.currency_values = [
            value for value in (
                parse_grouped_amount(m.group(1)) for m in CURRENCY_PATTERN.finditer(self.text)
            )
            if value is not None
        ]

    def multiplier_values(self) -> list[int]:
        """Resolved multiplier amounts in left-to-right order, out-of-range parts dropped."""
        values = []
        for match in self.multiplier_matches:
            if exceeds_digits(match.group(1), self.max_amount):
                logger.debug(f"Rejected out-of-range partial amount: {match.group(0)[:20]}...")
                continue

            number = parse_multiplier_number(match.group(1))
            if number is None or number <= 0:
                continue

            partial = round_half_up(number * MULTIPLIERS[match.group(2).lower()])
            if 0 < partial <= self.max_amount:
                values.append(partial)
            else:
                logger.debug(f"Rejected out-of-range partial amount: {match.group(0)}")
        return values

    def largest_currency(self) -> float:
        return max(self.currency_values, default=0)


def compound_multiplier(scan: AmountScan) -> Optional[AmountCandidate]:
    """Sum of two or more multiplier amounts: "1 juta 520 ribu" -> 1520000."""
    if len(scan.multiplier_matches) < 2:
        return None

    values = scan.multiplier_values()
    total = sum(values)
    if values and 0 < total <= scan.max_amount:
        return total, ConfidenceTier.HIGH
    return None


def single_multiplier(scan: AmountScan) -> Optional[AmountCandidate]:
    """
    Exactly one multiplier amount: "20 ribu" -> 20000.

    Defers to the grouped currency strategy when a currency value within
    10% of the multiplier value is also present.
    """
    if len(scan.multiplier_matches) != 1:
        return None

    values = scan.multiplier_values()
    if not values:
        return None
    amount = values[0]

    largest_currency = scan.largest_currency()
    if largest_currency > 0 and abs(largest_currency - amount) / amount < CLOSE_MATCH_RATIO:
        logger.debug(f"Currency value {largest_currency} is close to {amount}, preferring currency format")
        return None

    return amount, ConfidenceTier.HIGH


def grouped_currency(scan: AmountScan) -> Optional[AmountCandidate]:
    """Largest grouped currency value: "Rp 20.000" -> 20000."""
    largest = scan.largest_currency()
    if config.MIN_CURRENCY_AMOUNT <= largest <= scan.max_amount:
        return round_half_up(largest), ConfidenceTier.HIGH
    return None


def bare_large_integer(scan: AmountScan) -> Optional[AmountCandidate]:
    """A standalone run of 4+ digits, already in rupiah."""
    match = LARGE_NUMBER_PATTERN.search(scan.text)
    if not match:
        return None
    if exceeds_digits(match.group(1), scan.max_amount):
        return None

    amount = int(match.group(1))
    if config.MIN_CURRENCY_AMOUNT <= amount <= scan.max_amount:
        return amount, ConfidenceTier.MEDIUM
    return None


def small_number_with_context(scan: AmountScan) -> Optional[AmountCandidate]:
    """
    1-3 digit number read as thousands when a transaction verb is present.

    Fragile: "beli 2 buku" becomes 2000. Kept at LOW confidence so callers
    ask the user to verify.
    """
    if scan.multiplier_matches:
        return None
    if not TRANSACTION_CONTEXT_PATTERN.search(scan.text):
        return None

    match = SMALL_NUMBER_PATTERN.search(scan.text)
    if not match:
        return None

    number = int(match.group(1))
    if 1 <= number <= 999:
        return number * config.SMALL_NUMBER_MULTIPLIER, ConfidenceTier.LOW
    return None


DEFAULT_STRATEGIES: tuple[Callable[[AmountScan], Optional[AmountCandidate]], ...] = (
    compound_multiplier,
    single_multiplier,
    grouped_currency,
    bare_large_integer,
    small_number_with_context,
)


class AmountExtractor:
    """Runs amount strategies in priority order; first candidate wins."""

    def __init__(self, strategies=None, max_amount: Optional[int] = None):
        self.strategies = tuple(strategies) if strategies is not None else DEFAULT_STRATEGIES
        self.max_amount = max_amount if max_amount is not None else config.MAX_AMOUNT

    def extract(self, text: str) -> AmountCandidate:
        """
        Extract the most likely amount from text.

        Args:
            text: Free-form transaction text

        Returns:
            Tuple of (amount, confidence tier); (0, NONE) when nothing is found
        """
        scan = AmountScan(text, self.max_amount)

        for strategy in self.strategies:
            candidate = strategy(scan)
            if candidate is None:
                continue

            amount, tier = candidate
            if 0 < amount <= self.max_amount:
                logger.debug(f"Amount {amount} ({tier.value}) from strategy {strategy.__name__}")
                return amount, tier

        return 0, ConfidenceTier.NONE


def extract_amount(text: str) -> AmountCandidate:
    """Convenience function to extract an amount from text."""
    return AmountExtractor().extract(text)
