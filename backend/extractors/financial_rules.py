"""
Financial Rules Module
Defines income/expense keyword rules, category keyword maps and
Rupiah formatting helpers.
"""

from enum import Enum
from functools import total_ordering
from typing import Optional
import logging
import re

from config import config

logger = logging.getLogger(__name__)


class TransactionType(Enum):
    """Transaction type enumeration."""
    INCOME = "income"
    EXPENSE = "expense"


@total_ordering
class ConfidenceTier(Enum):
    """
    Qualitative reliability label attached to every extracted field.
    Ordered: HIGH > MEDIUM > LOW > NONE.
    """
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, ConfidenceTier):
            return NotImplemented
        return self.rank < other.rank


_TIER_RANK = {
    ConfidenceTier.NONE: 0,
    ConfidenceTier.LOW: 1,
    ConfidenceTier.MEDIUM: 2,
    ConfidenceTier.HIGH: 3,
}


# Keyword tiers, evaluated top to bottom; first substring hit wins
INCOME_KEYWORDS_HIGH = (
    "gaji", "salary", "income", "pendapatan",
    "transfer masuk", "transfer dari", "dapat", "terima",
    "bonus", "tunjangan", "uang masuk",
)
INCOME_KEYWORDS_MEDIUM = ("masuk", "diterima", "dapat uang")
EXPENSE_KEYWORDS_HIGH = (
    "beli", "buy", "purchase", "bayar", "pay", "payment",
    "pembayaran", "belanja", "shopping", "expense", "pengeluaran",
    "tagihan", "bill", "bayar tagihan",
)
EXPENSE_KEYWORDS_MEDIUM = ("keluar", "spend", "habis", "uang keluar", "pengeluaran")

TYPE_KEYWORD_TIERS = (
    (TransactionType.INCOME, ConfidenceTier.HIGH, INCOME_KEYWORDS_HIGH),
    (TransactionType.INCOME, ConfidenceTier.MEDIUM, INCOME_KEYWORDS_MEDIUM),
    (TransactionType.EXPENSE, ConfidenceTier.HIGH, EXPENSE_KEYWORDS_HIGH),
    (TransactionType.EXPENSE, ConfidenceTier.MEDIUM, EXPENSE_KEYWORDS_MEDIUM),
)

# Category maps, checked in insertion order
INCOME_CATEGORIES = {
    "Gaji": ["gaji", "salary", "pendapatan tetap"],
    "Freelance": ["freelance", "project", "proyek", "kontrak"],
    "Investasi": ["investasi", "dividen", "return", "profit"],
    "Hadiah": ["hadiah", "gift", "bonus", "tunjangan"],
}

EXPENSE_CATEGORIES = {
    "Makanan": [
        "makan", "makanan", "food", "restaurant", "warung", "bakso", "nasi",
        "ayam", "sate", "mie", "bakmi", "soto", "gudeg", "rendang",
        "nasi goreng", "mie goreng",
    ],
    "Transportasi": [
        "transport", "transportasi", "bensin", "gas", "fuel", "parkir",
        "parking", "tol", "toll", "grab", "gojek", "taxi", "ojek", "angkot",
    ],
    "Belanja": [
        "belanja", "shopping", "toko", "store", "mall", "supermarket",
        "minimarket", "alfamart", "indomaret",
    ],
    "Tagihan": [
        "tagihan", "bill", "listrik", "air", "internet", "wifi", "telepon",
        "phone", "pulsa", "paket data",
    ],
    "Hiburan": [
        "hiburan", "entertainment", "ngopi", "kopi", "coffee", "nonton",
        "cinema", "bioskop", "game", "games", "netflix", "spotify",
    ],
    "Kesehatan": [
        "kesehatan", "health", "obat", "medicine", "apotek", "pharmacy",
        "dokter", "doctor", "rumah sakit", "hospital", "klinik", "clinic",
    ],
}


class TypeClassifier:
    """
    Decides income vs. expense from ranked keyword tiers.
    Falls back to the injected default type at LOW confidence.
    """

    def __init__(
        self,
        default_type: Optional[TransactionType] = None,
        keyword_tiers=TYPE_KEYWORD_TIERS
    ):
        if default_type is None:
            default_type = TransactionType(config.DEFAULT_TRANSACTION_TYPE)
        self.default_type = default_type
        self.keyword_tiers = keyword_tiers

    def classify(self, text: str) -> tuple[TransactionType, ConfidenceTier]:
        lower_text = text.lower()

        for txn_type, tier, keywords in self.keyword_tiers:
            for keyword in keywords:
                if keyword in lower_text:
                    logger.debug(f"Type keyword '{keyword}' -> {txn_type.value} ({tier.value})")
                    return txn_type, tier

        logger.debug(f"No type keyword found, defaulting to {self.default_type.value}")
        return self.default_type, ConfidenceTier.LOW


class CategoryInferrer:
    """Maps text and transaction type to a category label."""

    def __init__(
        self,
        income_default: Optional[str] = None,
        expense_default: Optional[str] = None,
        income_categories: Optional[dict[str, list[str]]] = None,
        expense_categories: Optional[dict[str, list[str]]] = None
    ):
        self.income_default = income_default or config.DEFAULT_INCOME_CATEGORY
        self.expense_default = expense_default or config.DEFAULT_EXPENSE_CATEGORY
        self.income_categories = income_categories or INCOME_CATEGORIES
        self.expense_categories = expense_categories or EXPENSE_CATEGORIES

    def infer(self, text: str, transaction_type: TransactionType) -> tuple[str, ConfidenceTier]:
        lower_text = text.lower()

        if transaction_type == TransactionType.INCOME:
            categories, default = self.income_categories, self.income_default
        else:
            categories, default = self.expense_categories, self.expense_default

        for category, keywords in categories.items():
            if any(keyword in lower_text for keyword in keywords):
                logger.debug(f"Category matched: {category}")
                return category, ConfidenceTier.HIGH

        return default, ConfidenceTier.LOW


def classify_type(text: str) -> tuple[TransactionType, ConfidenceTier]:
    """
    Convenience function to classify a text as income or expense.

    Args:
        text: Free-form transaction text

    Returns:
        Tuple of (transaction type, confidence tier)
    """
    return TypeClassifier().classify(text)


def infer_category(text: str, transaction_type: TransactionType) -> tuple[str, ConfidenceTier]:
    """Convenience function to infer a category label for a text."""
    return CategoryInferrer().infer(text, transaction_type)


def format_idr(amount: float) -> str:
    """
    Format amount as Indonesian Rupiah.

    Rounded to whole rupiah, dots as thousand separators:
    20000 -> "Rp 20.000"
    """
    rounded = int(round(amount))
    sign = "-" if rounded < 0 else ""
    return f"{sign}Rp {abs(rounded):,}".replace(",", ".")


def format_idr_input(amount: float) -> str:
    """
    Format amount for an input field (comma thousand separators).
    1000000 -> "1,000,000"; zero gives an empty string.
    """
    if not amount:
        return ""
    return f"{int(round(amount)):,}"


def parse_idr(value: str) -> int:
    """
    Parse an IDR string to an integer amount.
    Removes "Rp" prefix, spaces and both comma and dot separators.
    """
    if not value:
        return 0

    cleaned = re.sub(r'rp\s?', '', value, flags=re.IGNORECASE)
    cleaned = cleaned.replace(',', '').replace('.', '').strip()

    try:
        return int(cleaned)
    except ValueError:
        logger.debug(f"Cannot parse IDR value '{value}'")
        return 0
