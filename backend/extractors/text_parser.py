"""
Text Parser Module
Turns a free-form (Indonesian, colloquial) sentence such as
"Beli bakso hari ini 20 ribu" into a transaction draft with a confidence
tier per field, plus blocking errors and non-blocking warnings.
"""

import re
import logging
from datetime import date
from typing import Callable, Optional

from config import config
from .financial_rules import (
    CategoryInferrer,
    ConfidenceTier,
    TransactionType,
    TypeClassifier,
    format_idr,
)
from .amount_extractor import AmountExtractor, MULTIPLIER_PATTERN
from .date_resolver import DateResolver, DateSource, DAYS_AGO_PATTERN

logger = logging.getLogger(__name__)


# User-facing messages
EMPTY_INPUT_ERROR = "Teks tidak boleh kosong"
AMOUNT_NOT_FOUND_ERROR = (
    'Tidak dapat mendeteksi jumlah transaksi. Pastikan teks mengandung jumlah '
    'seperti "20 ribu", "Rp 20.000", atau "5 juta".'
)
UNEXPECTED_ERROR = "Terjadi kesalahan saat memproses teks. Silakan isi transaksi secara manual."
LOW_AMOUNT_WARNING = (
    "Jumlah yang terdeteksi memiliki keyakinan rendah. Silakan periksa kembali sebelum menyimpan."
)
TYPE_NOT_DETECTED_WARNING = (
    'Tipe transaksi tidak terdeteksi dengan jelas. Gunakan kata seperti "beli", "bayar" '
    'untuk expense atau "gaji", "masuk" untuk income.'
)
TYPE_DEFAULTED_WARNING = "Tipe transaksi tidak terdeteksi. Menggunakan default: {type}."
CATEGORY_NOT_DETECTED_WARNING = "Kategori tidak terdeteksi. Akan menggunakan kategori default."
CATEGORY_LOW_WARNING = (
    "Kategori yang terdeteksi memiliki keyakinan rendah. Disarankan untuk memverifikasi sebelum menyimpan."
)
DATE_NOT_DETECTED_WARNING = "Tanggal tidak terdeteksi. Menggunakan tanggal hari ini sebagai default."
FUTURE_DATE_WARNING = (
    "Tanggal yang terdeteksi adalah tanggal masa depan. Menggunakan tanggal hari ini sebagai gantinya."
)
DESCRIPTION_WARNING = (
    "Deskripsi tidak dapat diekstrak dengan baik dari teks. Silakan periksa sebelum menyimpan."
)

# Tokens removed from the description, in order
DATE_LITERAL_STRIP = re.compile(r'\d{4}[/-]\d{1,2}[/-]\d{1,2}|\d{1,2}[/-]\d{1,2}[/-]\d{2,4}')
NUMBER_STRIP = re.compile(r'(?:rp\s*)?\d+(?:[.,]\d+)*', re.IGNORECASE)
DATE_WORD_STRIP = re.compile(r'(hari ini|kemarin|yesterday|today|sekarang)', re.IGNORECASE)
TYPE_WORD_STRIP = re.compile(r'\b(beli|buy|bayar|pay|gaji|salary|income|masuk|keluar)\b', re.IGNORECASE)


class TransactionDraft:
    """Partially or fully recovered transaction, prior to user correction."""

    def __init__(
        self,
        transaction_type: Optional[TransactionType] = None,
        amount: Optional[int] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        date: Optional[date] = None
    ):
        self.type = transaction_type
        self.amount = amount
        self.description = description
        self.category = category
        self.date = date

    def to_dict(self) -> dict:
        """Convert draft to dictionary, omitting unrecovered fields."""
        data = {}
        if self.type is not None:
            data["type"] = self.type.value
        if self.amount is not None:
            data["amount"] = self.amount
            data["amount_display"] = format_idr(self.amount)
        if self.description is not None:
            data["description"] = self.description
        if self.category is not None:
            data["category"] = self.category
        if self.date is not None:
            data["date"] = self.date.isoformat()
        return data

    def __repr__(self) -> str:
        txn_type = self.type.value if self.type else None
        return f"TransactionDraft(type={txn_type}, amount={self.amount}, category={self.category}, date={self.date})"


class ParseResult:
    """Outcome of a single parse: draft, per-field confidence, errors and warnings."""

    FIELDS = ("amount", "type", "category", "date")

    def __init__(
        self,
        success: bool,
        data: TransactionDraft,
        confidence: dict[str, ConfidenceTier],
        errors: Optional[list[str]] = None,
        warnings: Optional[list[str]] = None
    ):
        self.success = success
        self.data = data
        self.confidence = confidence
        self.errors = errors or []
        self.warnings = warnings or []

    @classmethod
    def failure(cls, error: str) -> "ParseResult":
        """Failed result with an empty draft and every tier NONE."""
        return cls(
            success=False,
            data=TransactionDraft(),
            confidence={field: ConfidenceTier.NONE for field in cls.FIELDS},
            errors=[error],
        )

    def needs_review(self) -> bool:
        """True when any field is below MEDIUM confidence or warnings exist."""
        return bool(self.warnings) or any(
            tier < ConfidenceTier.MEDIUM for tier in self.confidence.values()
        )

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "data": self.data.to_dict(),
            "confidence": {field: tier.value for field, tier in self.confidence.items()},
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }

    def __repr__(self) -> str:
        return f"ParseResult(success={self.success}, data={self.data!r})"


def extract_description(text: str, placeholder: Optional[str] = None, min_length: Optional[int] = None) -> str:
    """
    Strip recognised amount, date and type tokens from text.

    Falls back to the trimmed original text when too little is left, and to
    the placeholder when the original is empty too.

    Args:
        text: Original (unlowered) input text
        placeholder: Label used when nothing usable remains
        min_length: Minimum residual length before falling back

    Returns:
        Description string, never empty
    """
    placeholder = placeholder or config.DESCRIPTION_PLACEHOLDER
    if min_length is None:
        min_length = config.MIN_DESCRIPTION_LENGTH
    if not text:
        return placeholder

    description = DATE_LITERAL_STRIP.sub('', text)
    description = DAYS_AGO_PATTERN.sub('', description)
    description = MULTIPLIER_PATTERN.sub('', description)
    description = NUMBER_STRIP.sub('', description)
    description = DATE_WORD_STRIP.sub('', description)
    description = TYPE_WORD_STRIP.sub('', description)
    description = re.sub(r'\s+', ' ', description).strip()

    if len(description) < min_length:
        description = text.strip()

    return description or placeholder


class TextParser:
    """
    Parses natural-language transaction text.
    Each step runs independently on the same lower-cased text.
    """

    def __init__(
        self,
        today_provider: Callable[[], date] = date.today,
        amount_extractor: Optional[AmountExtractor] = None,
        type_classifier: Optional[TypeClassifier] = None,
        category_inferrer: Optional[CategoryInferrer] = None,
        date_resolver: Optional[DateResolver] = None
    ):
        self.amount_extractor = amount_extractor or AmountExtractor()
        self.type_classifier = type_classifier or TypeClassifier()
        self.category_inferrer = category_inferrer or CategoryInferrer()
        self.date_resolver = date_resolver or DateResolver(today_provider=today_provider)
        self.stats = {
            "texts_parsed": 0,
            "successful": 0,
            "failed": 0,
            "with_warnings": 0
        }

    def parse(self, text: str) -> ParseResult:
        """
        Parse a single free-form transaction text.

        Never raises for any input; problems are reported through the
        result's errors and warnings.

        Args:
            text: Free-form transaction text

        Returns:
            ParseResult
        """
        self.stats["texts_parsed"] += 1

        if not text or not isinstance(text, str) or not text.strip():
            logger.warning("Empty text provided for parsing")
            self.stats["failed"] += 1
            return ParseResult.failure(EMPTY_INPUT_ERROR)

        try:
            result = self._parse(text)
        except Exception as e:
            logger.error(f"Unexpected error while parsing text: {e}", exc_info=True)
            self.stats["failed"] += 1
            return ParseResult.failure(UNEXPECTED_ERROR)

        self.stats["successful" if result.success else "failed"] += 1
        if result.warnings:
            self.stats["with_warnings"] += 1

        logger.info(
            f"Parsed text: success={result.success}, "
            f"{len(result.errors)} errors, {len(result.warnings)} warnings"
        )
        return result

    def _parse(self, text: str) -> ParseResult:
        errors = []
        warnings = []
        normalized = text.lower().strip()

        amount, amount_tier = self.amount_extractor.extract(normalized)
        if amount_tier == ConfidenceTier.NONE:
            errors.append(AMOUNT_NOT_FOUND_ERROR)
        elif amount_tier == ConfidenceTier.LOW:
            warnings.append(LOW_AMOUNT_WARNING)

        txn_type, type_tier = self.type_classifier.classify(normalized)
        if type_tier == ConfidenceTier.NONE:
            warnings.append(TYPE_NOT_DETECTED_WARNING)
        elif type_tier == ConfidenceTier.LOW:
            warnings.append(TYPE_DEFAULTED_WARNING.format(type=txn_type.value))

        category, category_tier = self.category_inferrer.infer(normalized, txn_type)
        if category_tier == ConfidenceTier.NONE:
            warnings.append(CATEGORY_NOT_DETECTED_WARNING)
        elif category_tier == ConfidenceTier.LOW:
            warnings.append(CATEGORY_LOW_WARNING)

        resolved_date, date_tier, date_source = self.date_resolver.resolve_with_source(normalized)
        if date_tier == ConfidenceTier.NONE or date_source == DateSource.DEFAULT:
            warnings.append(DATE_NOT_DETECTED_WARNING)
        elif date_source == DateSource.FUTURE_CLAMPED:
            warnings.append(FUTURE_DATE_WARNING)

        description = extract_description(text)
        if len(description.strip()) < config.MIN_DESCRIPTION_LENGTH:
            warnings.append(DESCRIPTION_WARNING)

        draft = TransactionDraft(
            transaction_type=txn_type,
            amount=amount,
            description=description,
            category=category,
            date=resolved_date,
        )

        success = (
            amount_tier != ConfidenceTier.NONE
            and amount > 0
            and type_tier != ConfidenceTier.NONE
        )

        logger.debug(f"Draft: {draft!r}")

        return ParseResult(
            success=success,
            data=draft,
            confidence={
                "amount": amount_tier,
                "type": type_tier,
                "category": category_tier,
                "date": date_tier,
            },
            errors=errors,
            warnings=warnings,
        )

    def get_stats(self) -> dict:
        """Get parsing statistics."""
        return self.stats.copy()


def parse_text(text: str, today: Optional[date] = None) -> ParseResult:
    """
    Convenience function to parse one transaction text.

    Args:
        text: Free-form transaction text
        today: Fixed "today" for date resolution; system date when omitted

    Returns:
        ParseResult
    """
    if today is None:
        parser = TextParser()
    else:
        parser = TextParser(today_provider=lambda: today)
    return parser.parse(text)
