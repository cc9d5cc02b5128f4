"""Tests for financial_rules.py - type keywords, categories and IDR helpers."""

import pytest
from extractors.financial_rules import (
    CategoryInferrer,
    ConfidenceTier,
    TransactionType,
    TypeClassifier,
    classify_type,
    format_idr,
    format_idr_input,
    infer_category,
    parse_idr,
)


class TestConfidenceTier:
    """Tiers are totally ordered by reliability."""

    def test_ordering(self):
        assert ConfidenceTier.HIGH > ConfidenceTier.MEDIUM > ConfidenceTier.LOW > ConfidenceTier.NONE

    def test_sorting(self):
        tiers = [ConfidenceTier.LOW, ConfidenceTier.HIGH, ConfidenceTier.NONE, ConfidenceTier.MEDIUM]
        assert sorted(tiers) == [
            ConfidenceTier.NONE,
            ConfidenceTier.LOW,
            ConfidenceTier.MEDIUM,
            ConfidenceTier.HIGH,
        ]


class TestTypeClassifier:
    """Income is checked before expense; high tiers before medium."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Gaji bulan oktober", (TransactionType.INCOME, ConfidenceTier.HIGH)),
            ("Transfer dari ibu", (TransactionType.INCOME, ConfidenceTier.HIGH)),
            ("masuk 50 ribu", (TransactionType.INCOME, ConfidenceTier.MEDIUM)),
            ("Beli kopi", (TransactionType.EXPENSE, ConfidenceTier.HIGH)),
            ("bayar tagihan listrik", (TransactionType.EXPENSE, ConfidenceTier.HIGH)),
            ("habis 50 ribu", (TransactionType.EXPENSE, ConfidenceTier.MEDIUM)),
        ],
    )
    def test_keyword_tiers(self, text, expected):
        assert classify_type(text) == expected

    def test_income_keywords_take_precedence(self):
        assert classify_type("Terima bayaran proyek") == (TransactionType.INCOME, ConfidenceTier.HIGH)

    def test_default_is_low_confidence_expense(self):
        assert classify_type("asdkjasd") == (TransactionType.EXPENSE, ConfidenceTier.LOW)

    def test_default_is_injectable(self):
        classifier = TypeClassifier(default_type=TransactionType.INCOME)
        assert classifier.classify("asdkjasd") == (TransactionType.INCOME, ConfidenceTier.LOW)


class TestCategoryInferrer:
    """First matching category wins, otherwise a type-specific default."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("makan siang", "Makanan"),
            ("isi bensin", "Transportasi"),
            ("belanja bulanan", "Belanja"),
            ("tagihan listrik", "Tagihan"),
            ("nonton bioskop", "Hiburan"),
            ("ngopi sore", "Hiburan"),
            ("beli obat di apotek", "Kesehatan"),
        ],
    )
    def test_expense_categories(self, text, expected):
        assert infer_category(text, TransactionType.EXPENSE) == (expected, ConfidenceTier.HIGH)

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("gaji bulanan", "Gaji"),
            ("project website", "Freelance"),
            ("dividen saham", "Investasi"),
            ("bonus akhir tahun", "Hadiah"),
        ],
    )
    def test_income_categories(self, text, expected):
        assert infer_category(text, TransactionType.INCOME) == (expected, ConfidenceTier.HIGH)

    def test_defaults(self):
        assert infer_category("xyz", TransactionType.INCOME) == ("Gaji", ConfidenceTier.LOW)
        assert infer_category("xyz", TransactionType.EXPENSE) == ("Lainnya", ConfidenceTier.LOW)

    def test_injected_default(self):
        inferrer = CategoryInferrer(expense_default="Other")
        assert inferrer.infer("xyz", TransactionType.EXPENSE) == ("Other", ConfidenceTier.LOW)


class TestIdrHelpers:
    """Rupiah formatting and parsing."""

    def test_format_idr(self):
        assert format_idr(20000) == "Rp 20.000"
        assert format_idr(1520000) == "Rp 1.520.000"
        assert format_idr(0) == "Rp 0"
        assert format_idr(-5000) == "-Rp 5.000"

    def test_format_idr_input(self):
        assert format_idr_input(1000000) == "1,000,000"
        assert format_idr_input(0) == ""

    def test_parse_idr(self):
        assert parse_idr("Rp 20.000") == 20000
        assert parse_idr("1,500,000") == 1500000
        assert parse_idr("abc") == 0
        assert parse_idr("") == 0
