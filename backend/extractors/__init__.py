"""
Extractors Module - Natural-language transaction parsing.
"""

from .text_parser import (
    ParseResult,
    TextParser,
    TransactionDraft,
    extract_description,
    parse_text
)

from .amount_extractor import (
    AmountExtractor,
    extract_amount
)

from .date_resolver import (
    DateResolver,
    DateSource,
    resolve_date
)

from .financial_rules import (
    CategoryInferrer,
    ConfidenceTier,
    TransactionType,
    TypeClassifier,
    classify_type,
    format_idr,
    format_idr_input,
    infer_category,
    parse_idr
)

__all__ = [
    'ParseResult',
    'TextParser',
    'TransactionDraft',
    'extract_description',
    'parse_text',
    'AmountExtractor',
    'extract_amount',
    'DateResolver',
    'DateSource',
    'resolve_date',
    'CategoryInferrer',
    'ConfidenceTier',
    'TransactionType',
    'TypeClassifier',
    'classify_type',
    'format_idr',
    'format_idr_input',
    'infer_category',
    'parse_idr',
]
