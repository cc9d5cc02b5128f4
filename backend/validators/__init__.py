"""
Validators Module - Transaction draft validation.
"""

from .financial_validator import (
    DraftValidator,
    validate_and_fix_date,
    validate_drafts,
    ValidationError
)

__all__ = [
    'DraftValidator',
    'validate_and_fix_date',
    'validate_drafts',
    'ValidationError',
]
