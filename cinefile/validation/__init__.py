"""
Input validation applied by callers before anything is persisted.
"""

from cinefile.validation.review import (
    MAX_REVIEW_LENGTH,
    sanitize_review,
    validate_intimacy,
    validate_rating,
    validate_review,
)
from cinefile.validation.credentials import MIN_PASSWORD_LENGTH, validate_credentials

__all__ = [
    'MAX_REVIEW_LENGTH',
    'MIN_PASSWORD_LENGTH',
    'sanitize_review',
    'validate_credentials',
    'validate_intimacy',
    'validate_rating',
    'validate_review',
]
