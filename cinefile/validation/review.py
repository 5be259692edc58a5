"""
Review validation and sanitizing.

Reviews are checked for length and profanity, and stripped of all markup,
before they are handed to a RatingsRepository.
"""

from typing import Iterable, Optional

import nh3

from cinefile.config import get_profanity_words
from cinefile.errors import ReviewValidationError
from cinefile.models import IntimacyRating

MAX_REVIEW_LENGTH = 1000
MIN_RATING = 1
MAX_RATING = 10

# Dropped together with their contents.
SCRIPT_TAGS = {"script", "style"}


def validate_review(text: str, profanity: Optional[Iterable[str]] = None) -> None:
    """
    Check review text.

    Args:
        text: Review as typed by the user
        profanity: Words rejected as case-insensitive substrings
            (default: configured list)

    Raises:
        ReviewValidationError: If the review is too long or not family-friendly
    """
    if not text:
        return
    if len(text) > MAX_REVIEW_LENGTH:
        raise ReviewValidationError(f"Review must be less than {MAX_REVIEW_LENGTH} characters")

    words = get_profanity_words() if profanity is None else profanity
    lowered = text.lower()
    if any(word and word.lower() in lowered for word in words):
        raise ReviewValidationError("Please keep the review family-friendly")


def validate_rating(value: float) -> None:
    if value is None or not (MIN_RATING <= value <= MAX_RATING):
        raise ReviewValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")


def validate_intimacy(value: str) -> IntimacyRating:
    try:
        return IntimacyRating(value)
    except ValueError:
        allowed = ", ".join(item.value for item in IntimacyRating)
        raise ReviewValidationError(f"Intimacy rating must be one of: {allowed}") from None


def sanitize_review(text: str) -> str:
    """
    Strip all markup from `text`, keeping its readable content.

    No tags survive; script and style bodies are dropped with their tags.
    The result is serialized HTML text, so `&`, `<` and `>` stay escaped
    as entities and escaped markup in the input is never decoded into tags.
    """
    if not text:
        return ""
    return nh3.clean(text, tags=set(), clean_content_tags=SCRIPT_TAGS)
