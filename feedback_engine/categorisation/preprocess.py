"""
Preprocessing utilities for feedback classification.
Handles comment coercion and text normalization ahead of pattern matching.
"""

import re
import unicodedata
from typing import Any, Optional


# Combining diacritical marks block (U+0300 - U+036F)
_COMBINING_MARKS_RE = re.compile("[\u0300-\u036f]")
# Byte order marks count as whitespace alongside \s
_WHITESPACE_RE = re.compile(r"[\s\ufeff]+")


def coerce_comment(value: Any) -> str:
    """
    Coerce a raw cell value into comment text.

    Upstream CSV parsing can hand us None, NaN or numbers for the comment
    field. Anything that is not a string is treated as an absent comment.

    Args:
        value: Raw comment value

    Returns:
        The value itself if it is a string, otherwise an empty string
    """
    if isinstance(value, str):
        return value
    return ""


def normalize_text(text: Optional[str]) -> str:
    """
    Normalize text for matching.

    Decomposes the text (NFKD), strips diacritics, collapses whitespace runs
    to a single space and trims. Case is preserved.

    Args:
        text: Raw text to normalize

    Returns:
        Normalized text

    Example:
        >>> normalize_text("  Café   connexión\\n lente ")
        'Cafe connexion lente'
    """
    text = coerce_comment(text)
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = _COMBINING_MARKS_RE.sub("", decomposed)
    return _WHITESPACE_RE.sub(" ", stripped).strip(" ")


def is_blank(text: Optional[str]) -> bool:
    """Check whether a raw comment is absent or whitespace only."""
    text = coerce_comment(text)
    return not _WHITESPACE_RE.sub("", text)
