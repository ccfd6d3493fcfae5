"""Text normalization utilities for captured and recognized text."""

import re
from typing import Optional

MIN_OCR_TOKEN_LENGTH = 3


def normalize_text(text: str) -> str:
    """
    Normalize user-entered text before it is stored as a word.

    Rules:
    - Trim leading and trailing whitespace
    - Collapse runs of whitespace (spaces, tabs, newlines) to single spaces
    - Case and punctuation are preserved

    Args:
        text: Original text to normalize.

    Returns:
        Normalized text string.
    """
    text = text.strip()
    text = re.sub(r'\s+', ' ', text)
    return text


def clean_ocr_text(raw_text: str) -> Optional[str]:
    """
    Clean OCR output into candidate words.

    Punctuation is removed, and tokens shorter than three characters (stray
    glyphs, OCR noise) are dropped.

    Returns:
        Space-separated tokens, or None when nothing usable is left.
    """
    text = re.sub(r'[^\w\s]', '', raw_text)
    tokens = [token for token in text.split() if len(token) >= MIN_OCR_TOKEN_LENGTH]
    return " ".join(tokens) or None


def first_word(text: str) -> Optional[str]:
    """Return the first whitespace-separated token, or None for blank text."""
    tokens = text.split()
    return tokens[0] if tokens else None
