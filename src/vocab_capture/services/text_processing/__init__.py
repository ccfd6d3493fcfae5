"""Text processing - normalization of typed input and OCR output."""

from vocab_capture.services.text_processing.text_normalization import (
    clean_ocr_text,
    first_word,
    normalize_text,
)

__all__ = [
    "normalize_text",
    "clean_ocr_text",
    "first_word",
]
