"""Translation services - abstract interface and Gemini implementation."""

from vocab_capture.services.translation.translation_service import TranslationService, TranslationResult
from vocab_capture.services.translation.gemini_translation_service import (
    GeminiTranslationService,
    parse_translation_response,
)

__all__ = [
    "TranslationService",
    "TranslationResult",
    "GeminiTranslationService",
    "parse_translation_response",
]
