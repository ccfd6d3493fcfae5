"""Translation Service - abstract word translation provider."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from vocab_capture.core import TranslationData


@dataclass
class TranslationResult:
    """Result of a translation request."""

    data: Optional[TranslationData]
    model: str
    error: Optional[str] = None

    @property
    def is_error(self) -> bool:
        """True if translation failed."""
        return self.error is not None or self.data is None


class TranslationService(ABC):
    """
    Abstract service for translating a single word with linguistic details.

    Implementations (e.g., GeminiTranslationService) handle API calls and
    never raise for provider failures; they return a TranslationResult with
    ``error`` set instead.
    """

    @abstractmethod
    def translate_word(
        self,
        word: str,
        source_language: str,
        target_language: str,
        api_key: str,
    ) -> TranslationResult:
        """
        Translate a word.

        Args:
            word: Text to translate.
            source_language: Language code of ``word``.
            target_language: Language code to translate into.
            api_key: Provider API key for authentication.

        Returns:
            TranslationResult with structured data or an error message.
        """
        pass
