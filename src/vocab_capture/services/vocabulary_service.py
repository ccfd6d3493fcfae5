"""Vocabulary Service - orchestrates capturing words, translations and tags."""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from vocab_capture.core import (
    TagCount,
    Translation,
    TranslationData,
    Word,
    WordWithTranslations,
)
from vocab_capture.io import VocabDatabase
from vocab_capture.services.tagging import TimelineTree, build_timeline_tree, generate_auto_tags
from vocab_capture.services.text_processing import normalize_text


class VocabularyService:
    """Application service for the vocabulary store.

    Depends on VocabDatabase for persistence. The translation provider is not
    called here: callers fetch a translation (possibly on another thread) and
    hand the result to ``complete_capture``.
    """

    def __init__(
        self,
        db: VocabDatabase,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._db = db
        self.logger = logger or logging.getLogger(__name__)
        self._clock = clock

    def add_word(self, text: str, source_language: str) -> Optional[Word]:
        """Create the word row (or touch it if already captured)."""
        normalized = normalize_text(text)
        if not normalized:
            self.logger.warning("Rejected empty word", extra={"data": {"sourceLanguage": source_language}})
            return None
        word = self._db.add_word(normalized, source_language)
        if word is not None:
            self.logger.info(
                "Word stored",
                extra={"data": {"wordId": word.id, "text": normalized, "sourceLanguage": source_language}},
            )
        return word

    def complete_capture(
        self,
        word: Word,
        target_language: str,
        translation: Optional[TranslationData],
    ) -> Optional[WordWithTranslations]:
        """
        Persist the translation (if any) and the auto tags for a stored word.

        A missing translation is not an error: the word is kept untranslated.

        Args:
            word: Word returned by ``add_word``.
            target_language: Language the translation is in.
            translation: Provider result, or None if the provider failed.

        Returns:
            The word with its translations and tags.
        """
        if translation is not None:
            self.add_translation(word.id, target_language, translation)
        else:
            self.logger.warning(
                "No translation available; keeping word untranslated",
                extra={"data": {"wordId": word.id, "targetLanguage": target_language}},
            )

        self.apply_auto_tags(word)
        return self._db.get_word_with_translations(word.id)

    def capture_word(
        self,
        text: str,
        source_language: str,
        target_language: str,
        translation: Optional[TranslationData] = None,
    ) -> Optional[WordWithTranslations]:
        """Synchronous add-word flow when the translation is already at hand."""
        word = self.add_word(text, source_language)
        if word is None:
            return None
        return self.complete_capture(word, target_language, translation)

    def add_translation(
        self, word_id: int, target_language: str, translation: TranslationData
    ) -> Optional[Translation]:
        return self._db.add_translation(word_id, target_language, translation)

    def apply_auto_tags(self, word: Word) -> bool:
        tags = generate_auto_tags(word.source_language, self._clock())
        return self._db.add_tags(word.id, tags)

    def delete_word(self, word_id: int) -> bool:
        deleted = self._db.delete_word(word_id)
        self.logger.info("Word delete requested", extra={"data": {"wordId": word_id, "deleted": deleted}})
        return deleted

    def get_word(self, word_id: int) -> Optional[WordWithTranslations]:
        return self._db.get_word_with_translations(word_id)

    def list_words(self) -> List[WordWithTranslations]:
        return self._db.get_all_words()

    def list_words_by_tag(self, tag_name: str) -> List[WordWithTranslations]:
        return self._db.get_words_by_tag(tag_name)

    def list_tags(self) -> List[TagCount]:
        return self._db.get_all_tags()

    def timeline(self) -> TimelineTree:
        """Rebuild the timeline tree from the current tag set."""
        return build_timeline_tree(self._db.get_all_tags())

    def close(self) -> None:
        self._db.close()
