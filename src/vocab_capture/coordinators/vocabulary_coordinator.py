"""Vocabulary Coordinator - request/response boundary for the UI and command line."""

import logging
from typing import Dict, List, Optional

from PySide6.QtCore import QObject, QThreadPool, Signal, Slot

from vocab_capture.core import QueryResult, TableInfo, TagCount, Word, WordWithTranslations
from vocab_capture.io import QueryGateway
from vocab_capture.services import (
    LogEntry,
    LogService,
    SettingsManager,
    TimelineTree,
    TranslationService,
    TranslationWorker,
    VocabularyService,
)


class _AddWordRequest(QObject):
    """Holds the context of one add-word request while its worker runs."""

    def __init__(
        self,
        request_id: int,
        word: Word,
        target_language: str,
        parent: "VocabularyCoordinator",
    ):
        super().__init__()
        self.request_id = request_id
        self.word = word
        self.target_language = target_language
        self.parent_ref = parent

    @Slot(object)
    def on_translation_result(self, result):
        coordinator = self.parent_ref
        if coordinator:
            try:
                coordinator._handle_translation_result(self, result)
            except RuntimeError:
                # Coordinator might be destroyed, ignore
                pass

    @Slot(str)
    def on_translation_error(self, error: str):
        coordinator = self.parent_ref
        if coordinator:
            try:
                coordinator._handle_translation_error(self, error)
            except RuntimeError:
                pass


class VocabularyCoordinator(QObject):
    """
    Single entry point for vocabulary commands.

    Responsibilities:
    - Add words: store the word, translate it on the thread pool, then store
      the translation and auto tags back on this object's thread.
    - Delete and list words, list tags, build the timeline tree.
    - Developer tools: SQL console, schema, log buffer.
    """

    word_added = Signal(object)  # WordWithTranslations
    word_add_failed = Signal(str)
    word_deleted = Signal(int)

    def __init__(
        self,
        vocabulary_service: VocabularyService,
        query_gateway: QueryGateway,
        translation_service: TranslationService,
        settings_manager: SettingsManager,
        log_service: LogService,
        thread_pool: Optional[QThreadPool] = None,
    ):
        super().__init__()
        if vocabulary_service is None:
            raise ValueError("vocabulary_service is required")
        if query_gateway is None:
            raise ValueError("query_gateway is required")
        if translation_service is None:
            raise ValueError("translation_service is required")
        if settings_manager is None:
            raise ValueError("settings_manager is required")
        if log_service is None:
            raise ValueError("log_service is required")

        self.vocabulary_service = vocabulary_service
        self.query_gateway = query_gateway
        self.translation_service = translation_service
        self.settings_manager = settings_manager
        self.log_service = log_service
        self.logger: logging.Logger = log_service.get_logger("main")

        self.thread_pool = thread_pool or QThreadPool.globalInstance()

        # Keep helpers referenced so they are not collected while workers run
        self._pending: Dict[int, _AddWordRequest] = {}
        self._request_counter = 0

    @property
    def pending_requests(self) -> int:
        return len(self._pending)

    def request_add_word(
        self,
        text: str,
        source_language: str,
        target_language: Optional[str] = None,
    ) -> Optional[Word]:
        """
        Start capturing a word.

        The word row is written immediately and returned; ``word_added`` fires
        once the translation attempt has finished and tags are stored.

        Returns:
            The stored Word, or None if it could not be stored.
        """
        target = target_language or self.settings_manager.get_default_target_language()
        word = self.vocabulary_service.add_word(text, source_language)
        if word is None:
            self.word_add_failed.emit(f"Could not store word: {text!r}")
            return None

        api_key = self.settings_manager.get_gemini_api_key()
        if not api_key:
            self.logger.warning(
                "API key not configured. Add GEMINI_API_KEY to .env file.",
                extra={"data": {"wordId": word.id}},
            )
            self._finish(word, target, None)
            return word

        self._request_counter += 1
        request = _AddWordRequest(self._request_counter, word, target, self)
        self._pending[request.request_id] = request

        worker = TranslationWorker(
            translation_service=self.translation_service,
            word=word.original_text,
            source_language=word.source_language,
            target_language=target,
            api_key=api_key,
        )
        worker.signals.translation_result.connect(request.on_translation_result)
        worker.signals.error.connect(request.on_translation_error)

        self.thread_pool.start(worker)
        return word

    def _handle_translation_result(self, request: _AddWordRequest, result) -> None:
        """Runs on the coordinator's thread."""
        self._pending.pop(request.request_id, None)
        if result.is_error:
            self.logger.error(
                "Translation failed",
                extra={"data": {"wordId": request.word.id, "error": result.error}},
            )
            self._finish(request.word, request.target_language, None)
            return
        self._finish(request.word, request.target_language, result.data)

    def _handle_translation_error(self, request: _AddWordRequest, error: str) -> None:
        self._pending.pop(request.request_id, None)
        self.logger.error("Translation worker error", extra={"data": {"wordId": request.word.id, "error": error}})
        self._finish(request.word, request.target_language, None)

    def _finish(self, word: Word, target_language: str, translation) -> None:
        try:
            assembled = self.vocabulary_service.complete_capture(word, target_language, translation)
        except Exception as e:
            # Listeners wait for exactly one of word_added / word_add_failed
            self.logger.error("Failed to complete capture", extra={"data": {"wordId": word.id, "error": str(e)}})
            self.word_add_failed.emit(f"Could not complete capture of word {word.id}: {e}")
            return
        if assembled is None:
            # Word was deleted while its translation was in flight
            self.word_add_failed.emit(f"Word {word.id} no longer exists")
            return
        self.word_added.emit(assembled)

    def delete_word(self, word_id: int) -> bool:
        deleted = self.vocabulary_service.delete_word(word_id)
        if deleted:
            self.word_deleted.emit(word_id)
        return deleted

    def get_word(self, word_id: int) -> Optional[WordWithTranslations]:
        return self.vocabulary_service.get_word(word_id)

    def list_words(self) -> List[WordWithTranslations]:
        return self.vocabulary_service.list_words()

    def list_words_by_tag(self, tag_name: str) -> List[WordWithTranslations]:
        return self.vocabulary_service.list_words_by_tag(tag_name)

    def list_tags(self) -> List[TagCount]:
        return self.vocabulary_service.list_tags()

    def timeline(self) -> TimelineTree:
        return self.vocabulary_service.timeline()

    def run_developer_query(self, query: str) -> QueryResult:
        return self.query_gateway.run_developer_query(query)

    def fetch_schema(self) -> List[TableInfo]:
        self.logger.debug("Database schema requested")
        return self.query_gateway.get_schema()

    def get_logs(
        self,
        level: Optional[str] = None,
        source: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[LogEntry]:
        return self.log_service.get_logs(level=level, source=source, search=search)

    def clear_logs(self) -> None:
        self.log_service.clear()

    def export_logs(self) -> str:
        self.logger.info("Logs export requested")
        return self.log_service.export()

    def shutdown(self) -> None:
        """Wait for in-flight translations, then release the database and log buffer."""
        self.thread_pool.waitForDone()
        self.vocabulary_service.close()
        self.log_service.close()
