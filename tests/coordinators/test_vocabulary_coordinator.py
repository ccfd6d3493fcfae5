"""Unit tests for VocabularyCoordinator."""

import time
from unittest.mock import MagicMock

import pytest
from PySide6.QtCore import QCoreApplication, QThreadPool

from vocab_capture.coordinators import VocabularyCoordinator
from vocab_capture.core import TranslationData
from vocab_capture.io import QueryGateway, VocabDatabase
from vocab_capture.services import LogService, TranslationResult, VocabularyService


def ensure_qt_app():
    if QCoreApplication.instance() is None:
        QCoreApplication([])


def wait_for_requests(coordinator, timeout=5.0):
    """Let workers finish and deliver their queued signals."""
    coordinator.thread_pool.waitForDone(int(timeout * 1000))
    deadline = time.monotonic() + timeout
    while coordinator.pending_requests and time.monotonic() < deadline:
        QCoreApplication.processEvents()
    assert coordinator.pending_requests == 0


@pytest.fixture
def log_service():
    service = LogService(capacity=100)
    yield service
    service.close()


@pytest.fixture
def db(tmp_path, log_service):
    database = VocabDatabase(tmp_path / "vocab.db", logger=log_service.get_logger("database"))
    database.ensure_schema()
    yield database
    database.close()


@pytest.fixture
def translation_service():
    service = MagicMock()
    service.translate_word = MagicMock(
        return_value=TranslationResult(
            data=TranslationData(translation="苹果", examples=["I ate an apple."]),
            model="gemini-test",
        )
    )
    return service


@pytest.fixture
def settings_manager():
    manager = MagicMock()
    manager.get_gemini_api_key = MagicMock(return_value="test-key")
    manager.get_default_target_language = MagicMock(return_value="zh")
    return manager


@pytest.fixture
def coordinator(db, log_service, translation_service, settings_manager):
    ensure_qt_app()
    return VocabularyCoordinator(
        vocabulary_service=VocabularyService(db, logger=log_service.get_logger("vocabulary")),
        query_gateway=QueryGateway(db, logger=log_service.get_logger("database")),
        translation_service=translation_service,
        settings_manager=settings_manager,
        log_service=log_service,
        thread_pool=QThreadPool(),
    )


class TestVocabularyCoordinatorInitialization:

    def test_fails_fast_on_missing_collaborator(self, db, log_service, translation_service, settings_manager):
        ensure_qt_app()
        with pytest.raises(ValueError, match="vocabulary_service"):
            VocabularyCoordinator(
                vocabulary_service=None,
                query_gateway=QueryGateway(db),
                translation_service=translation_service,
                settings_manager=settings_manager,
                log_service=log_service,
            )

    def test_starts_with_no_pending_requests(self, coordinator):
        assert coordinator.pending_requests == 0


class TestAddWord:

    def test_add_word_translates_and_tags(self, coordinator, translation_service):
        added = MagicMock()
        coordinator.word_added.connect(added)

        word = coordinator.request_add_word("apple", "en")
        assert word is not None
        wait_for_requests(coordinator)

        translation_service.translate_word.assert_called_once_with(
            word="apple",
            source_language="en",
            target_language="zh",
            api_key="test-key",
        )
        added.assert_called_once()
        entry = added.call_args.args[0]
        assert entry.word.id == word.id
        assert [t.translation for t in entry.translations] == ["苹果"]
        assert entry.translations[0].examples == ["I ate an apple."]
        assert {t.tag_name for t in entry.tags} >= {"english"}
        assert len(entry.tags) == 4

    def test_explicit_target_language(self, coordinator, translation_service):
        coordinator.request_add_word("apple", "en", "ja")
        wait_for_requests(coordinator)

        assert translation_service.translate_word.call_args.kwargs["target_language"] == "ja"
        assert coordinator.list_words()[0].translations[0].target_language == "ja"

    def test_provider_failure_keeps_word_without_translation(self, coordinator, translation_service):
        translation_service.translate_word.return_value = TranslationResult(
            data=None, model="gemini-test", error="Request timed out. Please check your connection."
        )
        added = MagicMock()
        coordinator.word_added.connect(added)

        coordinator.request_add_word("apple", "en")
        wait_for_requests(coordinator)

        entry = added.call_args.args[0]
        assert entry.translations == []
        assert len(entry.tags) == 4
        assert coordinator.get_logs(level="error", source="main")[0].message == "Translation failed"

    def test_worker_exception_keeps_word(self, coordinator, translation_service):
        translation_service.translate_word.side_effect = RuntimeError("boom")
        added = MagicMock()
        coordinator.word_added.connect(added)

        coordinator.request_add_word("apple", "en")
        wait_for_requests(coordinator)

        added.assert_called_once()
        assert added.call_args.args[0].translations == []
        assert coordinator.get_logs(search="boom")

    def test_missing_api_key_skips_provider(self, coordinator, translation_service, settings_manager):
        settings_manager.get_gemini_api_key.return_value = None
        added = MagicMock()
        coordinator.word_added.connect(added)

        coordinator.request_add_word("apple", "en")

        translation_service.translate_word.assert_not_called()
        added.assert_called_once()
        assert coordinator.pending_requests == 0

    def test_blank_word_fails(self, coordinator, translation_service):
        failed = MagicMock()
        coordinator.word_add_failed.connect(failed)

        assert coordinator.request_add_word("   ", "en") is None

        failed.assert_called_once()
        translation_service.translate_word.assert_not_called()

    def test_storage_crash_after_translation_reports_failure(self, coordinator):
        coordinator.vocabulary_service.complete_capture = MagicMock(side_effect=RuntimeError("disk gone"))
        added = MagicMock()
        failed = MagicMock()
        coordinator.word_added.connect(added)
        coordinator.word_add_failed.connect(failed)

        coordinator.request_add_word("apple", "en")
        wait_for_requests(coordinator)

        added.assert_not_called()
        failed.assert_called_once()
        assert "disk gone" in failed.call_args.args[0]
        assert coordinator.get_logs(level="error", search="Failed to complete capture")

    def test_word_deleted_while_translating(self, coordinator):
        failed = MagicMock()
        coordinator.word_add_failed.connect(failed)

        word = coordinator.request_add_word("apple", "en")
        coordinator.delete_word(word.id)
        wait_for_requests(coordinator)

        failed.assert_called_once()
        assert coordinator.list_words() == []
        assert coordinator.list_tags() == []


class TestQueriesAndDeveloperTools:

    def test_delete_word_emits_signal(self, coordinator, settings_manager):
        settings_manager.get_gemini_api_key.return_value = None
        deleted = MagicMock()
        coordinator.word_deleted.connect(deleted)
        word = coordinator.request_add_word("apple", "en")

        assert coordinator.delete_word(word.id) is True
        deleted.assert_called_once_with(word.id)
        assert coordinator.delete_word(word.id) is False

    def test_tags_and_timeline(self, coordinator, settings_manager):
        settings_manager.get_gemini_api_key.return_value = None
        coordinator.request_add_word("apple", "en")
        coordinator.request_add_word("pear", "en")

        names = {tag.name: tag.count for tag in coordinator.list_tags()}
        assert names["english"] == 2
        assert len(coordinator.list_words_by_tag("english")) == 2

        tree = coordinator.timeline()
        assert len(tree.years) == 1
        assert tree.years[0].count == 2

    def test_developer_query(self, coordinator, settings_manager):
        settings_manager.get_gemini_api_key.return_value = None
        coordinator.request_add_word("apple", "en")

        result = coordinator.run_developer_query("SELECT original_text FROM words")
        assert result.rows == [{"original_text": "apple"}]

        rejected = coordinator.run_developer_query("")
        assert rejected.error == "Query cannot be empty"

    def test_fetch_schema(self, coordinator):
        assert {table.name for table in coordinator.fetch_schema()} >= {"words", "translations", "tags"}

    def test_logs_are_buffered_and_exportable(self, coordinator):
        coordinator.run_developer_query("SELEC broken")

        assert coordinator.get_logs(level="warning", source="database")
        exported = coordinator.export_logs()
        assert "Invalid SQL query rejected" in exported

        coordinator.clear_logs()
        assert [e.message for e in coordinator.get_logs()] == ["Logs cleared by user"]
