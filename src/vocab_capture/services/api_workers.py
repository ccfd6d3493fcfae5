"""Async workers for non-blocking API calls using Qt threading."""

from PySide6.QtCore import QObject, QRunnable, Signal, Slot

from vocab_capture.services.translation import TranslationService


class WorkerSignals(QObject):
    """
    Signals for communicating results from worker threads.

    QRunnable doesn't inherit from QObject, so we need a separate
    QObject to hold the signals.
    """
    error = Signal(str)
    translation_result = Signal(object)  # TranslationResult


class TranslationWorker(QRunnable):
    """
    Worker that runs the word translation API call in a background thread.

    Only the provider call happens off-thread; results are persisted by
    whoever receives ``translation_result`` on the thread owning the database.
    """

    def __init__(
        self,
        translation_service: TranslationService,
        word: str,
        source_language: str,
        target_language: str,
        api_key: str,
    ):
        super().__init__()
        self.translation_service = translation_service
        self.word = word
        self.source_language = source_language
        self.target_language = target_language
        self.api_key = api_key
        self.signals = WorkerSignals()
        self.setAutoDelete(True)

    @Slot()
    def run(self):
        """Execute the translation API call in background thread."""
        try:
            result = self.translation_service.translate_word(
                word=self.word,
                source_language=self.source_language,
                target_language=self.target_language,
                api_key=self.api_key,
            )
            self.signals.translation_result.emit(result)
        except Exception as e:
            # Catch any unexpected exceptions not handled by service
            self.signals.error.emit(f"Unexpected translation error: {str(e)}")
