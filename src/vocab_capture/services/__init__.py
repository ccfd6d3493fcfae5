"""Services layer - business logic and external integrations."""

from vocab_capture.services.log_service import LogEntry, LogService
from vocab_capture.services.settings_manager import SettingsManager
from vocab_capture.services.vocabulary_service import VocabularyService

# Tagging
from vocab_capture.services.tagging import (
	LANGUAGE_NAMES,
	TimelineNode,
	TimelineTree,
	TimeTag,
	build_timeline_tree,
	generate_auto_tags,
	parse_time_tag,
)

# Text processing
from vocab_capture.services.text_processing import clean_ocr_text, first_word, normalize_text

# Translation services
from vocab_capture.services.translation import (
	GeminiTranslationService,
	TranslationResult,
	TranslationService,
	parse_translation_response,
)

# Workers
from vocab_capture.services.api_workers import TranslationWorker, WorkerSignals

__all__ = [
	"LogEntry",
	"LogService",
	"SettingsManager",
	"VocabularyService",
	"LANGUAGE_NAMES",
	"generate_auto_tags",
	"TimeTag",
	"TimelineNode",
	"TimelineTree",
	"parse_time_tag",
	"build_timeline_tree",
	"normalize_text",
	"clean_ocr_text",
	"first_word",
	"TranslationService",
	"TranslationResult",
	"GeminiTranslationService",
	"parse_translation_response",
	"TranslationWorker",
	"WorkerSignals",
]
