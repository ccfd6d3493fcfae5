"""Main entry point for the vocabulary capture tool."""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from PySide6.QtCore import QCoreApplication

from vocab_capture.coordinators import VocabularyCoordinator
from vocab_capture.io import QueryGateway, VocabDatabase
from vocab_capture.services import (
    GeminiTranslationService,
    LogService,
    SettingsManager,
    VocabularyService,
    clean_ocr_text,
    first_word,
)


def build_coordinator(
    settings: SettingsManager,
    db_path: Optional[Path] = None,
) -> VocabularyCoordinator:
    """
    Composition root: the only place that knows how to instantiate and wire
    all components.
    """
    log_service = LogService(capacity=settings.get_log_capacity())

    db = VocabDatabase(db_path or settings.get_database_path(), logger=log_service.get_logger("database"))
    db.ensure_schema()

    return VocabularyCoordinator(
        vocabulary_service=VocabularyService(db, logger=log_service.get_logger("vocabulary")),
        query_gateway=QueryGateway(db, logger=log_service.get_logger("database")),
        translation_service=GeminiTranslationService(logger=log_service.get_logger("translation")),
        settings_manager=settings,
        log_service=log_service,
    )


def _print_json(value: Any) -> None:
    if dataclasses.is_dataclass(value):
        value = dataclasses.asdict(value)
    elif isinstance(value, list):
        value = [dataclasses.asdict(v) if dataclasses.is_dataclass(v) else v for v in value]
    print(json.dumps(value, indent=2, ensure_ascii=False, default=str))


def _add_and_wait(
    coordinator: VocabularyCoordinator,
    text: str,
    source_language: str,
    target_language: Optional[str],
) -> int:
    """Add a word and run the Qt event loop until its translation lands."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    outcome: List[Any] = []

    def on_added(entry) -> None:
        outcome.append(entry)
        app.quit()

    def on_failed(message: str) -> None:
        outcome.append(message)
        app.quit()

    coordinator.word_added.connect(on_added)
    coordinator.word_add_failed.connect(on_failed)

    coordinator.request_add_word(text, source_language, target_language)
    if not outcome and coordinator.pending_requests:
        app.exec()

    result = outcome[0] if outcome else "No result"
    if isinstance(result, str):
        print(result, file=sys.stderr)
        return 1
    _print_json(result)
    return 0


def cmd_add(args: argparse.Namespace, coordinator: VocabularyCoordinator) -> int:
    """Add a word, translate it and tag it."""
    return _add_and_wait(coordinator, args.text, args.source, args.target)


def cmd_ocr(args: argparse.Namespace, coordinator: VocabularyCoordinator) -> int:
    """Add the first usable word from raw OCR output."""
    raw = sys.stdin.read() if args.text == "-" else args.text
    cleaned = clean_ocr_text(raw)
    candidate = first_word(cleaned) if cleaned else None
    if candidate is None:
        print("No text recognized", file=sys.stderr)
        return 1
    return _add_and_wait(coordinator, candidate, args.source, args.target)


def cmd_delete(args: argparse.Namespace, coordinator: VocabularyCoordinator) -> int:
    """Delete a word with its translations and tags."""
    if not coordinator.delete_word(args.word_id):
        print(f"Word not found: {args.word_id}", file=sys.stderr)
        return 1
    print(f"Deleted word {args.word_id}")
    return 0


def cmd_list(args: argparse.Namespace, coordinator: VocabularyCoordinator) -> int:
    """List words, optionally restricted to one tag."""
    words = coordinator.list_words_by_tag(args.tag) if args.tag else coordinator.list_words()
    _print_json(words)
    return 0


def cmd_tags(args: argparse.Namespace, coordinator: VocabularyCoordinator) -> int:
    """List tags with usage counts."""
    _print_json(coordinator.list_tags())
    return 0


def cmd_timeline(args: argparse.Namespace, coordinator: VocabularyCoordinator) -> int:
    """Show the year/month/day tree built from date tags."""
    _print_json(coordinator.timeline())
    return 0


def cmd_sql(args: argparse.Namespace, coordinator: VocabularyCoordinator) -> int:
    """Run a developer SQL statement."""
    validation = coordinator.query_gateway.validate_query(args.query)
    if validation.is_valid and validation.is_dangerous and not args.yes:
        print("Statement may modify data; re-run with --yes to execute it", file=sys.stderr)
        return 1
    result = coordinator.run_developer_query(args.query)
    _print_json(result)
    return 1 if result.is_error else 0


def cmd_schema(args: argparse.Namespace, coordinator: VocabularyCoordinator) -> int:
    """Describe the database tables."""
    _print_json(coordinator.fetch_schema())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="vocab-capture",
        description="Capture, translate and tag vocabulary",
    )
    parser.add_argument(
        "-d", "--database",
        default=None,
        help="Path to vocabulary database (default: VOCAB_DB_PATH or vocab.db)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print log records to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # add
    p_add = subparsers.add_parser("add", help="Add a word")
    p_add.add_argument("text", help="Word to add")
    p_add.add_argument("-s", "--source", default="en", help="Source language code")
    p_add.add_argument("-t", "--target", default=None, help="Target language code")
    p_add.set_defaults(func=cmd_add)

    # ocr
    p_ocr = subparsers.add_parser("ocr", help="Add the first word from OCR output")
    p_ocr.add_argument("text", help="Recognized text (or - for stdin)")
    p_ocr.add_argument("-s", "--source", default="en", help="Source language code")
    p_ocr.add_argument("-t", "--target", default=None, help="Target language code")
    p_ocr.set_defaults(func=cmd_ocr)

    # delete
    p_delete = subparsers.add_parser("delete", help="Delete a word")
    p_delete.add_argument("word_id", type=int, help="Word id")
    p_delete.set_defaults(func=cmd_delete)

    # list
    p_list = subparsers.add_parser("list", help="List words")
    p_list.add_argument("--tag", default=None, help="Only words carrying this tag")
    p_list.set_defaults(func=cmd_list)

    # tags
    p_tags = subparsers.add_parser("tags", help="List tags with counts")
    p_tags.set_defaults(func=cmd_tags)

    # timeline
    p_timeline = subparsers.add_parser("timeline", help="Show the date tag timeline")
    p_timeline.set_defaults(func=cmd_timeline)

    # sql
    p_sql = subparsers.add_parser("sql", help="Run a developer SQL statement")
    p_sql.add_argument("query", help="SQL statement")
    p_sql.add_argument("-y", "--yes", action="store_true", help="Allow statements that may modify data")
    p_sql.set_defaults(func=cmd_sql)

    # schema
    p_schema = subparsers.add_parser("schema", help="Describe database tables")
    p_schema.set_defaults(func=cmd_schema)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        handler = logging.StreamHandler()
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter("[%(name)s] %(levelname)s: %(message)s"))
        logging.getLogger("vocab_capture").addHandler(handler)

    settings = SettingsManager(project_root=Path.cwd())
    coordinator = build_coordinator(settings, Path(args.database) if args.database else None)
    try:
        return args.func(args, coordinator)
    finally:
        coordinator.shutdown()


if __name__ == "__main__":
    sys.exit(main())
