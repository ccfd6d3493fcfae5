"""SQLite-backed vocabulary persistence."""

import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from vocab_capture.core import (
    NewTag,
    Tag,
    TagCount,
    TagType,
    Translation,
    TranslationData,
    Word,
    WordWithTranslations,
)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


def _tag_type(raw: str) -> Union[TagType, str]:
    try:
        return TagType(raw)
    except ValueError:
        return raw


class VocabDatabase:
    """Owns the SQLite connection, schema, and word/translation/tag persistence.

    Write operations never raise storage errors to the caller: failures are
    logged and reported as ``None``/``False``.
    """

    def __init__(
        self,
        db_path: Union[Path, str],
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.db_path = db_path if db_path == ":memory:" else Path(db_path)
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.logger = logger or logging.getLogger(__name__)
        self._clock = clock
        self.connection = sqlite3.connect(str(self.db_path))
        self.connection.row_factory = sqlite3.Row
        self.connection.execute("PRAGMA foreign_keys = ON;")

    def ensure_schema(self) -> None:
        """Create tables and indexes if they do not exist."""
        self.connection.executescript(
            """
            CREATE TABLE IF NOT EXISTS words (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                original_text TEXT NOT NULL,
                source_language TEXT NOT NULL,
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                updated_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                UNIQUE(original_text, source_language)
            );

            CREATE TABLE IF NOT EXISTS translations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                word_id INTEGER NOT NULL,
                target_language TEXT NOT NULL,
                translation TEXT NOT NULL,
                definition TEXT,
                pronunciation TEXT,
                part_of_speech TEXT,
                examples TEXT,
                usage_notes TEXT,
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (word_id) REFERENCES words(id) ON DELETE CASCADE
            );

            CREATE TABLE IF NOT EXISTS tags (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                word_id INTEGER NOT NULL,
                tag_name TEXT NOT NULL,
                tag_type TEXT NOT NULL,
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (word_id) REFERENCES words(id) ON DELETE CASCADE,
                UNIQUE(word_id, tag_name)
            );

            CREATE INDEX IF NOT EXISTS idx_words_created_at ON words(created_at);
            CREATE INDEX IF NOT EXISTS idx_words_source_lang ON words(source_language);
            CREATE INDEX IF NOT EXISTS idx_translations_word_id ON translations(word_id);
            CREATE INDEX IF NOT EXISTS idx_tags_word_id ON tags(word_id);
            CREATE INDEX IF NOT EXISTS idx_tags_name ON tags(tag_name);
            """
        )
        self.connection.commit()

    def add_word(self, original_text: str, source_language: str) -> Optional[Word]:
        """Insert a word, or touch ``updated_at`` if the pair already exists."""
        now = self._now()
        try:
            cur = self.connection.cursor()
            cur.execute(
                """
                INSERT INTO words (original_text, source_language, created_at, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(original_text, source_language) DO UPDATE SET
                    updated_at = excluded.updated_at
                """,
                (original_text, source_language, now, now),
            )
            self.connection.commit()
            cur.execute(
                """
                SELECT * FROM words
                WHERE original_text = ? AND source_language = ?
                """,
                (original_text, source_language),
            )
            row = cur.fetchone()
        except sqlite3.Error as e:
            self.connection.rollback()
            self.logger.error(
                "Error adding word",
                extra={"data": {"text": original_text, "sourceLanguage": source_language, "error": str(e)}},
            )
            return None
        return self._row_to_word(row)

    def add_translation(
        self, word_id: int, target_language: str, data: TranslationData
    ) -> Optional[Translation]:
        """Insert a new translation row for ``word_id``."""
        try:
            cur = self.connection.cursor()
            cur.execute(
                """
                INSERT INTO translations (
                    word_id, target_language, translation, definition,
                    pronunciation, part_of_speech, examples, usage_notes, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    word_id,
                    target_language,
                    data.translation,
                    data.definition,
                    data.pronunciation,
                    data.part_of_speech,
                    json.dumps(list(data.examples or []), ensure_ascii=False),
                    data.usage_notes,
                    self._now(),
                ),
            )
            self.connection.commit()
            translation_id = cur.lastrowid
        except sqlite3.Error as e:
            self.connection.rollback()
            self.logger.error(
                "Error adding translation",
                extra={"data": {"wordId": word_id, "targetLanguage": target_language, "error": str(e)}},
            )
            return None
        return self._get_translation(translation_id)

    def add_tags(self, word_id: int, tags: Iterable[NewTag]) -> bool:
        """Attach tags to a word in one transaction; duplicates are ignored."""
        tags = list(tags)
        now = self._now()
        try:
            params = [(word_id, tag.name, TagType(tag.type).value, now) for tag in tags]
            with self.connection:
                self.connection.executemany(
                    """
                    INSERT OR IGNORE INTO tags (word_id, tag_name, tag_type, created_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    params,
                )
        except (sqlite3.Error, ValueError) as e:
            self.logger.error(
                "Error adding tags",
                extra={"data": {"wordId": word_id, "tagCount": len(tags), "error": str(e)}},
            )
            return False
        return True

    def delete_word(self, word_id: int) -> bool:
        """Delete a word; translations and tags go with it via ON DELETE CASCADE."""
        try:
            cur = self.connection.cursor()
            cur.execute("DELETE FROM words WHERE id = ?", (word_id,))
            self.connection.commit()
        except sqlite3.Error as e:
            self.connection.rollback()
            self.logger.error("Error deleting word", extra={"data": {"wordId": word_id, "error": str(e)}})
            return False
        return cur.rowcount > 0

    def get_word_with_translations(self, word_id: int) -> Optional[WordWithTranslations]:
        word = self._get_word(word_id)
        if word is None:
            return None
        return self._assemble(word)

    def get_all_words(self) -> List[WordWithTranslations]:
        cur = self.connection.cursor()
        cur.execute("SELECT * FROM words ORDER BY created_at DESC, id DESC")
        return [self._assemble(self._row_to_word(row)) for row in cur.fetchall()]

    def get_words_by_tag(self, tag_name: str) -> List[WordWithTranslations]:
        cur = self.connection.cursor()
        cur.execute(
            """
            SELECT w.* FROM words w
            JOIN tags t ON w.id = t.word_id
            WHERE t.tag_name = ?
            ORDER BY w.created_at DESC, w.id DESC
            """,
            (tag_name,),
        )
        return [self._assemble(self._row_to_word(row)) for row in cur.fetchall()]

    def get_all_tags(self) -> List[TagCount]:
        cur = self.connection.cursor()
        cur.execute(
            """
            SELECT tag_name, tag_type, COUNT(*) AS count
            FROM tags
            GROUP BY tag_name, tag_type
            ORDER BY tag_type, tag_name
            """
        )
        return [
            TagCount(name=row["tag_name"], type=_tag_type(row["tag_type"]), count=row["count"])
            for row in cur.fetchall()
        ]

    def close(self) -> None:
        self.connection.close()

    def _now(self) -> str:
        return self._clock().strftime(TIMESTAMP_FORMAT)

    def _assemble(self, word: Word) -> WordWithTranslations:
        return WordWithTranslations(
            word=word,
            translations=self._get_translations_for_word(word.id),
            tags=self._get_tags_for_word(word.id),
        )

    def _get_word(self, word_id: int) -> Optional[Word]:
        cur = self.connection.cursor()
        cur.execute("SELECT * FROM words WHERE id = ?", (word_id,))
        row = cur.fetchone()
        return self._row_to_word(row) if row else None

    def _get_translation(self, translation_id: int) -> Optional[Translation]:
        cur = self.connection.cursor()
        cur.execute("SELECT * FROM translations WHERE id = ?", (translation_id,))
        row = cur.fetchone()
        return self._row_to_translation(row) if row else None

    def _get_translations_for_word(self, word_id: int) -> List[Translation]:
        cur = self.connection.cursor()
        cur.execute("SELECT * FROM translations WHERE word_id = ? ORDER BY id ASC", (word_id,))
        return [self._row_to_translation(row) for row in cur.fetchall()]

    def _get_tags_for_word(self, word_id: int) -> List[Tag]:
        cur = self.connection.cursor()
        cur.execute("SELECT * FROM tags WHERE word_id = ? ORDER BY id ASC", (word_id,))
        return [self._row_to_tag(row) for row in cur.fetchall()]

    @staticmethod
    def _row_to_word(row: sqlite3.Row) -> Word:
        return Word(
            id=row["id"],
            original_text=row["original_text"],
            source_language=row["source_language"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def _row_to_translation(self, row: sqlite3.Row) -> Translation:
        examples: List[str] = []
        raw = row["examples"]
        if raw:
            try:
                examples = list(json.loads(raw))
            except (json.JSONDecodeError, TypeError) as e:
                self.logger.error(
                    "Failed to parse examples JSON",
                    extra={"data": {"translationId": row["id"], "examples": raw, "error": str(e)}},
                )
        return Translation(
            id=row["id"],
            word_id=row["word_id"],
            target_language=row["target_language"],
            translation=row["translation"],
            definition=row["definition"],
            pronunciation=row["pronunciation"],
            part_of_speech=row["part_of_speech"],
            examples=examples,
            usage_notes=row["usage_notes"],
        )

    @staticmethod
    def _row_to_tag(row: sqlite3.Row) -> Tag:
        return Tag(
            id=row["id"],
            word_id=row["word_id"],
            tag_name=row["tag_name"],
            tag_type=_tag_type(row["tag_type"]),
            created_at=row["created_at"],
        )
