"""Domain layer - Pure entities for words, translations, tags and query results."""

from .developer_entities import (
    ColumnInfo,
    QueryResult,
    QueryRow,
    QueryValidation,
    TableInfo,
)
from .vocabulary_entities import (
    NewTag,
    Tag,
    TagCount,
    TagType,
    Translation,
    TranslationData,
    Word,
    WordWithTranslations,
)

__all__ = [
    "Word",
    "Translation",
    "Tag",
    "TagType",
    "NewTag",
    "TagCount",
    "WordWithTranslations",
    "TranslationData",
    "QueryValidation",
    "QueryResult",
    "QueryRow",
    "ColumnInfo",
    "TableInfo",
]
