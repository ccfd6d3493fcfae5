"""Vocabulary entities used across services and persistence."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class TagType(str, Enum):
    """Known tag types. Rows written by hand may carry other values, read back as plain strings."""

    AUTO_DATE = "auto_date"
    AUTO_LANGUAGE = "auto_language"
    CUSTOM = "custom"


@dataclass
class Word:
    id: int
    original_text: str
    source_language: str
    created_at: str
    updated_at: str


@dataclass
class Translation:
    id: int
    word_id: int
    target_language: str
    translation: str
    definition: Optional[str] = None
    pronunciation: Optional[str] = None
    part_of_speech: Optional[str] = None
    examples: List[str] = field(default_factory=list)
    usage_notes: Optional[str] = None


@dataclass
class Tag:
    id: int
    word_id: int
    tag_name: str
    tag_type: Union[TagType, str]
    created_at: Optional[str] = None


@dataclass
class NewTag:
    """A tag about to be attached to a word."""

    name: str
    type: TagType


@dataclass
class TagCount:
    """A distinct tag with the number of words carrying it."""

    name: str
    type: Union[TagType, str]
    count: int


@dataclass
class WordWithTranslations:
    word: Word
    translations: List[Translation] = field(default_factory=list)
    tags: List[Tag] = field(default_factory=list)


@dataclass
class TranslationData:
    """Structured result returned by a translation provider."""

    translation: str
    definition: Optional[str] = None
    pronunciation: Optional[str] = None
    part_of_speech: Optional[str] = None
    examples: List[str] = field(default_factory=list)
    usage_notes: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "TranslationData":
        """Build from a provider payload (camelCase or snake_case keys).

        Raises:
            ValueError: If the payload has no usable ``translation`` field.
        """
        translation = payload.get("translation")
        if not isinstance(translation, str) or not translation.strip():
            raise ValueError("Translation payload is missing 'translation'")

        examples = payload.get("examples") or []
        if not isinstance(examples, list):
            examples = [examples]

        return cls(
            translation=translation.strip(),
            definition=payload.get("definition"),
            pronunciation=payload.get("pronunciation"),
            part_of_speech=payload.get("partOfSpeech", payload.get("part_of_speech")),
            examples=[str(example) for example in examples],
            usage_notes=payload.get("usageNotes", payload.get("usage_notes")),
        )
