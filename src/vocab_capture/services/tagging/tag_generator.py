"""Auto-tag generation for newly captured words."""

from datetime import datetime
from typing import Dict, List, Optional

from vocab_capture.core import NewTag, TagType

LANGUAGE_NAMES: Dict[str, str] = {
    "en": "english",
    "ja": "japanese",
    "it": "italian",
    "zh": "chinese",
}


def generate_auto_tags(source_language: str, created_at: Optional[datetime] = None) -> List[NewTag]:
    """
    Build the automatic tags for a word.

    Returns day, month and year date tags (``YYYY-MM-DD``, ``YYYY-MM``,
    ``YYYY``) followed by a language-name tag when ``source_language`` is a
    known code. Unknown languages simply get no language tag.

    Args:
        source_language: Source language code, e.g. ``"en"``.
        created_at: Moment the word was captured. Defaults to now.

    Returns:
        Ordered list of tags.
    """
    moment = created_at or datetime.now()
    year = f"{moment.year:04d}"
    month = f"{moment.month:02d}"
    day = f"{moment.day:02d}"

    tags = [
        NewTag(name=f"{year}-{month}-{day}", type=TagType.AUTO_DATE),
        NewTag(name=f"{year}-{month}", type=TagType.AUTO_DATE),
        NewTag(name=year, type=TagType.AUTO_DATE),
    ]

    language_name = LANGUAGE_NAMES.get(source_language)
    if language_name:
        tags.append(NewTag(name=language_name, type=TagType.AUTO_LANGUAGE))

    return tags
