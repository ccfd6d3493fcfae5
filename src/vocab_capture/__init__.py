"""
Vocab Capture - a desktop vocabulary-capture companion.

This package provides:
- A local SQLite store of words, translations and tags
- Automatic date and language tags with a timeline tree for navigation
- Word translation through the Gemini API
- A developer SQL console and in-memory log buffer
"""

__version__ = "0.1.0"

# Make key components available at package level
from vocab_capture.core import Tag, TagType, Translation, Word, WordWithTranslations
from vocab_capture.io import QueryGateway, VocabDatabase

__all__ = [
    "Word",
    "Translation",
    "Tag",
    "TagType",
    "WordWithTranslations",
    "VocabDatabase",
    "QueryGateway",
]
