"""Tagging - auto-tag generation and the timeline tree used for navigation."""

from vocab_capture.services.tagging.tag_generator import LANGUAGE_NAMES, generate_auto_tags
from vocab_capture.services.tagging.timeline_tree import (
    TimelineNode,
    TimelineTree,
    TimeTag,
    build_timeline_tree,
    parse_time_tag,
)

__all__ = [
    "LANGUAGE_NAMES",
    "generate_auto_tags",
    "TimeTag",
    "TimelineNode",
    "TimelineTree",
    "parse_time_tag",
    "build_timeline_tree",
]
