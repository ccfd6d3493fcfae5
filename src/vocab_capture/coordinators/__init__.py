"""Coordinators - Orchestration layer connecting callers with business logic."""

from .vocabulary_coordinator import VocabularyCoordinator

__all__ = [
    "VocabularyCoordinator",
]
