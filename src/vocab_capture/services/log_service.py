"""Log Service - bounded in-memory buffer of recent log records.

Components receive a logger from ``LogService.get_logger(source)`` instead of
reaching for a module-level global. Every record emitted through such a logger
is kept in a fixed-capacity buffer (oldest dropped first) so the developer
console can list, filter and export recent activity.
"""

import itertools
import json
import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Deque, List, Optional, Set

ROOT_LOGGER_NAME = "vocab_capture"
DEFAULT_CAPACITY = 1000


@dataclass
class LogEntry:
    id: str
    timestamp: str
    level: str
    source: str
    message: str
    data: Optional[Any] = None

    def format(self) -> str:
        text = f"[{self.timestamp}] [{self.source.upper()}] {self.level.upper()}: {self.message}"
        if self.data is not None:
            text += "\n  Data: " + json.dumps(self.data, indent=2, default=str, ensure_ascii=False)
        return text


class LogService(logging.Handler):
    """logging.Handler that keeps the most recent records in a ring buffer."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        super().__init__(level=logging.DEBUG)
        if capacity <= 0:
            raise ValueError(f"Log capacity must be positive, got {capacity}")
        self.capacity = capacity
        # Newest entry on the left; a full deque drops from the right.
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._ids = itertools.count(1)
        self._attached: Set[str] = set()

    def get_logger(self, source: str) -> logging.Logger:
        """Return the ``vocab_capture.<source>`` logger wired to this buffer."""
        name = f"{ROOT_LOGGER_NAME}.{source}"
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        if name not in self._attached:
            logger.addHandler(self)
            self._attached.add(name)
        return logger

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = LogEntry(
                id=f"{int(record.created * 1000)}-{next(self._ids)}",
                timestamp=datetime.fromtimestamp(record.created).isoformat(),
                level=record.levelname.lower(),
                source=self._source_for(record.name),
                message=record.getMessage(),
                data=getattr(record, "data", None),
            )
        except Exception:
            self.handleError(record)
            return
        self._entries.appendleft(entry)

    def get_logs(
        self,
        level: Optional[str] = None,
        source: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[LogEntry]:
        """Return buffered entries, newest first, optionally filtered."""
        with self.lock:
            entries = list(self._entries)

        if level:
            entries = [e for e in entries if e.level == level.lower()]
        if source:
            entries = [e for e in entries if e.source == source]
        if search:
            needle = search.lower()
            entries = [
                e
                for e in entries
                if needle in e.message.lower()
                or (e.data is not None and needle in json.dumps(e.data, default=str).lower())
            ]
        return entries

    def clear(self) -> None:
        with self.lock:
            self._entries.clear()
        self.get_logger("main").info("Logs cleared by user")

    def export(self) -> str:
        """Render every buffered entry as plain text, newest first."""
        return "\n\n".join(entry.format() for entry in self.get_logs())

    @property
    def count(self) -> int:
        return len(self._entries)

    def close(self) -> None:
        for name in self._attached:
            logging.getLogger(name).removeHandler(self)
        self._attached.clear()
        super().close()

    @staticmethod
    def _source_for(logger_name: str) -> str:
        prefix = ROOT_LOGGER_NAME + "."
        if logger_name.startswith(prefix):
            return logger_name[len(prefix):]
        return logger_name
