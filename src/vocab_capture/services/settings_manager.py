"""Settings Manager - Handles API key, database location and defaults."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from vocab_capture.services.log_service import DEFAULT_CAPACITY

DEFAULT_TARGET_LANGUAGE = "zh"
DEFAULT_DB_FILENAME = "vocab.db"


class SettingsManager:
    """
    Manages settings read from the environment.

    Values are loaded from a .env file in the project root; variables already
    present in the process environment take precedence.
    """

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, searches upward from current file.
        """
        if project_root is None:
            current = Path(__file__).resolve()
            project_root = current.parent.parent.parent.parent

        env_path = project_root / ".env"
        load_dotenv(dotenv_path=env_path)

        self._project_root = project_root

    def get_gemini_api_key(self) -> Optional[str]:
        """Get the Gemini API key from environment."""
        return self._get_stripped("GEMINI_API_KEY")

    def get_database_path(self) -> Path:
        """Location of the SQLite file; relative paths resolve against the project root."""
        value = self._get_stripped("VOCAB_DB_PATH")
        if value is None:
            return self._project_root / DEFAULT_DB_FILENAME
        path = Path(value).expanduser()
        return path if path.is_absolute() else self._project_root / path

    def get_default_target_language(self) -> str:
        return self._get_stripped("VOCAB_TARGET_LANGUAGE") or DEFAULT_TARGET_LANGUAGE

    def get_log_capacity(self) -> int:
        value = self._get_stripped("VOCAB_LOG_CAPACITY")
        if value is None:
            return DEFAULT_CAPACITY
        try:
            capacity = int(value)
        except ValueError:
            return DEFAULT_CAPACITY
        return capacity if capacity > 0 else DEFAULT_CAPACITY

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        env_path = self._project_root / ".env"
        load_dotenv(dotenv_path=env_path, override=True)

    @staticmethod
    def _get_stripped(name: str) -> Optional[str]:
        value = os.getenv(name)
        return value.strip() if value and value.strip() else None
