"""Unit tests for SettingsManager."""

import os
import tempfile
from pathlib import Path

import pytest

from vocab_capture.services import SettingsManager

SETTINGS_VARS = ("GEMINI_API_KEY", "VOCAB_DB_PATH", "VOCAB_TARGET_LANGUAGE", "VOCAB_LOG_CAPACITY")


@pytest.fixture
def temp_env_dir():
    """Provide a temporary directory for .env files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clean_env():
    """Remove settings variables from the environment before and after each test."""
    saved = {name: os.environ.pop(name, None) for name in SETTINGS_VARS}
    yield
    for name, value in saved.items():
        if value is not None:
            os.environ[name] = value
        else:
            os.environ.pop(name, None)


@pytest.fixture
def settings(temp_env_dir, clean_env):
    """Provide a SettingsManager with a test .env file."""
    env_file = temp_env_dir / ".env"
    env_file.write_text("GEMINI_API_KEY=\n")
    return SettingsManager(project_root=temp_env_dir)


class TestSettingsManagerAPIKey:
    """Tests for API key management from .env file."""

    def test_get_api_key_returns_none_when_empty(self, settings):
        """API key should be None when .env has empty value."""
        assert settings.get_gemini_api_key() is None

    def test_get_api_key_loaded_from_env_file(self, temp_env_dir, clean_env):
        """API key should be read from the .env file itself."""
        (temp_env_dir / ".env").write_text("GEMINI_API_KEY=test-key-123\n")

        settings = SettingsManager(project_root=temp_env_dir)
        assert settings.get_gemini_api_key() == "test-key-123"

    def test_get_api_key_strips_whitespace(self, temp_env_dir, clean_env):
        """API key should strip leading/trailing whitespace."""
        (temp_env_dir / ".env").write_text("GEMINI_API_KEY=\n")
        os.environ["GEMINI_API_KEY"] = "  test-key  "

        settings = SettingsManager(project_root=temp_env_dir)
        assert settings.get_gemini_api_key() == "test-key"

    def test_get_api_key_returns_none_for_whitespace_only(self, temp_env_dir, clean_env):
        """API key should return None for whitespace-only value."""
        os.environ["GEMINI_API_KEY"] = "   "

        settings = SettingsManager(project_root=temp_env_dir)
        assert settings.get_gemini_api_key() is None

    def test_reload_env_updates_api_key(self, temp_env_dir, clean_env):
        """reload_env should pick up changes to .env file."""
        env_file = temp_env_dir / ".env"
        env_file.write_text("GEMINI_API_KEY=old-key\n")

        settings = SettingsManager(project_root=temp_env_dir)
        assert settings.get_gemini_api_key() == "old-key"

        env_file.write_text("GEMINI_API_KEY=new-key\n")
        settings.reload_env()
        assert settings.get_gemini_api_key() == "new-key"

    def test_missing_env_file_returns_none(self, temp_env_dir, clean_env):
        """SettingsManager should handle missing .env file gracefully."""
        settings = SettingsManager(project_root=temp_env_dir)
        assert settings.get_gemini_api_key() is None


class TestSettingsManagerDefaults:
    """Tests for database path, target language and log capacity."""

    def test_defaults(self, settings, temp_env_dir):
        assert settings.get_database_path() == temp_env_dir / "vocab.db"
        assert settings.get_default_target_language() == "zh"
        assert settings.get_log_capacity() == 1000

    def test_relative_database_path_resolves_against_project_root(self, temp_env_dir, clean_env):
        (temp_env_dir / ".env").write_text("VOCAB_DB_PATH=data/words.db\n")
        settings = SettingsManager(project_root=temp_env_dir)
        assert settings.get_database_path() == temp_env_dir / "data" / "words.db"

    def test_absolute_database_path(self, temp_env_dir, clean_env, tmp_path):
        target = tmp_path / "elsewhere.db"
        os.environ["VOCAB_DB_PATH"] = str(target)
        settings = SettingsManager(project_root=temp_env_dir)
        assert settings.get_database_path() == target

    def test_target_language_from_env(self, temp_env_dir, clean_env):
        (temp_env_dir / ".env").write_text("VOCAB_TARGET_LANGUAGE= ja \n")
        settings = SettingsManager(project_root=temp_env_dir)
        assert settings.get_default_target_language() == "ja"

    @pytest.mark.parametrize("value, expected", [("250", 250), ("abc", 1000), ("0", 1000), ("-3", 1000)])
    def test_log_capacity(self, temp_env_dir, clean_env, value, expected):
        os.environ["VOCAB_LOG_CAPACITY"] = value
        settings = SettingsManager(project_root=temp_env_dir)
        assert settings.get_log_capacity() == expected
