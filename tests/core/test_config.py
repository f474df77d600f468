"""Tests for library settings."""

import pytest
from pydantic import ValidationError

from cmatrix.core.config import Settings, get_settings


class TestSettingsDefaults:
    """Test default values."""

    def test_defaults(self):
        settings = Settings()
        assert settings.DIMENSION_CHECK == "strict"
        assert settings.DETERMINANT_WARN_SIZE == 9
        assert settings.TOLERANCE == 0.001
        assert settings.TOL_TYPE == "relative"
        assert settings.LOG_LEVEL == "WARNING"
        assert settings.LOG_FORMAT == "text"
        assert settings.LOG_FILE is None

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestSettingsEnvironment:
    """Test environment variable overrides."""

    def test_env_prefix(self, use_settings):
        settings = use_settings(DIMENSION_CHECK="legacy", TOLERANCE="0.5")
        assert settings.DIMENSION_CHECK == "legacy"
        assert settings.TOLERANCE == 0.5

    def test_unprefixed_variables_are_ignored(self, monkeypatch):
        monkeypatch.setenv("DIMENSION_CHECK", "legacy")
        assert Settings().DIMENSION_CHECK == "strict"

    def test_invalid_policy_is_rejected(self, monkeypatch):
        monkeypatch.setenv("CMATRIX_DIMENSION_CHECK", "lenient")
        with pytest.raises(ValidationError):
            Settings()

    def test_non_positive_warn_size_is_rejected(self):
        with pytest.raises(ValidationError):
            Settings(DETERMINANT_WARN_SIZE=0)

    def test_env_file(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("CMATRIX_TOL_TYPE=absolute\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert Settings().TOL_TYPE == "absolute"
