"""Tests for sfspine.core.settings module."""

import pytest
from pydantic import ValidationError

from sfspine.core.enums import ApiDialect
from sfspine.core.settings import SfSpineSettings, clear_settings_cache, get_settings


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self):
        s = SfSpineSettings(_env_file=None)
        assert s.log_level == "INFO"
        assert s.log_format == "console"
        assert s.default_dialect is ApiDialect.SOAP

    def test_env_override(self, monkeypatch):
        """SFSPINE_* variables override defaults."""
        monkeypatch.setenv("SFSPINE_DEFAULT_DIALECT", "REST")
        monkeypatch.setenv("SFSPINE_LOG_FORMAT", "json")
        s = SfSpineSettings(_env_file=None)
        assert s.default_dialect is ApiDialect.REST
        assert s.log_format == "json"

    @pytest.mark.parametrize(
        "raw,expected",
        [("Bulk 1.0", ApiDialect.BULK1), ("bulk2.0", ApiDialect.BULK2), (" rest ", ApiDialect.REST)],
    )
    def test_dialect_aliases_accepted(self, monkeypatch, raw, expected):
        """The default dialect accepts the same aliases as ApiDialect.parse."""
        monkeypatch.setenv("SFSPINE_DEFAULT_DIALECT", raw)
        assert SfSpineSettings(_env_file=None).default_dialect is expected

    def test_unknown_dialect_rejected(self, monkeypatch):
        """An unrecognised dialect tag fails validation."""
        monkeypatch.setenv("SFSPINE_DEFAULT_DIALECT", "Telegraph")
        with pytest.raises(ValidationError):
            SfSpineSettings(_env_file=None)

    def test_get_settings_cached(self):
        """get_settings returns the same instance until cleared."""
        first = get_settings()
        assert get_settings() is first
        clear_settings_cache()
        assert get_settings() is not first

    def test_force_reload(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("SFSPINE_LOG_LEVEL", "DEBUG")
        assert get_settings(_force_reload=True).log_level == "DEBUG"
        assert get_settings() is not first
