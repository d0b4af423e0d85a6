"""Unit tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from src.config.settings import Settings


class TestSettings:
    """Tests for defaults and BENCHCACHE_ overrides."""

    def test_defaults(self, monkeypatch) -> None:
        monkeypatch.delenv("BENCHCACHE_CHUNK_YEARS", raising=False)
        settings = Settings(_env_file=None)

        assert settings.chunk_years == 5
        assert settings.fx_default_rate == 1350.0
        assert settings.fx_symbol == "USDKRW=X"
        assert settings.database_url.startswith("sqlite:///")
        assert settings.database_url.endswith("portfolio.db")

    def test_environment_override(self, monkeypatch) -> None:
        monkeypatch.setenv("BENCHCACHE_CHUNK_YEARS", "3")
        monkeypatch.setenv("BENCHCACHE_DATABASE_URL", "postgresql://u:p@localhost/portfolio")

        settings = Settings(_env_file=None)

        assert settings.chunk_years == 3
        assert settings.database_url == "postgresql://u:p@localhost/portfolio"

    def test_invalid_chunk_years_rejected(self, monkeypatch) -> None:
        monkeypatch.setenv("BENCHCACHE_CHUNK_YEARS", "0")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)
