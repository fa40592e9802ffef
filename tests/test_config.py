# tests/test_config.py

"""
Settings, logging setup and dependency wiring tests
"""

import pytest
import structlog
from pydantic import ValidationError

from score_engine.config import Settings, get_settings
from score_engine.core import dependencies
from score_engine.logging_config import configure_logging
from score_engine.models import EngineerLevel
from score_engine.scoring.final_score_calculator import FinalScoreCalculator


@pytest.fixture
def clean_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clean_dependencies():
    dependencies.reset_dependencies()
    yield
    dependencies.reset_dependencies()


@pytest.fixture
def restore_structlog():
    yield
    structlog.reset_defaults()


class TestSettings:
    """Tests for Settings defaults and validation."""

    def test_defaults(self):
        """Test that unset fields take their documented defaults."""
        settings = Settings()
        assert settings.APP_ENV == "development"
        assert settings.DEFAULT_ENGINEER_LEVEL == "MID"
        assert settings.BATCH_CONCURRENCY == 10
        assert settings.ADJUSTMENT_REQUIRES_LOCK is True
        assert settings.REJECTION_REASON_REQUIRED is True

    def test_environment_override(self, monkeypatch, clean_settings_cache):
        """Test that environment variables override defaults through get_settings()."""
        monkeypatch.setenv("DEFAULT_ENGINEER_LEVEL", "SENIOR")
        monkeypatch.setenv("BATCH_CONCURRENCY", "4")
        settings = get_settings()
        assert settings.DEFAULT_ENGINEER_LEVEL == "SENIOR"
        assert settings.BATCH_CONCURRENCY == 4
        assert FinalScoreCalculator().default_level == EngineerLevel.SENIOR

    def test_get_settings_is_cached(self, clean_settings_cache):
        """Test that get_settings() returns one cached instance."""
        assert get_settings() is get_settings()

    def test_debug_logging_refused_in_production(self):
        """Test that DEBUG logging is refused in production."""
        with pytest.raises(ValidationError):
            Settings(APP_ENV="production", LOG_LEVEL="DEBUG")

    def test_production_with_info_logging(self):
        """Test that production accepts INFO logging."""
        assert Settings(APP_ENV="production", LOG_LEVEL="INFO").APP_ENV == "production"

    @pytest.mark.parametrize("value", [0, 101])
    def test_batch_concurrency_bounds(self, value):
        """Test that BATCH_CONCURRENCY outside 1..100 is rejected."""
        with pytest.raises(ValidationError):
            Settings(BATCH_CONCURRENCY=value)

    def test_unknown_default_level_rejected(self):
        """Test that DEFAULT_ENGINEER_LEVEL must name a known level."""
        with pytest.raises(ValidationError):
            Settings(DEFAULT_ENGINEER_LEVEL="INTERN")


class TestLogging:
    """Tests for structlog configuration."""

    @pytest.mark.parametrize("log_format", ["json", "console"])
    def test_configure_logging(self, log_format, restore_structlog):
        """Test that LOG_FORMAT selects the matching renderer."""
        configure_logging(Settings(LOG_FORMAT=log_format, LOG_LEVEL="WARNING"))
        assert structlog.is_configured()
        renderer = structlog.get_config()["processors"][-1]
        expected = (
            structlog.processors.JSONRenderer
            if log_format == "json"
            else structlog.dev.ConsoleRenderer
        )
        assert isinstance(renderer, expected)


class TestDependencies:
    """Tests for cached dependency getters."""

    def test_getters_are_cached(self, clean_dependencies):
        """Test that getters return the same instance on each call."""
        assert dependencies.get_final_score_repository() is dependencies.get_final_score_repository()
        assert dependencies.get_final_score_service() is dependencies.get_final_score_service()

    def test_services_share_final_score_repository(self, clean_dependencies):
        """Test that both services share one repository and directory."""
        final_scores = dependencies.get_final_score_service()
        adjustments = dependencies.get_score_adjustment_service()
        assert final_scores.repository is adjustments.final_scores
        assert final_scores.directory is adjustments.directory

    def test_reset_drops_cached_instances(self, clean_dependencies):
        """Test that reset_dependencies() forces fresh instances."""
        before = dependencies.get_score_adjustment_repository()
        dependencies.reset_dependencies()
        assert dependencies.get_score_adjustment_repository() is not before
