"""Application configuration with validation."""
from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Score engine settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Performance Review Score Engine"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "console"

    # Scoring
    DEFAULT_ENGINEER_LEVEL: Literal["JUNIOR", "MID", "SENIOR", "LEAD", "MANAGER"] = "MID"
    WEIGHT_SUM_TOLERANCE: float = Field(default=0.001, gt=0, le=0.01)

    # Cycle batches
    BATCH_CONCURRENCY: int = Field(default=10, ge=1, le=100)

    # Score adjustment workflow
    ADJUSTMENT_REQUIRES_LOCK: bool = True
    REJECTION_REASON_REQUIRED: bool = True

    @model_validator(mode="after")
    def validate_production_settings(self):
        """DEBUG logs carry evaluation details and are refused in production."""
        if self.APP_ENV == "production" and self.LOG_LEVEL == "DEBUG":
            raise ValueError("LOG_LEVEL must not be DEBUG in production")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
