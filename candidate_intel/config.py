"""Application configuration with validation."""
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Scoring pipeline settings, overridable from the environment or .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Candidate Intelligence Scoring"
    APP_VERSION: str = "3.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # Scoring
    DEFAULT_ALGORITHM: str = "12-dimensional"
    MULTIPLIER_CAP: float = Field(default=1.2, ge=1.0, le=1.2)

    # Consistency engine
    GAMING_THRESHOLD: float = Field(default=0.8, gt=0.0, le=1.0)

    # Benchmarking
    BENCHMARK_BUCKETS: int = Field(default=10, ge=1, le=100)
    TOP_PERFORMER_PERCENTILE: float = Field(default=0.9, ge=0.0, le=1.0)
    COMMON_TRAIT_THRESHOLD: float = Field(default=0.6, ge=0.0, le=1.0)

    # Telemetry: stress indicator weights and level thresholds (points)
    STRESS_WEIGHT_RAPID_POINTER: int = Field(default=1, ge=0)
    STRESS_WEIGHT_RAPID_CLICKING: int = Field(default=3, ge=0)
    STRESS_WEIGHT_TAB_SWITCH: int = Field(default=2, ge=0)
    STRESS_MEDIUM_THRESHOLD: int = Field(default=5, ge=1)
    STRESS_HIGH_THRESHOLD: int = Field(default=15, ge=1)

    # Telemetry: pointer and click heuristics
    RAPID_POINTER_VELOCITY: float = Field(default=5.0, gt=0, description="px/ms")
    ERRATIC_VARIANCE_THRESHOLD: float = Field(default=10000.0, gt=0, description="(px/s)^2")
    RAPID_CLICK_INTERVAL_MS: int = Field(default=500, ge=1)
    UNUSUAL_PAUSE_MS: int = Field(default=30000, ge=1000)

    @field_validator("DEFAULT_ALGORITHM")
    @classmethod
    def validate_algorithm_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("DEFAULT_ALGORITHM must not be blank")
        return v.strip()

    @model_validator(mode="after")
    def validate_stress_thresholds(self):
        """Medium stress band must sit below the high band."""
        if self.STRESS_MEDIUM_THRESHOLD >= self.STRESS_HIGH_THRESHOLD:
            raise ValueError(
                "STRESS_MEDIUM_THRESHOLD must be lower than STRESS_HIGH_THRESHOLD, "
                f"got {self.STRESS_MEDIUM_THRESHOLD} >= {self.STRESS_HIGH_THRESHOLD}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
