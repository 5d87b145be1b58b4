"""
Application settings loaded from environment / .env file
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Policy values and service configuration"""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Recommendations: |actual - expected| above this (percentage points) is reported
    recommendation_variance_threshold: float = Field(default=5.0, ge=0.0)

    # FinalScore policy
    final_score_match_weight: float = Field(default=0.6, ge=0.0)
    final_score_balance_weight: float = Field(default=0.4, ge=0.0)
    final_score_variance_ceiling: float = Field(default=100.0, gt=0.0)

    # Upload handling
    max_upload_mb: int = 10
    allowed_extensions: List[str] = [".xlsx", ".csv"]

    # Service
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    """Singleton accessor for application settings."""
    return Settings()
