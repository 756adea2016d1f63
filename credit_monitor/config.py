"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CREDIT_MONITOR_",
        extra="ignore",
    )

    # Service
    service_name: str = "credit-monitor"
    log_level: str = "INFO"

    # Population
    record_count: int = 50
    random_seed: Optional[int] = None  # None = seeded from OS entropy
    recent_applications_limit: int = 5

    # Score domain
    score_min: int = 400
    score_max: int = 800

    # Live update feed
    feed_enabled: bool = True
    feed_interval_seconds: float = 5.0
    score_perturbation: int = 5  # Max absolute delta applied per tick


settings = Settings()
