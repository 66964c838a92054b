"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "NEPSE Analyzer"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS (Frontend URL)
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Snapshot source (JSON dump of daily snapshots, loaded at startup)
    snapshot_file: Optional[str] = None

    # Subscription tier: bearer tokens that unlock the full verdict
    pro_access_tokens: list[str] = []

    # Indicator periods
    rsi_period: int = 14
    ema_short_period: int = 20
    ema_long_period: int = 50
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9

    # History windows (trading days)
    volume_lookback: int = 20
    history_limit: int = 50
    min_history_days: int = 35

    # Scoring
    base_score: float = 50.0
    rsi_oversold: float = 30.0
    rsi_overbought: float = 70.0
    rsi_weight: float = 20.0
    trend_weight: float = 15.0
    macd_weight: float = 10.0
    volume_weight: float = 15.0
    volume_spike_multiplier: float = 1.5

    # Recommendation thresholds
    strong_buy_threshold: float = 70.0
    buy_threshold: float = 60.0
    sell_threshold: float = 40.0
    strong_sell_threshold: float = 25.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
