"""Application settings and configuration."""

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


def get_default_holdings_path() -> Path:
    """Return the bundled sample holdings file."""
    return Path(__file__).resolve().parent.parent / "data" / "portfolio.json"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Portfolio Dashboard"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Holdings store (pre-generated JSON list)
    holdings_path: Optional[Path] = None

    # Refresh cycle
    refresh_interval_seconds: float = 15.0
    carry_forward_prices: bool = True
    error_hold_seconds: float = 5.0

    # Market data settings
    market_data_provider: Literal["yahoo", "stub"] = "yahoo"
    quote_timeout_seconds: float = 10.0
    scrape_timeout_seconds: float = 10.0
    resolver_max_workers: int = 8
    user_agent: str = DEFAULT_USER_AGENT

    display_currency: str = "INR"

    def get_holdings_path(self) -> Path:
        """Get the holdings file, falling back to the bundled sample."""
        return self.holdings_path or get_default_holdings_path()


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
