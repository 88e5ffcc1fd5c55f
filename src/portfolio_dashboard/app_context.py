"""Application context for in-process service management.

Builds the holdings store, market data resolver and refresh scheduler from
settings. Used by the FastAPI lifespan and by anything embedding the core
without HTTP.
"""

import logging
from typing import Optional

from portfolio_dashboard.config.settings import Settings, get_settings
from portfolio_dashboard.holdings import HoldingsStore, load_holdings
from portfolio_dashboard.providers import (
    GoogleFinanceScraper,
    QuoteProvider,
    StubQuoteProvider,
    YahooQuoteProvider,
)
from portfolio_dashboard.services import MarketDataService, RefreshScheduler

logger = logging.getLogger(__name__)


def build_quote_provider(settings: Settings) -> QuoteProvider:
    """Select the primary quote source from settings."""
    if settings.market_data_provider == "stub":
        return StubQuoteProvider()
    return YahooQuoteProvider()


class AppContext:
    """
    Application context holding the long-lived services.

    Services are created lazily; `start` begins periodic refresh and `close`
    stops it and releases HTTP resources.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        holdings: Optional[HoldingsStore] = None,
        market_data_service: Optional[MarketDataService] = None,
        scheduler: Optional[RefreshScheduler] = None,
    ):
        self._settings = settings or get_settings()
        self._holdings = holdings
        self._market_data_service = market_data_service
        self._scraper: Optional[GoogleFinanceScraper] = None
        self._scheduler = scheduler

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def holdings(self) -> HoldingsStore:
        if self._holdings is None:
            self._holdings = load_holdings(self._settings.get_holdings_path())
        return self._holdings

    @property
    def market_data_service(self) -> MarketDataService:
        if self._market_data_service is None:
            self._scraper = GoogleFinanceScraper(
                user_agent=self._settings.user_agent,
                timeout_seconds=self._settings.scrape_timeout_seconds,
            )
            self._market_data_service = MarketDataService(
                quote_provider=build_quote_provider(self._settings),
                scraper=self._scraper,
                quote_timeout_seconds=self._settings.quote_timeout_seconds,
                scrape_timeout_seconds=self._settings.scrape_timeout_seconds,
                max_workers=self._settings.resolver_max_workers,
            )
        return self._market_data_service

    @property
    def scheduler(self) -> RefreshScheduler:
        if self._scheduler is None:
            self._scheduler = RefreshScheduler(
                holdings=self.holdings,
                market_data_service=self.market_data_service,
                interval_seconds=self._settings.refresh_interval_seconds,
                carry_forward_prices=self._settings.carry_forward_prices,
                currency=self._settings.display_currency,
                error_hold_seconds=self._settings.error_hold_seconds,
            )
        return self._scheduler

    def start(self) -> None:
        """Start periodic refresh (first cycle runs immediately)."""
        self.scheduler.start()

    def close(self) -> None:
        """Stop the scheduler and close the scrape client."""
        if self._scheduler is not None:
            self._scheduler.stop()
        if self._scraper is not None:
            self._scraper.close()
            self._scraper = None


# Global context instance (set by the application lifespan)
_context: Optional[AppContext] = None


def get_context() -> AppContext:
    """Return the current application context, creating it on first use."""
    global _context
    if _context is None:
        _context = AppContext()
    return _context


def set_context(context: Optional[AppContext]) -> None:
    """Replace the global application context."""
    global _context
    _context = context
