"""
Pytest configuration and fixtures for portfolio dashboard tests.

This module provides:
- Holding factories and a small sample holdings store
- Deterministic, failing and scripted quote providers
- Scripted fundamentals scrapers
- A manual clock for scheduler tests
- Service and API client fixtures
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Optional
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from portfolio_dashboard.main import app
from portfolio_dashboard.api.deps import get_app_context
from portfolio_dashboard.app_context import AppContext
from portfolio_dashboard.config.settings import Settings, reset_settings
from portfolio_dashboard.core.exceptions import UpstreamUnavailableError
from portfolio_dashboard.core.timezone import IST_TZ
from portfolio_dashboard.domain.models import Exchange, Holding
from portfolio_dashboard.domain.views import Fundamentals, MarketData, Quote
from portfolio_dashboard.holdings import HoldingsStore
from portfolio_dashboard.services import MarketDataService, RefreshScheduler


# =============================================================================
# TIME HELPERS
# =============================================================================


def ist_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in Asia/Kolkata timezone."""
    return IST_TZ.localize(datetime(year, month, day, hour, minute, second))


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or ist_datetime(2024, 6, 14, 10, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def clock() -> ManualClock:
    """Deterministic clock for scheduler tests."""
    return ManualClock()


# =============================================================================
# HOLDING HELPERS
# =============================================================================


def make_holding(
    stock_name: str = "ACME",
    purchase_price: str = "100",
    quantity: int = 10,
    exchange: Exchange = Exchange.NSE,
    sector: str = "Tech",
) -> Holding:
    """Create a Holding with Decimal price from a string."""
    return Holding(
        stock_name=stock_name,
        purchase_price=Decimal(purchase_price),
        quantity=quantity,
        exchange=exchange,
        sector=sector,
    )


def make_market_data(
    symbol: str,
    current_price: str = "0",
    pe_ratio: str = "0",
    latest_earnings: str = "0",
) -> MarketData:
    """Create MarketData with Decimal fields from strings."""
    return MarketData(
        symbol=symbol,
        current_price=Decimal(current_price),
        pe_ratio=Decimal(pe_ratio),
        latest_earnings=Decimal(latest_earnings),
    )


@pytest.fixture
def holding_factory() -> Callable[..., Holding]:
    """Factory for creating test holdings."""
    return make_holding


@pytest.fixture
def sample_holdings() -> HoldingsStore:
    """Three holdings across two sectors and both exchanges."""
    return HoldingsStore([
        make_holding("HDFCBANK", "1490", 50, Exchange.NSE, "Financial Sector"),
        make_holding("INFY", "1500", 20, Exchange.NSE, "Tech Sector"),
        make_holding("SUZLON", "44", 450, Exchange.BSE, "Financial Sector"),
    ])


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class DeterministicQuoteProvider:
    """
    Deterministic quote provider for testing.

    Provides fixed quotes with no randomness; unknown symbols raise.
    """

    FIXED_QUOTES = {
        "HDFCBANK.NS": (Decimal("1720.45"), Decimal("19.80"), Decimal("86.90")),
        "INFY.NS": (Decimal("1875.30"), Decimal("28.10"), Decimal("66.73")),
        "SUZLON.BO": (Decimal("64.18"), None, None),
        "ACME.NS": (Decimal("150"), Decimal("20"), Decimal("5")),
    }

    def __init__(self):
        self.calls: list[str] = []

    def get_quote(self, symbol: str) -> Quote:
        self.calls.append(symbol)
        if symbol not in self.FIXED_QUOTES:
            raise UpstreamUnavailableError(symbol, "unknown symbol")
        price, pe_ratio, earnings = self.FIXED_QUOTES[symbol]
        return Quote(
            symbol=symbol,
            current_price=price,
            pe_ratio=pe_ratio,
            latest_earnings=earnings,
        )


class FailingQuoteProvider:
    """Quote provider that always raises an exception."""

    def get_quote(self, symbol: str) -> Quote:
        raise ConnectionError("Network unavailable")


class ScriptedScraper:
    """Scraper returning canned fundamentals per symbol; unknown symbols raise."""

    def __init__(self, fundamentals: Optional[dict[str, Fundamentals]] = None):
        self.fundamentals = fundamentals or {}
        self.calls: list[str] = []

    def scrape(self, symbol: str) -> Fundamentals:
        self.calls.append(symbol)
        if symbol not in self.fundamentals:
            raise UpstreamUnavailableError(symbol, "scrape failed")
        return self.fundamentals[symbol]


class FailingScraper:
    """Scraper that always raises an exception."""

    def scrape(self, symbol: str) -> Fundamentals:
        raise TimeoutError("scrape timed out")


@pytest.fixture
def deterministic_provider() -> DeterministicQuoteProvider:
    """Provide deterministic quote provider."""
    return DeterministicQuoteProvider()


@pytest.fixture
def failing_provider() -> FailingQuoteProvider:
    """Provide a quote provider that always fails."""
    return FailingQuoteProvider()


@pytest.fixture
def scraper() -> ScriptedScraper:
    """Scraper that fills in SUZLON fundamentals."""
    return ScriptedScraper({
        "SUZLON.BO": Fundamentals(pe_ratio=Decimal("88.90"), latest_earnings=Decimal("0.72")),
    })


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def market_data_service(deterministic_provider, scraper) -> MarketDataService:
    """Provide MarketDataService over deterministic sources."""
    return MarketDataService(
        quote_provider=deterministic_provider,
        scraper=scraper,
        quote_timeout_seconds=2,
        scrape_timeout_seconds=2,
        max_workers=4,
    )


@pytest.fixture
def refresh_scheduler(sample_holdings, market_data_service, clock) -> RefreshScheduler:
    """Provide RefreshScheduler with a mock APScheduler backend."""
    backend = MagicMock()
    backend.running = False
    return RefreshScheduler(
        holdings=sample_holdings,
        market_data_service=market_data_service,
        interval_seconds=15,
        scheduler=backend,
        clock=clock,
    )


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at offline sources."""
    reset_settings()
    return Settings(
        _env_file=None,
        market_data_provider="stub",
        holdings_path=tmp_path / "portfolio.json",
    )


@pytest.fixture
def app_context(test_settings, sample_holdings, market_data_service, refresh_scheduler) -> AppContext:
    """Application context wired to deterministic services."""
    context = AppContext(
        settings=test_settings,
        holdings=sample_holdings,
        market_data_service=market_data_service,
        scheduler=refresh_scheduler,
    )
    return context


@pytest.fixture
def client(app_context) -> TestClient:
    """Provide FastAPI test client bound to the test context (lifespan not run)."""
    app.dependency_overrides[get_app_context] = lambda: app_context
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# ASSERTION HELPERS
# =============================================================================


def assert_decimal_equal(actual: Decimal, expected: Decimal, places: int = 2) -> None:
    """Assert two Decimals are equal to the given number of places."""
    quantum = Decimal(10) ** -places
    assert actual.quantize(quantum) == expected.quantize(quantum), f"{actual} != {expected}"
