"""Smoke tests to verify the application wires together."""

from decimal import Decimal

from portfolio_dashboard.app_context import AppContext, build_quote_provider
from portfolio_dashboard.config.settings import Settings
from portfolio_dashboard.domain.models import Exchange, Holding, RefreshState
from portfolio_dashboard.domain.views import MarketData, RefreshStatus
from portfolio_dashboard.providers import StubQuoteProvider, YahooQuoteProvider


class TestDomainModels:
    """Test domain model creation."""

    def test_create_holding(self):
        """Test Holding instantiation and derived symbol."""
        holding = Holding(
            stock_name="TATAPOWER",
            purchase_price=Decimal("224"),
            quantity=225,
            exchange=Exchange.NSE,
            sector="Power",
        )
        assert holding.symbol == "TATAPOWER.NS"
        assert holding.sector == "Power"

    def test_holding_defaults(self):
        holding = Holding(stock_name="SUZLON", purchase_price=Decimal("44"), quantity=450)
        assert holding.exchange == Exchange.NSE
        assert holding.sector == "Unknown"

    def test_exchange_codes(self):
        assert Exchange.NSE.yahoo_suffix == ".NS"
        assert Exchange.BSE.yahoo_suffix == ".BO"
        assert Exchange.NSE.google_code == "NSE"
        assert Exchange.BSE.google_code == "BOM"

    def test_zero_market_data(self):
        data = MarketData.zero("INFY.NS")
        assert data.current_price == Decimal("0")
        assert data.pe_ratio == Decimal("0")
        assert data.latest_earnings == Decimal("0")

    def test_default_status(self):
        status = RefreshStatus()
        assert status.state == RefreshState.IDLE
        assert status.cycle_count == 0
        assert status.last_refreshed_at is None


class TestAppContext:
    """Test AppContext wiring."""

    def test_provider_selection(self):
        assert isinstance(
            build_quote_provider(Settings(_env_file=None, market_data_provider="stub")),
            StubQuoteProvider,
        )
        assert isinstance(
            build_quote_provider(Settings(_env_file=None, market_data_provider="yahoo")),
            YahooQuoteProvider,
        )

    def test_context_builds_services_lazily(self, test_settings, sample_holdings):
        ctx = AppContext(settings=test_settings, holdings=sample_holdings)

        scheduler = ctx.scheduler

        assert ctx.holdings is sample_holdings
        assert ctx.market_data_service is not None
        assert scheduler.running is False
        assert len(scheduler.snapshot.stocks) == 3

        ctx.close()


class TestAPIEndpoints:
    """Test FastAPI endpoints."""

    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
