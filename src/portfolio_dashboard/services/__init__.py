"""Service layer - market data resolution, aggregation and scheduling."""

from portfolio_dashboard.services.market_data_service import MarketDataService
from portfolio_dashboard.services.portfolio_aggregator import aggregate, enrich_holding, summarize_sectors
from portfolio_dashboard.services.refresh_scheduler import RefreshScheduler

__all__ = [
    "MarketDataService",
    "aggregate",
    "enrich_holding",
    "summarize_sectors",
    "RefreshScheduler",
]
