"""View models package."""

from portfolio_dashboard.domain.views.portfolio import (
    Quote,
    Fundamentals,
    MarketData,
    EnrichedStock,
    SectorSummary,
    PortfolioSnapshot,
    RefreshStatus,
    LoadSummary,
)

__all__ = [
    "Quote",
    "Fundamentals",
    "MarketData",
    "EnrichedStock",
    "SectorSummary",
    "PortfolioSnapshot",
    "RefreshStatus",
    "LoadSummary",
]
