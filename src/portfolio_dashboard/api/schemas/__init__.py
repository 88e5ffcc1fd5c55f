"""Pydantic schemas for API responses."""

from portfolio_dashboard.api.schemas.stocks import StockQuoteResponse, ErrorResponse
from portfolio_dashboard.api.schemas.portfolio import (
    EnrichedStockResponse,
    SectorSummaryResponse,
    RefreshStatusResponse,
    PortfolioResponse,
)

__all__ = [
    "StockQuoteResponse",
    "ErrorResponse",
    "EnrichedStockResponse",
    "SectorSummaryResponse",
    "RefreshStatusResponse",
    "PortfolioResponse",
]
