"""Pydantic schemas for portfolio endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from portfolio_dashboard.domain.models import Exchange, RefreshState


class EnrichedStockResponse(BaseModel):
    """Response schema for one portfolio row."""

    stock_name: str
    symbol: str
    exchange: Exchange
    sector: str
    purchase_price: Decimal
    quantity: int
    current_price: Decimal
    pe_ratio: Decimal
    latest_earnings: Decimal
    total_investment: Decimal
    current_value: Decimal
    gain_loss: Decimal
    gain_loss_percentage: Decimal
    portfolio_percentage: Decimal


class SectorSummaryResponse(BaseModel):
    """Response schema for one sector roll-up."""

    sector: str
    total_investment: Decimal
    current_value: Decimal
    gain_loss: Decimal
    gain_loss_percentage: Decimal
    portfolio_percentage: Decimal
    stock_count: int


class RefreshStatusResponse(BaseModel):
    """Response schema for scheduler status."""

    state: RefreshState
    message: Optional[str] = None
    last_refreshed_at: Optional[datetime] = None
    last_error_at: Optional[datetime] = None
    cycle_count: int = 0


class PortfolioResponse(BaseModel):
    """Response schema for the full portfolio snapshot."""

    total_investment: Decimal
    current_value: Decimal
    total_gain_loss: Decimal
    total_gain_loss_percentage: Decimal
    currency: str
    as_of: Optional[datetime] = None
    stocks: list[EnrichedStockResponse]
    sector_summaries: list[SectorSummaryResponse]
    status: RefreshStatusResponse
