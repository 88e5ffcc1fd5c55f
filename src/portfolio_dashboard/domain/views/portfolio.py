"""View models for market data and portfolio outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from portfolio_dashboard.domain.models import Exchange, RefreshState

_ZERO = Decimal("0")


@dataclass(frozen=True)
class Quote:
    """Raw quote from the primary source; None marks a field the source omitted."""

    symbol: str
    current_price: Optional[Decimal] = None
    pe_ratio: Optional[Decimal] = None
    latest_earnings: Optional[Decimal] = None


@dataclass(frozen=True)
class Fundamentals:
    """Values scraped from the supplemental page; 0 means not extracted."""

    pe_ratio: Decimal = _ZERO
    latest_earnings: Decimal = _ZERO


@dataclass(frozen=True)
class MarketData:
    """
    Resolved price and valuation fields for one symbol.

    Every field is always numeric; 0 signals "unavailable".
    """

    symbol: str
    current_price: Decimal = _ZERO
    pe_ratio: Decimal = _ZERO
    latest_earnings: Decimal = _ZERO

    @classmethod
    def zero(cls, symbol: str) -> "MarketData":
        return cls(symbol=symbol)


@dataclass(frozen=True)
class EnrichedStock:
    """A holding merged with its market data plus derived metrics."""

    stock_name: str
    purchase_price: Decimal
    quantity: int
    exchange: Exchange
    sector: str
    symbol: str
    current_price: Decimal
    pe_ratio: Decimal
    latest_earnings: Decimal
    total_investment: Decimal
    current_value: Decimal
    gain_loss: Decimal
    gain_loss_percentage: Decimal
    portfolio_percentage: Decimal


@dataclass(frozen=True)
class SectorSummary:
    """Aggregated totals for all holdings sharing a sector label."""

    sector: str
    total_investment: Decimal
    current_value: Decimal
    gain_loss: Decimal
    gain_loss_percentage: Decimal
    portfolio_percentage: Decimal
    stock_count: int


@dataclass(frozen=True)
class PortfolioSnapshot:
    """Complete, internally consistent portfolio state at one point in time."""

    total_investment: Decimal
    current_value: Decimal
    total_gain_loss: Decimal
    total_gain_loss_percentage: Decimal
    stocks: tuple[EnrichedStock, ...] = ()
    sector_summaries: tuple[SectorSummary, ...] = ()
    as_of: Optional[datetime] = None
    currency: str = "INR"


@dataclass(frozen=True)
class RefreshStatus:
    """Scheduler state exposed to consumers."""

    state: RefreshState = RefreshState.IDLE
    message: Optional[str] = None
    last_refreshed_at: Optional[datetime] = None
    last_error_at: Optional[datetime] = None
    cycle_count: int = 0


@dataclass
class LoadSummary:
    """Summary of a holdings load."""

    loaded_count: int = 0
    skipped_count: int = 0
    errors: list[str] = field(default_factory=list)
