"""
Portfolio aggregator: joins holdings with market data and rolls up totals.

Pure functions with no I/O. Monetary amounts stay exact Decimals; percentages
are rounded to cents and defined as 0 whenever the base amount is 0.
"""

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from portfolio_dashboard.core.numbers import ZERO, safe_percentage
from portfolio_dashboard.domain.models import Holding
from portfolio_dashboard.domain.views import (
    EnrichedStock,
    MarketData,
    PortfolioSnapshot,
    SectorSummary,
)


def enrich_holding(
    holding: Holding,
    market_data: MarketData,
    portfolio_investment: Decimal,
) -> EnrichedStock:
    """
    Compute per-stock metrics.

    total_investment = purchase_price × quantity
    current_value = current_price × quantity
    gain_loss = current_value - total_investment
    """
    quantity = Decimal(holding.quantity)
    total_investment = holding.purchase_price * quantity
    current_value = market_data.current_price * quantity
    gain_loss = current_value - total_investment

    return EnrichedStock(
        stock_name=holding.stock_name,
        purchase_price=holding.purchase_price,
        quantity=holding.quantity,
        exchange=holding.exchange,
        sector=holding.sector,
        symbol=holding.symbol,
        current_price=market_data.current_price,
        pe_ratio=market_data.pe_ratio,
        latest_earnings=market_data.latest_earnings,
        total_investment=total_investment,
        current_value=current_value,
        gain_loss=gain_loss,
        gain_loss_percentage=safe_percentage(gain_loss, total_investment),
        portfolio_percentage=safe_percentage(total_investment, portfolio_investment),
    )


def summarize_sectors(
    stocks: Iterable[EnrichedStock],
    portfolio_investment: Decimal,
) -> tuple[SectorSummary, ...]:
    """Group stocks by sector label in first-seen order and total each group."""
    groups: dict[str, list[EnrichedStock]] = {}
    for stock in stocks:
        groups.setdefault(stock.sector, []).append(stock)

    summaries = []
    for sector, members in groups.items():
        total_investment = sum((s.total_investment for s in members), ZERO)
        current_value = sum((s.current_value for s in members), ZERO)
        gain_loss = current_value - total_investment
        summaries.append(
            SectorSummary(
                sector=sector,
                total_investment=total_investment,
                current_value=current_value,
                gain_loss=gain_loss,
                gain_loss_percentage=safe_percentage(gain_loss, total_investment),
                portfolio_percentage=safe_percentage(total_investment, portfolio_investment),
                stock_count=len(members),
            )
        )
    return tuple(summaries)


def aggregate(
    holdings: Iterable[Holding],
    market_data: Mapping[str, MarketData],
    as_of: Optional[datetime] = None,
    currency: str = "INR",
) -> PortfolioSnapshot:
    """
    Build a complete PortfolioSnapshot.

    Holdings without a market data entry are treated as zero-filled.
    Stock order follows holdings order.
    """
    holdings = list(holdings)
    resolved = [
        market_data.get(h.symbol) or MarketData.zero(h.symbol)
        for h in holdings
    ]

    total_investment = sum(
        (h.purchase_price * Decimal(h.quantity) for h in holdings),
        ZERO,
    )
    stocks = tuple(
        enrich_holding(h, md, total_investment)
        for h, md in zip(holdings, resolved)
    )
    current_value = sum((s.current_value for s in stocks), ZERO)
    total_gain_loss = current_value - total_investment

    return PortfolioSnapshot(
        total_investment=total_investment,
        current_value=current_value,
        total_gain_loss=total_gain_loss,
        total_gain_loss_percentage=safe_percentage(total_gain_loss, total_investment),
        stocks=stocks,
        sector_summaries=summarize_sectors(stocks, total_investment),
        as_of=as_of,
        currency=currency,
    )
