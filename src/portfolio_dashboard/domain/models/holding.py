"""Holding record and symbol derivation."""

from dataclasses import dataclass
from decimal import Decimal

from portfolio_dashboard.domain.models.enums import Exchange

DEFAULT_SECTOR = "Unknown"


@dataclass(frozen=True)
class Holding:
    """
    One portfolio line item as originally purchased.

    Built once by the holdings loader; downstream code never re-validates it.
    """

    stock_name: str
    purchase_price: Decimal
    quantity: int
    exchange: Exchange = Exchange.NSE
    sector: str = DEFAULT_SECTOR

    @property
    def symbol(self) -> str:
        """Quote-source ticker, e.g. HDFCBANK.NS."""
        return to_symbol(self.stock_name, self.exchange)


def to_symbol(stock_name: str, exchange: Exchange) -> str:
    """Append the exchange suffix to a bare ticker."""
    return f"{stock_name.strip().upper()}{exchange.yahoo_suffix}"


def parse_symbol(symbol: str) -> tuple[str, Exchange]:
    """
    Split a suffixed symbol into (ticker, exchange).

    Bare tickers are assumed to list on the primary exchange.
    """
    normalized = (symbol or "").strip().upper()
    for exchange in Exchange:
        if normalized.endswith(exchange.yahoo_suffix):
            return normalized[: -len(exchange.yahoo_suffix)], exchange
    return normalized, Exchange.NSE
