"""Holdings store."""

from portfolio_dashboard.holdings.store import (
    HoldingsStore,
    load_holdings,
    holdings_from_records,
    parse_holding,
)

__all__ = [
    "HoldingsStore",
    "load_holdings",
    "holdings_from_records",
    "parse_holding",
]
