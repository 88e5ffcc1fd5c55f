"""Domain models package."""

from portfolio_dashboard.domain.models.enums import Exchange, RefreshState
from portfolio_dashboard.domain.models.holding import (
    DEFAULT_SECTOR,
    Holding,
    to_symbol,
    parse_symbol,
)

__all__ = [
    "Exchange",
    "RefreshState",
    "DEFAULT_SECTOR",
    "Holding",
    "to_symbol",
    "parse_symbol",
]
