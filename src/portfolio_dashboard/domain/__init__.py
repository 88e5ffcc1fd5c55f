"""Domain layer - pure business models with no external dependencies."""

from portfolio_dashboard.domain.models import Exchange, RefreshState, Holding

__all__ = [
    "Exchange",
    "RefreshState",
    "Holding",
]
