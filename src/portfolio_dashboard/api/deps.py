"""Dependency injection for FastAPI."""

from fastapi import Depends

from portfolio_dashboard.app_context import AppContext, get_context
from portfolio_dashboard.services import MarketDataService, RefreshScheduler


def get_app_context() -> AppContext:
    """Provide the application context."""
    return get_context()


def get_market_data_service(
    context: AppContext = Depends(get_app_context),
) -> MarketDataService:
    """Provide MarketDataService instance."""
    return context.market_data_service


def get_refresh_scheduler(
    context: AppContext = Depends(get_app_context),
) -> RefreshScheduler:
    """Provide RefreshScheduler instance."""
    return context.scheduler
