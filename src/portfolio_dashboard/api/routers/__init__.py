"""API routers package."""

from portfolio_dashboard.api.routers.stocks import router as stocks_router
from portfolio_dashboard.api.routers.portfolio import router as portfolio_router

__all__ = [
    "stocks_router",
    "portfolio_router",
]
