"""Single-symbol market data lookup."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from portfolio_dashboard.api.deps import get_market_data_service
from portfolio_dashboard.api.schemas import ErrorResponse, StockQuoteResponse
from portfolio_dashboard.services import MarketDataService

router = APIRouter(prefix="/api/stocks", tags=["stocks"])


@router.get(
    "",
    response_model=StockQuoteResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
def get_stock(
    symbol: Optional[str] = Query(None, description="Ticker with exchange suffix, e.g. HDFCBANK.NS"),
    market: MarketDataService = Depends(get_market_data_service),
) -> StockQuoteResponse:
    """Get current price, P/E ratio and earnings for one symbol."""
    data = market.lookup(symbol)

    return StockQuoteResponse(
        symbol=data.symbol,
        current_price=data.current_price,
        pe_ratio=data.pe_ratio,
        earnings=data.latest_earnings,
    )
