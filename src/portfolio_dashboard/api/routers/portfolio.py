"""Portfolio snapshot endpoints."""

from fastapi import APIRouter, Depends

from portfolio_dashboard.api.deps import get_refresh_scheduler
from portfolio_dashboard.api.schemas import (
    EnrichedStockResponse,
    PortfolioResponse,
    RefreshStatusResponse,
    SectorSummaryResponse,
)
from portfolio_dashboard.domain.views import RefreshStatus
from portfolio_dashboard.services import RefreshScheduler

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


def _status_response(status: RefreshStatus) -> RefreshStatusResponse:
    return RefreshStatusResponse(
        state=status.state,
        message=status.message,
        last_refreshed_at=status.last_refreshed_at,
        last_error_at=status.last_error_at,
        cycle_count=status.cycle_count,
    )


@router.get("", response_model=PortfolioResponse)
def get_portfolio(
    scheduler: RefreshScheduler = Depends(get_refresh_scheduler),
) -> PortfolioResponse:
    """Get the latest published portfolio snapshot."""
    # Read once so totals, rows and sectors come from the same cycle
    snapshot = scheduler.snapshot

    return PortfolioResponse(
        total_investment=snapshot.total_investment,
        current_value=snapshot.current_value,
        total_gain_loss=snapshot.total_gain_loss,
        total_gain_loss_percentage=snapshot.total_gain_loss_percentage,
        currency=snapshot.currency,
        as_of=snapshot.as_of,
        stocks=[
            EnrichedStockResponse.model_validate(stock, from_attributes=True)
            for stock in snapshot.stocks
        ],
        sector_summaries=[
            SectorSummaryResponse.model_validate(sector, from_attributes=True)
            for sector in snapshot.sector_summaries
        ],
        status=_status_response(scheduler.status),
    )


@router.get("/sectors", response_model=list[SectorSummaryResponse])
def get_sectors(
    scheduler: RefreshScheduler = Depends(get_refresh_scheduler),
) -> list[SectorSummaryResponse]:
    """Get sector roll-ups from the latest snapshot."""
    return [
        SectorSummaryResponse.model_validate(sector, from_attributes=True)
        for sector in scheduler.snapshot.sector_summaries
    ]


@router.get("/status", response_model=RefreshStatusResponse)
def get_status(
    scheduler: RefreshScheduler = Depends(get_refresh_scheduler),
) -> RefreshStatusResponse:
    """Get the refresh scheduler status."""
    return _status_response(scheduler.status)
