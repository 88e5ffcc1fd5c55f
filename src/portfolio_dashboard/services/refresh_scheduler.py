"""
Refresh scheduler: drives the fetch-resolve-aggregate cycle on an interval.

IDLE -> REFRESHING -> IDLE (new snapshot) or ERROR (prior snapshot kept).
ERROR is shown for `error_hold_seconds`, then the status reads IDLE again with
the failure still reported in `message` and `last_error_at` until a cycle
succeeds. Ticks keep firing throughout. At most one cycle runs at a time; a
tick that arrives mid-cycle is skipped, not queued.
"""

import dataclasses
import logging
import threading
from datetime import datetime
from typing import Callable, Mapping, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.interval import IntervalTrigger

from portfolio_dashboard.core.numbers import ZERO
from portfolio_dashboard.core.timezone import IST_TZ, now_ist
from portfolio_dashboard.domain.models import RefreshState
from portfolio_dashboard.domain.views import MarketData, PortfolioSnapshot, RefreshStatus
from portfolio_dashboard.holdings import HoldingsStore
from portfolio_dashboard.services.market_data_service import MarketDataService
from portfolio_dashboard.services.portfolio_aggregator import aggregate

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL_SECONDS = 15.0
DEFAULT_ERROR_HOLD_SECONDS = 5.0
REFRESH_JOB_ID = "portfolio_refresh"


class RefreshScheduler:
    """
    Publishes a fresh PortfolioSnapshot every interval.

    Consumers read `snapshot` and `status`; both are replaced wholesale, never
    patched, so a reader always sees a completed cycle.
    """

    def __init__(
        self,
        holdings: HoldingsStore,
        market_data_service: MarketDataService,
        interval_seconds: float = DEFAULT_REFRESH_INTERVAL_SECONDS,
        scheduler: Optional[BaseScheduler] = None,
        clock: Callable[[], datetime] = now_ist,
        carry_forward_prices: bool = True,
        currency: str = "INR",
        error_hold_seconds: float = DEFAULT_ERROR_HOLD_SECONDS,
    ):
        self._holdings = holdings
        self._market = market_data_service
        self._interval = interval_seconds
        self._scheduler = scheduler
        self._clock = clock
        self._carry_forward = carry_forward_prices
        self._currency = currency
        self._error_hold = error_hold_seconds

        self._cycle_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._cycle_count = 0

        # Before the first tick consumers get a complete, zero-priced snapshot
        self._snapshot = aggregate(holdings, {}, as_of=clock(), currency=currency)
        self._status = RefreshStatus()

    @property
    def snapshot(self) -> PortfolioSnapshot:
        """Most recently published snapshot."""
        with self._state_lock:
            return self._snapshot

    @property
    def status(self) -> RefreshStatus:
        with self._state_lock:
            status = self._status
        if status.state == RefreshState.ERROR and self._error_hold_elapsed(status):
            return dataclasses.replace(status, state=RefreshState.IDLE)
        return status

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def start(self) -> None:
        """Run a cycle immediately, then every interval."""
        if self._scheduler is None:
            self._scheduler = BackgroundScheduler(timezone=IST_TZ)

        self._scheduler.add_job(
            self.refresh,
            trigger=IntervalTrigger(seconds=self._interval),
            id=REFRESH_JOB_ID,
            next_run_time=self._clock(),
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        if not self._scheduler.running:
            self._scheduler.start()
        logger.info("Refresh scheduler started (every %ss)", self._interval)

    def stop(self, wait: bool = False) -> None:
        """Stop future ticks; an in-flight cycle is allowed to finish."""
        if self._scheduler is not None and self._scheduler.running:
            self._scheduler.shutdown(wait=wait)
            logger.info("Refresh scheduler stopped")

    def refresh(self) -> bool:
        """
        Run one complete cycle synchronously.

        Returns True when a new snapshot was published, False when the tick
        was skipped or the cycle failed.
        """
        if not self._cycle_lock.acquire(blocking=False):
            logger.info("Refresh already in flight; skipping tick")
            return False

        try:
            self._set_status(RefreshState.REFRESHING)
            try:
                market_data = self._market.resolve_many(self._holdings.symbols())
                if self._carry_forward:
                    market_data = self._carry_forward_prices(market_data)
                snapshot = aggregate(
                    self._holdings,
                    market_data,
                    as_of=self._clock(),
                    currency=self._currency,
                )
            except Exception as e:
                logger.exception("Refresh cycle failed")
                self._publish_error(str(e) or type(e).__name__)
                return False

            self._publish(snapshot)
            return True
        finally:
            self._cycle_lock.release()

    def _carry_forward_prices(self, market_data: Mapping[str, MarketData]) -> dict[str, MarketData]:
        """Freeze the previous cycle's price for symbols whose new price is unavailable."""
        previous = {s.symbol: s.current_price for s in self.snapshot.stocks if s.current_price > ZERO}
        result = dict(market_data)
        for symbol, data in market_data.items():
            if data.current_price == ZERO and symbol in previous:
                logger.info("No new price for %s; keeping %s from previous cycle", symbol, previous[symbol])
                result[symbol] = dataclasses.replace(data, current_price=previous[symbol])
        return result

    def _error_hold_elapsed(self, status: RefreshStatus) -> bool:
        if status.last_error_at is None:
            return True
        return (self._clock() - status.last_error_at).total_seconds() >= self._error_hold

    def _set_status(self, state: RefreshState) -> None:
        with self._state_lock:
            self._status = dataclasses.replace(self._status, state=state)

    def _publish(self, snapshot: PortfolioSnapshot) -> None:
        with self._state_lock:
            self._cycle_count += 1
            self._snapshot = snapshot
            self._status = RefreshStatus(
                state=RefreshState.IDLE,
                last_refreshed_at=snapshot.as_of,
                last_error_at=self._status.last_error_at,
                cycle_count=self._cycle_count,
            )
        logger.debug("Published snapshot #%d", self._cycle_count)

    def _publish_error(self, message: str) -> None:
        with self._state_lock:
            self._status = dataclasses.replace(
                self._status,
                state=RefreshState.ERROR,
                message=message,
                last_error_at=self._clock(),
            )
