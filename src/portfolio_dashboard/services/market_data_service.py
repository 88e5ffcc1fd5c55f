"""Market data resolver: merges the primary quote source with the supplemental scraper."""

import logging
import time
from collections import deque
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from decimal import Decimal
from typing import Iterable, Optional

from portfolio_dashboard.core.exceptions import MissingParameterError, UpstreamUnavailableError
from portfolio_dashboard.core.numbers import ZERO
from portfolio_dashboard.domain.views import Fundamentals, MarketData, Quote
from portfolio_dashboard.providers.market_data_provider import FundamentalsScraper, QuoteProvider

logger = logging.getLogger(__name__)

DEFAULT_QUOTE_TIMEOUT_SECONDS = 10.0
DEFAULT_SCRAPE_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_WORKERS = 8


class MarketDataService:
    """
    Resolves one complete MarketData record per symbol.

    The primary source's price always wins; P/E and earnings come from whichever
    source supplied a non-zero value, primary preferred. Fields neither source
    could supply are zero-filled.
    """

    def __init__(
        self,
        quote_provider: QuoteProvider,
        scraper: Optional[FundamentalsScraper] = None,
        quote_timeout_seconds: float = DEFAULT_QUOTE_TIMEOUT_SECONDS,
        scrape_timeout_seconds: float = DEFAULT_SCRAPE_TIMEOUT_SECONDS,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        self._quote_provider = quote_provider
        self._scraper = scraper
        self._quote_timeout = quote_timeout_seconds
        self._scrape_timeout = scrape_timeout_seconds
        self._max_workers = max(1, max_workers)

    def resolve(self, symbol: str) -> MarketData:
        """
        Resolve market data for one symbol. Never raises.

        Quote and scrape failures are logged and zero-filled.
        """
        try:
            symbol = _normalize(symbol)
            if not symbol:
                logger.warning("Cannot resolve blank symbol")
                return MarketData.zero("")

            try:
                quote = self._quote_provider.get_quote(symbol)
            except Exception as e:
                logger.warning("Quote fetch failed for %s: %s", symbol, e)
                quote = Quote(symbol=symbol)

            return self._merge(symbol, quote)
        except Exception:
            logger.exception("Unexpected error resolving %s", symbol)
            return MarketData.zero(symbol)

    def lookup(self, symbol: Optional[str]) -> MarketData:
        """
        Strict lookup for the query endpoint.

        Raises MissingParameterError for a blank symbol and
        UpstreamUnavailableError when the primary quote fails outright.
        The supplemental scrape is still merged best-effort.
        """
        symbol = _normalize(symbol)
        if not symbol:
            raise MissingParameterError("symbol")

        try:
            quote = self._quote_provider.get_quote(symbol)
        except UpstreamUnavailableError:
            raise
        except Exception as e:
            raise UpstreamUnavailableError(symbol, str(e) or type(e).__name__) from e

        return self._merge(symbol, quote)

    def resolve_many(self, symbols: Iterable[str]) -> dict[str, MarketData]:
        """
        Resolve all symbols concurrently and wait for every result.

        At most `max_workers` calls are in flight. Each symbol's time bound runs
        from when its call starts, so symbols still waiting for a slot are never
        charged for slow ones ahead of them. A call that overruns is zero-filled
        and abandoned: its slot is handed to the next symbol while the stuck
        thread finishes in the background. Returns symbol -> MarketData in
        input order.
        """
        unique = list(dict.fromkeys(_normalize(s) for s in symbols))
        if not unique:
            return {}

        per_symbol_timeout = self._quote_timeout + self._scrape_timeout
        waiting = deque(unique)
        in_flight: dict[Future, tuple[str, float]] = {}
        result: dict[str, MarketData] = {}

        # Sized for every symbol so an abandoned call never holds back a queued one
        executor = ThreadPoolExecutor(max_workers=len(unique), thread_name_prefix="resolver")
        try:
            while waiting or in_flight:
                while waiting and len(in_flight) < self._max_workers:
                    symbol = waiting.popleft()
                    in_flight[executor.submit(self.resolve, symbol)] = (symbol, time.monotonic())

                next_deadline = min(started + per_symbol_timeout for _, started in in_flight.values())
                done, _ = wait(
                    in_flight,
                    timeout=max(0.0, next_deadline - time.monotonic()),
                    return_when=FIRST_COMPLETED,
                )
                for future in done:
                    symbol, _ = in_flight.pop(future)
                    result[symbol] = future.result()

                now = time.monotonic()
                for future, (symbol, started) in list(in_flight.items()):
                    if now - started >= per_symbol_timeout:
                        logger.warning("Resolving %s timed out after %.1fs", symbol, per_symbol_timeout)
                        result[symbol] = MarketData.zero(symbol)
                        del in_flight[future]
        finally:
            # Hung upstream calls must not hold the cycle open
            executor.shutdown(wait=False, cancel_futures=True)

        return {symbol: result[symbol] for symbol in unique}

    def _merge(self, symbol: str, quote: Quote) -> MarketData:
        price = quote.current_price or ZERO
        pe_ratio = quote.pe_ratio or ZERO
        earnings = quote.latest_earnings or ZERO

        if (pe_ratio == ZERO or earnings == ZERO) and self._scraper is not None:
            fundamentals = self._scrape(symbol)
            if pe_ratio == ZERO:
                pe_ratio = fundamentals.pe_ratio
            if earnings == ZERO:
                earnings = fundamentals.latest_earnings

        return MarketData(
            symbol=symbol,
            current_price=_non_negative(price),
            pe_ratio=_non_negative(pe_ratio),
            latest_earnings=earnings,
        )

    def _scrape(self, symbol: str) -> Fundamentals:
        try:
            return self._scraper.scrape(symbol)
        except Exception as e:
            logger.warning("Supplemental scrape failed for %s: %s", symbol, e)
            return Fundamentals()


def _normalize(symbol: Optional[str]) -> str:
    return (symbol or "").strip().upper()


def _non_negative(value: Decimal) -> Decimal:
    return value if value > ZERO else ZERO
