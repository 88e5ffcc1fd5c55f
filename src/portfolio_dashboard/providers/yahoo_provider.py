"""Primary quote source: Yahoo Finance via yfinance."""

import logging
from decimal import Decimal
from typing import Any, Optional

from portfolio_dashboard.core.exceptions import UpstreamUnavailableError
from portfolio_dashboard.core.numbers import to_decimal
from portfolio_dashboard.domain.views import Quote

logger = logging.getLogger(__name__)


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


class YahooQuoteProvider:
    """
    Fetches quotes from Yahoo Finance, one symbol per call.

    `Ticker.info` takes no timeout, so a call can outlive its caller. The
    resolver bounds how long it waits and stops counting an overrun call
    against its worker limit; the thread itself finishes in the background.
    """

    def get_quote(self, symbol: str) -> Quote:
        """
        Return price, trailing P/E and trailing EPS for symbol.

        Price: currentPrice preferred, then regularMarketPrice.
        Raises UpstreamUnavailableError when the request fails or Yahoo has
        no data at all for the symbol.
        """
        try:
            info = _get_yf().Ticker(symbol).info
        except Exception as e:
            raise UpstreamUnavailableError(symbol, str(e) or type(e).__name__) from e

        if not isinstance(info, dict) or not info:
            raise UpstreamUnavailableError(symbol, "empty quote response")

        price = info.get("currentPrice")
        if price is None:
            price = info.get("regularMarketPrice")

        quote = Quote(
            symbol=symbol,
            current_price=_optional_decimal(price),
            pe_ratio=_optional_decimal(info.get("trailingPE")),
            latest_earnings=_optional_decimal(info.get("epsTrailingTwelveMonths")),
        )
        logger.debug("Yahoo quote for %s: %s", symbol, quote)
        return quote


def _optional_decimal(value: Any) -> Optional[Decimal]:
    """Decimal for numeric values; None when Yahoo omitted the field or sent junk."""
    if value is None or isinstance(value, (str, bool)):
        return None
    result = to_decimal(value)
    return result if result or value == 0 else None
