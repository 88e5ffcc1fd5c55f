"""Stub quote provider for offline/testing use."""

import random
from decimal import Decimal

from portfolio_dashboard.domain.models import parse_symbol
from portfolio_dashboard.domain.views import Quote


# Deterministic fake (price, P/E, EPS) for common NSE tickers
_STUB_QUOTES: dict[str, tuple[Decimal, Decimal, Decimal]] = {
    "HDFCBANK": (Decimal("1720.45"), Decimal("19.80"), Decimal("86.90")),
    "ICICIBANK": (Decimal("1265.10"), Decimal("18.95"), Decimal("66.75")),
    "BAJFINANCE": (Decimal("6980.00"), Decimal("29.40"), Decimal("237.40")),
    "INFY": (Decimal("1875.30"), Decimal("28.10"), Decimal("66.73")),
    "TCS": (Decimal("4120.55"), Decimal("31.25"), Decimal("131.86")),
    "LTIM": (Decimal("5630.20"), Decimal("36.70"), Decimal("153.41")),
    "AFFLE": (Decimal("1602.85"), Decimal("62.15"), Decimal("25.79")),
    "KPITTECH": (Decimal("1412.00"), Decimal("58.30"), Decimal("24.22")),
    "TATACONSUM": (Decimal("1084.60"), Decimal("82.40"), Decimal("13.16")),
    "DMART": (Decimal("3705.15"), Decimal("91.20"), Decimal("40.63")),
    "TATAPOWER": (Decimal("412.35"), Decimal("34.60"), Decimal("11.92")),
    "SUZLON": (Decimal("64.18"), Decimal("88.90"), Decimal("0.72")),
}


class StubQuoteProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Uses predefined values for common tickers. Unknown tickers get random
    values seeded from (seed, ticker), so a symbol quotes the same on every
    call and from every thread.
    """

    def __init__(self, seed: int = 42):
        """Initialize with optional random seed for reproducibility."""
        self._seed = seed

    def get_quote(self, symbol: str) -> Quote:
        """Return a stub quote for the requested symbol."""
        ticker, _ = parse_symbol(symbol)
        if ticker in _STUB_QUOTES:
            price, pe_ratio, earnings = _STUB_QUOTES[ticker]
        else:
            rng = random.Random(f"{self._seed}:{ticker}")
            price = Decimal(str(50 + rng.random() * 2000)).quantize(Decimal("0.01"))
            pe_ratio = Decimal(str(10 + rng.random() * 40)).quantize(Decimal("0.01"))
            earnings = (price / pe_ratio).quantize(Decimal("0.01"))

        return Quote(
            symbol=symbol,
            current_price=price,
            pe_ratio=pe_ratio,
            latest_earnings=earnings,
        )
