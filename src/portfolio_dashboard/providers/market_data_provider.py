"""Market data provider protocols."""

from typing import Protocol

from portfolio_dashboard.domain.views import Fundamentals, Quote


class QuoteProvider(Protocol):
    """
    Protocol for the primary quote source.

    Implementations return whatever fields the source supplies and leave the
    rest as None. Any failure is raised as UpstreamUnavailableError.
    """

    def get_quote(self, symbol: str) -> Quote:
        """Fetch current price, trailing P/E and trailing EPS for a suffixed symbol."""
        ...


class FundamentalsScraper(Protocol):
    """
    Protocol for the supplemental scrape source.

    Extraction misses come back as 0 fields; only fetch failures raise.
    """

    def scrape(self, symbol: str) -> Fundamentals:
        """Scrape P/E ratio and latest earnings for a suffixed symbol."""
        ...
