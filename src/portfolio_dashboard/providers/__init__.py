"""Market data providers module."""

from portfolio_dashboard.providers.market_data_provider import FundamentalsScraper, QuoteProvider
from portfolio_dashboard.providers.yahoo_provider import YahooQuoteProvider
from portfolio_dashboard.providers.stub_provider import StubQuoteProvider
from portfolio_dashboard.providers.google_finance_scraper import GoogleFinanceScraper

__all__ = [
    "QuoteProvider",
    "FundamentalsScraper",
    "YahooQuoteProvider",
    "StubQuoteProvider",
    "GoogleFinanceScraper",
]
