"""
Supplemental fundamentals scraper: Google Finance quote page.

Reads labelled key-stat blocks ("P/E Ratio", "Earnings") and takes the text of
the adjacent sibling node. The markup is not under our control, so a missing
label is an expected outcome and yields 0 for that field only.
"""

import logging
from decimal import Decimal
from typing import Optional

import httpx
from bs4 import BeautifulSoup, Comment, Tag

from portfolio_dashboard.config.settings import DEFAULT_USER_AGENT
from portfolio_dashboard.core.exceptions import ExtractionMissError, UpstreamUnavailableError
from portfolio_dashboard.core.numbers import ZERO, parse_number
from portfolio_dashboard.domain.models import parse_symbol
from portfolio_dashboard.domain.views import Fundamentals

logger = logging.getLogger(__name__)

BASE_URL = "https://www.google.com/finance/quote"

PE_RATIO_LABEL = "P/E Ratio"
EARNINGS_LABEL = "Earnings"
KEY_STATS_SECTION = "key-stats"
FINANCIALS_SECTION = "financials"

# Label wrappers seen in the key-stat rows are at most two levels deep
MAX_WRAPPER_DEPTH = 2
_NON_CONTENT_TAGS = frozenset({"script", "style", "noscript", "template"})


class GoogleFinanceScraper:
    """Scrapes P/E ratio and latest earnings from the public quote page."""

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_seconds: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        self._user_agent = user_agent
        self._timeout = timeout_seconds
        self._client = client or httpx.Client(
            headers={"User-Agent": user_agent, "Accept-Language": "en-US,en;q=0.9"},
            timeout=timeout_seconds,
            follow_redirects=True,
        )

    def page_url(self, symbol: str) -> str:
        """URL of the quote page for a suffixed symbol, e.g. .../HDFCBANK:NSE."""
        ticker, exchange = parse_symbol(symbol)
        return f"{BASE_URL}/{ticker}:{exchange.google_code}"

    def fetch_page(self, symbol: str) -> str:
        """Fetch the rendered HTML; raises UpstreamUnavailableError on HTTP failure."""
        url = self.page_url(symbol)
        try:
            response = self._client.get(url, headers={"User-Agent": self._user_agent})
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError(symbol, f"scrape failed: {e}") from e
        return response.text

    def scrape(self, symbol: str) -> Fundamentals:
        """Fetch the page for symbol and extract P/E ratio and earnings."""
        html = self.fetch_page(symbol)
        return parse_fundamentals(html, symbol)

    def close(self) -> None:
        self._client.close()


def parse_fundamentals(html: str, symbol: str = "") -> Fundamentals:
    """Extract both fields from a page; each extraction fails independently."""
    soup = BeautifulSoup(html, "html.parser")
    return Fundamentals(
        pe_ratio=_extract_or_zero(soup, KEY_STATS_SECTION, PE_RATIO_LABEL, symbol),
        latest_earnings=_extract_or_zero(soup, FINANCIALS_SECTION, EARNINGS_LABEL, symbol),
    )


def _extract_or_zero(soup: BeautifulSoup, section: str, label: str, symbol: str) -> Decimal:
    try:
        return extract_labeled_value(soup, section, label)
    except ExtractionMissError as e:
        logger.debug("Extraction miss for %s: %s", symbol, e.message)
        return ZERO


def extract_labeled_value(soup: BeautifulSoup, section: str, label: str) -> Decimal:
    """
    Find the node whose whole text is label inside the data-test=section block
    and parse the text of its next sibling element.

    The label must match exactly (case-insensitive, surrounding whitespace
    ignored), so headlines or scripts that merely mention it are not read.
    Searches the whole document when the section block is absent.
    """
    container = soup.find(attrs={"data-test": section}) or soup
    wanted = label.casefold()

    label_text = container.find(string=lambda text: _is_label(text, wanted))
    if label_text is None:
        raise ExtractionMissError(label)

    sibling = _next_element_sibling(label_text.parent)
    if sibling is None:
        raise ExtractionMissError(label, "no value next to label")

    value_text = sibling.get_text(" ", strip=True)
    value = parse_number(value_text)
    if value == ZERO:
        raise ExtractionMissError(label, f"unparseable value {value_text!r}")
    return value


def _is_label(text: Optional[str], wanted: str) -> bool:
    if not text or isinstance(text, Comment) or text.strip().casefold() != wanted:
        return False
    parent = text.parent
    return isinstance(parent, Tag) and parent.name not in _NON_CONTENT_TAGS


def _next_element_sibling(node: Tag) -> Optional[Tag]:
    """
    Next sibling element of node, walking up at most MAX_WRAPPER_DEPTH levels
    while the label sits alone in a wrapper.
    """
    for _ in range(MAX_WRAPPER_DEPTH + 1):
        sibling = node.find_next_sibling()
        if sibling is not None:
            return sibling
        parent = node.parent
        if parent is None or parent.name == "[document]":
            return None
        node = parent
    return None
