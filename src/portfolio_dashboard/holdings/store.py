"""Holdings store: load and coerce the pre-generated holdings list."""

import json
import logging
from collections.abc import Sequence
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterator, Optional, Union

from portfolio_dashboard.core.exceptions import HoldingsLoadError, ValidationError
from portfolio_dashboard.core.numbers import ZERO, to_decimal
from portfolio_dashboard.domain.models import DEFAULT_SECTOR, Exchange, Holding
from portfolio_dashboard.domain.views import LoadSummary

logger = logging.getLogger(__name__)


class HoldingsStore(Sequence):
    """
    Immutable, ordered sequence of holdings.

    Loaded once at process start and shared read-only across refresh cycles.
    """

    def __init__(self, holdings: Sequence[Holding] = (), summary: Optional[LoadSummary] = None):
        self._holdings: tuple[Holding, ...] = tuple(holdings)
        self.summary = summary or LoadSummary(loaded_count=len(self._holdings))

    def __getitem__(self, index: Union[int, slice]):
        return self._holdings[index]

    def __len__(self) -> int:
        return len(self._holdings)

    def __iter__(self) -> Iterator[Holding]:
        return iter(self._holdings)

    def symbols(self) -> list[str]:
        """Distinct quote symbols in store order."""
        return list(dict.fromkeys(h.symbol for h in self._holdings))


def load_holdings(path: Union[str, Path]) -> HoldingsStore:
    """
    Load holdings from a JSON file.

    Expects a list of objects with stockName, purchasePrice, quantity,
    exchange and sector. Rows without a stock name are skipped and counted.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise HoldingsLoadError(f"File not found: {path}")

    try:
        with open(file_path, encoding="utf-8") as f:
            rows = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise HoldingsLoadError(f"Could not read holdings from {path}: {e}") from e

    store = holdings_from_records(rows)
    logger.info(
        "Loaded %d holdings from %s (%d skipped)",
        store.summary.loaded_count,
        file_path,
        store.summary.skipped_count,
    )
    return store


def holdings_from_records(rows: Any) -> HoldingsStore:
    """Coerce raw records into a HoldingsStore."""
    if not isinstance(rows, list):
        raise HoldingsLoadError("Holdings file must contain a JSON list")

    summary = LoadSummary()
    holdings: list[Holding] = []
    for row_num, row in enumerate(rows, start=1):
        try:
            holdings.append(parse_holding(row))
            summary.loaded_count += 1
        except ValidationError as e:
            summary.skipped_count += 1
            summary.errors.append(f"Row {row_num}: {e.message}")
            logger.warning("Skipping holding row %d: %s", row_num, e.message)

    return HoldingsStore(holdings, summary)


def parse_holding(row: Any) -> Holding:
    """Build a single Holding from a raw record."""
    if not isinstance(row, dict):
        raise ValidationError("Row is not an object")

    stock_name = str(_field(row, "stockName", "stock_name") or "").strip()
    if not stock_name:
        raise ValidationError("Missing stockName")

    return Holding(
        stock_name=stock_name,
        purchase_price=_parse_price(_field(row, "purchasePrice", "purchase_price")),
        quantity=_parse_quantity(_field(row, "quantity")),
        exchange=_parse_exchange(_field(row, "exchange"), stock_name),
        sector=str(_field(row, "sector") or "").strip() or DEFAULT_SECTOR,
    )


def _field(row: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in row:
            return row[key]
    return None


def _parse_price(value: Any) -> Decimal:
    """Non-numeric or negative prices coerce to 0."""
    price = to_decimal(value)
    return price if price > ZERO else ZERO


def _parse_quantity(value: Any) -> int:
    """Non-numeric or negative quantities coerce to 0; fractions truncate."""
    quantity = int(to_decimal(value))
    return quantity if quantity > 0 else 0


def _parse_exchange(value: Any, stock_name: str) -> Exchange:
    tag = str(value or "").strip().upper()
    try:
        return Exchange(tag)
    except ValueError:
        logger.warning("Unknown exchange %r for %s; assuming %s", value, stock_name, Exchange.NSE.value)
        return Exchange.NSE
