"""Core utilities and shared functionality."""

from portfolio_dashboard.core.timezone import now_ist, to_ist, IST_TZ
from portfolio_dashboard.core.exceptions import (
    AppError,
    ValidationError,
    MissingParameterError,
    UpstreamUnavailableError,
    ExtractionMissError,
    HoldingsLoadError,
)
from portfolio_dashboard.core.numbers import to_decimal, parse_number, safe_percentage

__all__ = [
    "now_ist",
    "to_ist",
    "IST_TZ",
    "AppError",
    "ValidationError",
    "MissingParameterError",
    "UpstreamUnavailableError",
    "ExtractionMissError",
    "HoldingsLoadError",
    "to_decimal",
    "parse_number",
    "safe_percentage",
]
