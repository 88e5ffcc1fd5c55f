"""Enumerations for domain models."""

from enum import Enum


class Exchange(str, Enum):
    """Listing exchanges a holding can trade on."""

    NSE = "NSE"  # primary
    BSE = "BSE"  # secondary

    @property
    def yahoo_suffix(self) -> str:
        return ".NS" if self is Exchange.NSE else ".BO"

    @property
    def google_code(self) -> str:
        return "NSE" if self is Exchange.NSE else "BOM"


class RefreshState(str, Enum):
    """States of the refresh scheduler."""

    IDLE = "IDLE"
    REFRESHING = "REFRESHING"
    ERROR = "ERROR"
