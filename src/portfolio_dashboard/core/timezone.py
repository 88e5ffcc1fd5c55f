"""Timezone utilities for Indian market time."""

from datetime import datetime

import pytz

IST_TZ = pytz.timezone("Asia/Kolkata")


def now_ist() -> datetime:
    """Return current time in Asia/Kolkata timezone."""
    return datetime.now(IST_TZ)


def to_ist(dt: datetime) -> datetime:
    """Convert a datetime to Asia/Kolkata timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already IST
        return IST_TZ.localize(dt)
    return dt.astimezone(IST_TZ)
