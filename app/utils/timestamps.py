"""
Timestamp normalization.

Firestore hands back DatetimeWithNanoseconds, the mock DB may hand back ISO
strings, and callers pass plain datetimes. Everything is normalized to a
timezone-aware UTC datetime so comparisons never mix naive and aware values.
"""

from datetime import datetime, timezone
from typing import Optional


def parse_timestamp(value) -> Optional[datetime]:
    """
    Parse various timestamp formats to timezone-aware datetime (UTC).
    Returns None for missing or unparseable values.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
    # Firestore / protobuf Timestamp interface
    if hasattr(value, "ToDatetime"):
        dt = value.ToDatetime()
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
    if hasattr(value, "timestamp"):
        try:
            return datetime.fromtimestamp(value.timestamp(), tz=timezone.utc)
        except (TypeError, ValueError, OverflowError):
            return None
    return None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
