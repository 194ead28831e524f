"""
Timezone helpers. Every datetime the service stores or compares is UTC-aware.
"""
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current time, timezone-aware UTC."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Return value as an aware UTC datetime.
    Naive values (e.g. read back from SQLite) are taken to already be UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
