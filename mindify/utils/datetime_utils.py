"""DateTime utilities for the Mindify application.

Every timestamp the service writes is timezone-aware UTC.
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Get current UTC datetime.

    Returns:
        datetime: Current UTC datetime with timezone info, truncated to
        milliseconds to match what MongoDB stores
    """
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a naive datetime read back from the store.

    Args:
        dt: Datetime to normalize

    Returns:
        Optional[datetime]: Timezone-aware datetime, or None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
