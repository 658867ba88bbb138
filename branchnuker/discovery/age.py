# The MIT License (MIT)
# Copyright © 2025 Entrius

from datetime import datetime, timezone
from typing import Optional

from branchnuker.constants import SECONDS_PER_MONTH


def parse_github_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a GitHub ISO-8601 timestamp into an aware UTC datetime.

    Returns None for empty or malformed input. Naive values are read as UTC.
    """
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def months_since(merged_at: Optional[str], now: datetime) -> Optional[float]:
    """Elapsed time between merged_at and now, in 30-day months.

    Returns None when merged_at cannot be parsed; callers exclude the record.
    """
    merged_dt = parse_github_timestamp(merged_at)
    if merged_dt is None:
        return None
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (now - merged_dt).total_seconds() / SECONDS_PER_MONTH
