"""
Timestamp utilities for recommendation metadata.

Wall-clock time is only read when the caller does not supply a timestamp.
"""

from datetime import datetime, timezone
from typing import Optional


def get_run_time(run_ts: Optional[datetime] = None) -> datetime:
    """
    Get the timestamp stamped on a recommendation.

    Args:
        run_ts: Optional caller-supplied timestamp

    Returns:
        UTC datetime, falling back to wall-clock time if none was supplied
    """
    if run_ts is not None:
        if run_ts.tzinfo is None:
            return run_ts.replace(tzinfo=timezone.utc)
        return run_ts

    return datetime.now(timezone.utc)


def format_timestamp(ts: datetime) -> str:
    """
    Format a timestamp for serialized output.

    Args:
        ts: Timestamp to format

    Returns:
        ISO8601 formatted string
    """
    return ts.isoformat()
