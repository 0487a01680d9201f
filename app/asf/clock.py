"""
Timestamp helpers shared by the gate and the trajectory analyzer.

Callers may send naive or timezone-aware datetimes; naive ones are taken
as UTC so the two kinds can be compared and subtracted.
"""

import datetime


def as_utc(timestamp: datetime.datetime) -> datetime.datetime:
    """Attach UTC to a naive timestamp; aware timestamps pass through."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=datetime.timezone.utc)
    return timestamp


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)
