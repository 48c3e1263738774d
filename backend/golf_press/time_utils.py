"""UTC timestamps for match records."""

from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def coerce_utc(value: datetime | None) -> datetime | None:
    """Normalise ``value`` to UTC; naive datetimes are taken to be UTC already.

    SQLite hands back naive timestamps even for columns written with tzinfo,
    so anything read from the database goes through here.
    """

    if value is None:
        return None
    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def default_match_title(created_at: datetime) -> str:
    """Title for an untitled match: ``Match <UTC date of creation>``."""

    return f"Match {coerce_utc(created_at).date().isoformat()}"
