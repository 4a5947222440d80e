"""Clock helpers — timezone-aware "now" and normalization of stored datetimes.

Invariants:
    - utc_now() is always timezone-aware
    - as_utc() never returns a naive datetime (naive values are taken as UTC)

Design Decisions:
    - SQLite drops tzinfo on DateTime(timezone=True) columns; comparisons go
      through as_utc() so lockout and expiry checks behave the same on both backends
"""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def today() -> date:
    return utc_now().date()


def as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
