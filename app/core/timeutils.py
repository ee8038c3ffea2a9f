# app/core/timeutils.py
from datetime import datetime, timezone


def ensure_aware(value: datetime) -> datetime:
    """
    Return `value` unchanged if it carries a time zone, otherwise read it as UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to an aware UTC value.

    Naive values (e.g. read back from SQLite, which drops offsets) are
    assumed to already be UTC.
    """
    return ensure_aware(value).astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)
