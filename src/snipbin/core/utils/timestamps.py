"""UTC timestamp helpers shared by key derivation and persistence.

Upload timestamps are part of the key-derivation salt, so the value written
to storage must re-parse to exactly the same string on read. Everything goes
through format_timestamp / parse_timestamp at whole-second precision.
"""

from datetime import datetime, timedelta, timezone


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
VOLATILE = EPOCH    # expiration marker: delete after first read


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def round_to_second(dt: datetime) -> datetime:
    """Round to the nearest whole second, halves rounding up."""
    return (to_utc(dt) + timedelta(microseconds=500_000)).replace(microsecond=0)


def format_timestamp(dt: datetime) -> str:
    """Always a four digit year; strftime("%Y") does not pad years below 1000 on every platform."""
    dt = to_utc(dt)
    return f"{dt.year:04d}-" + dt.strftime("%m-%d %H:%M:%S")


def parse_timestamp(text: str) -> datetime:
    """Parse a stored timestamp. Raises ValueError on any other format."""
    return datetime.strptime(text, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)


def is_volatile(expiration: datetime) -> bool:
    """True for expiration markers at or before the unix epoch."""
    return to_utc(expiration) <= EPOCH
