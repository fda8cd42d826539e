"""UTC-everywhere time handling for invoice timestamps."""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """
    Current time in UTC.

    Every timestamp the engine stamps (paid_at, sent_at, voided_at) comes
    from here.
    """
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """
    Convert a caller-supplied timestamp to UTC.

    Used for payment times recorded at the counter in the shop's local zone.

    Raises:
        ValueError: dt is naive, so its zone cannot be known
    """
    if dt.tzinfo is None:
        raise ValueError(f"Timestamp {dt.isoformat()} is naive; attach a timezone first")
    return dt.astimezone(timezone.utc)
