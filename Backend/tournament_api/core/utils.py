from datetime import datetime, timezone


def to_naive_utc(value: datetime) -> datetime:
    """Store every timestamp as naive UTC so comparisons never mix offsets."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
