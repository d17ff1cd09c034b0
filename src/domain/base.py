from datetime import UTC, datetime


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what DateTime columns hand back."""
    return datetime.now(UTC).replace(tzinfo=None)
