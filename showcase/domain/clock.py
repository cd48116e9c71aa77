"""UTC timestamp helpers for response payloads."""

from datetime import datetime, timezone


def domain_utc_timestamp(moment: datetime | None = None) -> str:
    """Render a UTC timestamp in ISO-8601 form with millisecond precision.

    Args:
        moment: Optional timezone-aware moment. Defaults to the current time.

    Returns:
        str: Timestamp such as `2024-01-01T12:00:00.000Z`.
    """

    resolved_moment = (moment or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return resolved_moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
