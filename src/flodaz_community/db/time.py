"""Time helpers for stored instants and their display form."""

from datetime import UTC, datetime

JUST_NOW = "Just now"


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def format_timestamp(value: datetime | str | None) -> str:
    """Render a stored instant the way en-US ``toLocaleString`` does.

    ``datetime(2024, 3, 5, 14, 7, 9)`` becomes ``"3/5/2024, 2:07:09 PM"``.
    Naive datetimes are taken as UTC. ISO strings are parsed first. A missing
    or unparseable value renders as an empty string.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)

    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return (
        f"{value.month}/{value.day}/{value.year}, "
        f"{hour}:{value.minute:02d}:{value.second:02d} {meridiem}"
    )
