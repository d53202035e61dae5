from __future__ import annotations

from datetime import UTC, datetime, timedelta


def parse_timestamp(value: object) -> datetime | None:
    """Parses ISO-8601 strings or epoch milliseconds into an aware UTC datetime.

    Returns None for anything unparseable instead of raising.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, bool):
        return None
    elif isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def format_timestamp(value: datetime) -> str:
    return value.astimezone(UTC).isoformat().replace("+00:00", "Z")


# latest representable instant; stands in for expiries past the calendar's end
END_OF_TIME = datetime.max.replace(tzinfo=UTC)


def add_seconds(moment: datetime, seconds: float) -> datetime | None:
    """``moment + seconds``, or None when the result falls outside the calendar."""
    try:
        return moment + timedelta(seconds=seconds)
    except (OverflowError, ValueError):
        return None
