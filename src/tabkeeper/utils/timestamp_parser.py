"""Timestamp parsing utilities."""

from datetime import datetime, time, timedelta, UTC
from dateutil import parser as date_parser

from tabkeeper.domain.entities import utcnow


def parse_timestamp(value: str, now: datetime | None = None) -> datetime:
    """Parse a timestamp string into a naive UTC datetime.

    Times without an offset are taken as UTC; times with one are converted.

    Supports various formats including relative values:
    - Absolute: "2024-01-15 21:30", "January 15, 2024 9pm", etc.
    - Relative: "now", "today" (midnight), "yesterday", "tomorrow"
    - Offsets: "-30m", "-2h" (minutes/hours before now)

    Args:
        value: Timestamp string
        now: Reference time for relative values (defaults to the current UTC time)

    Returns:
        Datetime object

    Raises:
        ValueError: If the string cannot be parsed
    """
    text = value.strip().lower()
    if now is None:
        now = utcnow()
    midnight = datetime.combine(now.date(), time())

    relative = {
        "now": now,
        "today": midnight,
        "yesterday": midnight - timedelta(days=1),
        "tomorrow": midnight + timedelta(days=1),
    }
    if text in relative:
        return relative[text]

    # Offsets like "-15m" or "-2h"
    if text.startswith("-") and text[-1:] in ("m", "h") and text[1:-1].isdigit():
        quantity = int(text[1:-1])
        if text.endswith("m"):
            return now - timedelta(minutes=quantity)
        return now - timedelta(hours=quantity)

    try:
        parsed = date_parser.parse(text)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse timestamp '{value}': {e}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed
