"""Datetime utilities."""

from datetime import datetime, timezone

from dateutil.parser import parse as parse_date

# Stands in for a release date that could not be read
DATE_SENTINEL = datetime(1, 1, 1)


def parse_release_date(value: str | None) -> datetime:
    """Parse a release date leniently, returning DATE_SENTINEL on failure.

    Missing parts are taken from DATE_SENTINEL rather than today, so a
    partial date like "2016" always parses to the same value.
    """
    if not value or not value.strip():
        return DATE_SENTINEL
    try:
        parsed = parse_date(value.strip(), default=DATE_SENTINEL)
        # Keep every release date naive UTC so they stay comparable
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    except (ValueError, OverflowError):
        return DATE_SENTINEL
    return parsed


def is_sentinel(value: datetime | None) -> bool:
    return value is None or value == DATE_SENTINEL


def latest_date(values) -> datetime:
    """Most recent real date in `values`; DATE_SENTINEL when none is real."""
    real = [value for value in values if not is_sentinel(value)]
    return max(real) if real else DATE_SENTINEL
