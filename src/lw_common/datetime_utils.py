"""UTC datetime utilities."""

from datetime import datetime


def isoformat_or_none(value: datetime | None) -> str | None:
    """Render a timestamp for API payloads; missing values stay null."""
    return value.isoformat() if value is not None else None
