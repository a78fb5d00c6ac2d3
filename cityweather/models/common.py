"""Common types and helpers shared across models."""

from datetime import date, datetime


def local_now() -> datetime:
    """Naive wall-clock time, the same clock as ``timezone=auto`` series."""
    return datetime.now()


def parse_timestamp(iso_str: str) -> datetime | None:
    """Parse an ISO timestamp such as ``2026-10-19T14:00``."""
    try:
        return datetime.fromisoformat(iso_str)
    except (ValueError, TypeError):
        return None


def parse_date(iso_str: str) -> date | None:
    """Parse an ISO calendar date such as ``2026-10-19``."""
    try:
        return date.fromisoformat(iso_str)
    except (ValueError, TypeError):
        return None
