"""Time utilities for the domain layer."""

from datetime import date


def today_local() -> date:
    """Return the current calendar date in the local timezone."""
    return date.today()
