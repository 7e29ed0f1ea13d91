"""Shared utilities for the portfolio planner."""

from datetime import datetime, timezone

DECIMALS = 2


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def today_iso() -> str:
    """Current UTC date as YYYY-MM-DD."""
    return utcnow().date().isoformat()


def round2(x: float | None) -> float | None:
    """Round a value to 2 decimal places; preserve None."""
    if x is None:
        return None
    return round(float(x), DECIMALS)
