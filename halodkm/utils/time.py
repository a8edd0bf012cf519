"""Time utilities."""
from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from halodkm.config import get_settings


def utcnow() -> datetime:
    """Return current UTC time with timezone awareness."""

    return datetime.now(tz=UTC)


def local_today() -> date:
    """Return today's date in the organisation's timezone."""

    return datetime.now(tz=ZoneInfo(get_settings().APP_TIMEZONE)).date()


__all__ = ["utcnow", "local_today"]
