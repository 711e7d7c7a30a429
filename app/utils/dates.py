"""Calendar-day helpers (UTC, day granularity)."""

import calendar
import logging
import re
from datetime import date, datetime, timedelta, timezone
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def today_utc() -> date:
    """Current calendar day in UTC."""
    return datetime.now(timezone.utc).date()


def parse_and_validate_date(value: object) -> Optional[date]:
    """
    Parse a ``YYYY-MM-DD`` lifecycle date.

    Only the first ten characters are considered, so ``2024-01-15T00:00:00``
    is read as 2024-01-15. The date part must round-trip exactly through ISO
    formatting; anything else (``2024-1-5``, ``2024-02-30``, numbers, blanks)
    is treated as absent and returns None.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    date_part = value.strip()[:10]
    if not _ISO_DATE.match(date_part):
        logger.debug("DATE_REJECTED | value=%r | reason=format", value)
        return None

    try:
        parsed = date.fromisoformat(date_part)
    except ValueError:
        logger.debug("DATE_REJECTED | value=%r | reason=calendar", value)
        return None

    if parsed.isoformat() != date_part:
        return None
    return parsed


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def iter_month_days(year: int, month: int) -> Iterator[date]:
    """Every calendar day of the month, ascending."""
    current = date(year, month, 1)
    for _ in range(days_in_month(year, month)):
        yield current
        current += timedelta(days=1)


def format_display_date(d: date) -> str:
    """dd/mm/YYYY, as shown on billing notes."""
    return d.strftime("%d/%m/%Y")
