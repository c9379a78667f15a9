"""RFC 2822 date handling for feed timestamps."""

import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

logger = logging.getLogger(__name__)

# Items without a publish date sort as if published at this instant
EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def parse_date(value: str) -> datetime | None:
    """Parse an RFC 2822 date such as ``Wed, 02 Oct 2024 10:00:00 GMT``.

    Returns an aware datetime, or None if the value is empty or malformed.
    Dates without a usable zone offset are taken as UTC.
    """
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError, OverflowError):
        logger.debug("Ignoring malformed date: %r", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def sort_key(published_at: datetime | None) -> datetime:
    """Key for ordering by publish time, undated entries last."""
    return published_at or EARLIEST
