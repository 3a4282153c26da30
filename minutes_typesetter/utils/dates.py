"""Date formatting for minutes headers and document metadata.

Meeting dates arrive in whatever form the surrounding system stores them
(usually ISO ``YYYY-MM-DD``). Unparseable values are passed through as-is
rather than raising, since the date only decorates the document.
"""

import logging
from datetime import date, datetime
from typing import Optional

from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)

# Noon default keeps date-only values on the same calendar day
DEFAULT_PARSE_TIME = datetime(2000, 1, 1, 12)


def parse_meeting_date(value) -> Optional[date]:
    """Parse a meeting date string into a date, or None if unparseable."""
    if value is None:
        return None
    if isinstance(value, date):
        return value

    s = str(value).strip()
    if not s:
        return None

    try:
        parsed = dateutil_parser.parse(s, default=DEFAULT_PARSE_TIME)
        return parsed.date()
    except (ValueError, TypeError, OverflowError):
        logger.warning(f"Could not parse meeting date '{s}'")
        return None


def format_header_date(value) -> str:
    """Format a meeting date for the running page header.

    - "2026-10-16" → "10/16/2026"
    - "October 6, 2026" → "10/06/2026"
    """
    parsed = parse_meeting_date(value)
    if parsed is None:
        return "" if value is None else str(value).strip()
    return parsed.strftime("%m/%d/%Y")


def format_long_date(value) -> str:
    """Format a meeting date for document titles: "2026-10-06" → "October 6, 2026"."""
    parsed = parse_meeting_date(value)
    if parsed is None:
        return "" if value is None else str(value).strip()
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"
