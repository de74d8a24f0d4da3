"""
Date helpers for completion stamps.

Completion dates use the Obsidian Tasks plugin format: ISO 8601 calendar
dates (YYYY-MM-DD) in local time.
"""

import re
from datetime import date, datetime
from typing import Optional

ISO_DATE_PATTERN = r"\d{4}-\d{2}-\d{2}"


def today_iso() -> str:
    """Today's local calendar date as YYYY-MM-DD."""
    return date.today().isoformat()


def parse_iso_date(date_str: str) -> Optional[date]:
    """Parse a YYYY-MM-DD string, or return None if it is not a real date."""
    if not date_str or not re.fullmatch(ISO_DATE_PATTERN, date_str):
        return None
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        return None
