"""
Lenient field coercion used when mapping stored rows onto record dataclasses.

Rows read back from the spreadsheet endpoint are loosely typed: numbers may
come back as strings, dates as full ISO datetimes and empty cells as ''.
"""

from datetime import date, datetime
from typing import Any, Optional


def text(value: Any) -> str:
    if value is None:
        return ''
    return str(value).strip()


def optional_text(value: Any) -> Optional[str]:
    value = text(value)
    return value or None


def number(value: Any) -> float:
    if value is None or value == '':
        return 0.0
    if isinstance(value, bool):
        return float(value)
    try:
        return float(str(value).replace(',', ''))
    except (TypeError, ValueError):
        return 0.0


def flag(value: Any, default: bool = True) -> bool:
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('true', '1', 'yes', 'on')


def date_text(value: Any) -> str:
    """Normalize a stored date to 'YYYY-MM-DD' ('' when empty)"""
    if value is None or value == '':
        return ''
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    value = str(value).strip()
    # Spreadsheet cells serialize as '2024-06-15T00:00:00.000Z'
    return value[:10] if len(value) >= 10 and value[4] == '-' else value


def parse_date(value: Any) -> Optional[date]:
    """Parse a stored date, returning None when it is empty or malformed"""
    value = date_text(value)
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None
