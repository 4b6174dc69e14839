"""Date parsing utilities."""

from datetime import date, datetime
import re

from dateutil import parser as date_parser

_NUMERIC_DATE = re.compile(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{2,4})$")


def parse_message_date(date_str: str) -> date:
    """Parse a date fragment found in a notification into a date object.

    Bank messages write dates day first:
    - Numeric dates: "26-01-2026", "26/01/26", "5-1-26"
    - Month names: "26 Jan 2026", "26 January 26", "5 Feb2026"

    Two-digit years are read as 20YY.

    Args:
        date_str: Date fragment

    Returns:
        Date object

    Raises:
        ValueError: If the fragment is not a valid calendar date
    """
    date_str = date_str.strip()

    numeric = _NUMERIC_DATE.match(date_str)
    if numeric:
        day, month, year = (int(part) for part in numeric.groups())
        if len(numeric.group(3)) == 2:
            year += 2000
        elif len(numeric.group(3)) == 3:
            raise ValueError(f"Could not parse date '{date_str}': three-digit year")
        return date(year, month, day)

    # Month-name forms; "5 Feb2026" needs a space before the year
    spaced = re.sub(r"([A-Za-z])(\d)", r"\1 \2", date_str)
    try:
        parsed = date_parser.parse(
            spaced, dayfirst=True, default=datetime(date.today().year, 1, 1)
        )
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
    return parsed.date()
