"""Date parsing for booking days."""
import re
from datetime import date, datetime, timedelta
from typing import Tuple, Union

DAY_NUMBER = re.compile(r"^\d{1,2}$")
ISO_DAY = re.compile(r"^\d{4}-\d{2}-\d{2}$")
SLASH_DAY = re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$")


def parse_booking_date(value: Union[str, date, datetime], today: date = None) -> datetime:
    """Parse a day into a naive datetime at midnight.

    Accepts a date/datetime, "YYYY-MM-DD", an ISO datetime string,
    "MM/DD/YYYY", or a bare day number meaning that day of the current month.
    Raises ValueError when the value can't be read as a day.
    """
    if isinstance(value, datetime):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Invalid date format")

    value = value.strip()
    if DAY_NUMBER.match(value):
        today = today or date.today()
        return datetime(today.year, today.month, int(value))
    if ISO_DAY.match(value):
        return datetime.strptime(value, "%Y-%m-%d")
    if SLASH_DAY.match(value):
        return datetime.strptime(value, "%m/%d/%Y")

    # fromisoformat() on older interpreters doesn't take the Z suffix
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    return datetime(parsed.year, parsed.month, parsed.day)


def day_bounds(day: datetime) -> Tuple[datetime, datetime]:
    """Start of the day and start of the next one."""
    start = datetime(day.year, day.month, day.day)
    return start, start + timedelta(days=1)
