import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional

from .exceptions import InvalidDateError

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class CalendarDay:
    """One selectable day on the calendar grid."""
    date: date

    @property
    def iso(self) -> str:
        return format_date(self.date)

    @property
    def label(self) -> str:
        return f"{self.date:%a} {self.date.day} {self.date:%b}"

    @property
    def day(self) -> int:
        return self.date.day

    @property
    def month(self) -> str:
        return f"{self.date:%b}"

    @property
    def weekday(self) -> int:
        # Sunday-first column index, matching a Sun..Sat grid
        return (self.date.weekday() + 1) % 7


def format_date(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def generate_calendar_days(days_ahead: int = 30, start: Optional[date] = None) -> List[CalendarDay]:
    """Return `days_ahead` consecutive days beginning at `start` (today by default)."""
    first = start or date.today()
    return [CalendarDay(first + timedelta(days=i)) for i in range(max(0, days_ahead))]


def is_today(d: date, today: Optional[date] = None) -> bool:
    return format_date(d) == format_date(today or date.today())


def parse_date(value: str) -> str:
    """Validate a date string before it is used as a schedule key."""
    text = str(value).strip()
    if not ISO_DATE.match(text):
        raise InvalidDateError(f"Expected YYYY-MM-DD, got {value!r}")
    try:
        datetime.strptime(text, "%Y-%m-%d")
    except ValueError as e:
        raise InvalidDateError(f"Not a calendar date: {value!r}") from e
    return text
