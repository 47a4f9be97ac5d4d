"""
genogram_date.py - Date normalization utilities for genogram data.

Genogram dates are entered by hand and are often incomplete ("ABT 1940",
"JUL 1913") so every date flowing into the model is normalized to a
PartialDate: a year with optional month and day. Supports:
    - datetime.date / datetime.datetime values
    - ISO strings, full or partial ("1950-03-04", "1950-03", "1950")
    - GEDCOM-style date strings parsed with ged4py (ranges and periods resolve
      to their first date; free-text phrases fall back to any year they contain)
    - plain integer years

Module: genogram_patterns.genogram_date
"""

import calendar
import logging
import re
from dataclasses import dataclass
from datetime import date as _date, datetime as _datetime
from functools import total_ordering
from typing import Any, Optional

from ged4py.date import DateValue

logger = logging.getLogger(__name__)

UNKNOWN_DATE = "unknown date"

_MONTH_ABBR_TO_NUM = {
    "JAN": 1, "FEB": 2, "MAR": 3, "APR": 4, "MAY": 5, "JUN": 6,
    "JUL": 7, "AUG": 8, "SEP": 9, "OCT": 10, "NOV": 11, "DEC": 12,
}

_ISO_RE = re.compile(r'^(-?\d{3,4})(?:-(\d{1,2})(?:-(\d{1,2}))?)?$')
_YEAR_RE = re.compile(r'(?<!\d)(-?\d{3,4})(?!\d)')


@total_ordering
@dataclass(frozen=True)
class PartialDate:
    """
    A calendar date where month and day may be unknown.

    Attributes:
        year (int): Year (always known).
        month (Optional[int]): Month number 1-12, or None.
        day (Optional[int]): Day of month, or None (always None when month is None).
    """
    year: int
    month: Optional[int] = None
    day: Optional[int] = None

    def __post_init__(self):
        if self.month is not None and not 1 <= self.month <= 12:
            raise ValueError(f"Month out of range: {self.month}")
        if self.day is not None:
            if self.month is None:
                raise ValueError("A day requires a month")
            if not 1 <= self.day <= 31:
                raise ValueError(f"Day out of range: {self.day}")
            days_in_month = calendar.mdays[self.month] + (self.month == 2 and calendar.isleap(self.year))
            if self.day > days_in_month:
                logger.warning(f"Day {self.day} does not exist in {self.year:04d}-{self.month:02d}; keeping year and month only")
                object.__setattr__(self, 'day', None)

    @property
    def is_complete(self) -> bool:
        """True when year, month and day are all known."""
        return self.month is not None and self.day is not None

    def to_date(self) -> Optional[_date]:
        """Return a datetime.date if the date is complete and valid, else None."""
        if not self.is_complete:
            return None
        try:
            return _date(self.year, self.month, self.day)
        except ValueError:
            return None

    def _sort_key(self):
        return (self.year, self.month or 0, self.day or 0)

    def __lt__(self, other):
        if not isinstance(other, PartialDate):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        if self.month is None:
            return f"{self.year:04d}"
        if self.day is None:
            return f"{self.year:04d}-{self.month:02d}"
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


def _from_calendar_date(value: Any) -> Optional[PartialDate]:
    """
    Convert a ged4py CalendarDate-like object (year, month abbreviation, day)
    into a PartialDate.
    """
    year = getattr(value, "year", None)
    if year is None:
        return None
    month = getattr(value, "month", None)
    if isinstance(month, str):
        month = _MONTH_ABBR_TO_NUM.get(month.upper()[:3])
    day = getattr(value, "day", None) if month else None
    try:
        return PartialDate(int(year), month, int(day) if day else None)
    except (TypeError, ValueError):
        return PartialDate(int(year))


def _parse_iso(text: str) -> Optional[PartialDate]:
    match = _ISO_RE.match(text)
    if not match:
        return None
    year, month, day = match.groups()
    try:
        return PartialDate(int(year), int(month) if month else None, int(day) if day else None)
    except ValueError:
        logger.warning(f"Invalid ISO date '{text}'")
        return None


def _parse_gedcom(text: str) -> Optional[PartialDate]:
    """
    Parse a GEDCOM-style date string with ged4py.

    Ranges and periods resolve to their first date; phrases fall back to the
    first year found in the text.
    """
    try:
        value = DateValue.parse(text)
    except Exception as e:
        logger.warning(f"Failed to parse date string '{text}': {e}")
        return None

    kind = getattr(getattr(value, "kind", None), "name", None)
    if kind in ("RANGE", "PERIOD"):
        calendar_date = getattr(value, "date1", None) or getattr(value, "date2", None)
    elif kind == "PHRASE":
        calendar_date = None
    else:
        calendar_date = getattr(value, "date", None)

    if calendar_date is not None:
        return _from_calendar_date(calendar_date)

    match = _YEAR_RE.search(text)
    if match:
        return PartialDate(int(match.group(1)))
    logger.warning(f"Unable to find a date in '{text}'")
    return None


def coerce_date(value: Any) -> Optional[PartialDate]:
    """
    Normalize any supported date input to a PartialDate.

    Args:
        value: PartialDate, datetime.date/datetime, str (ISO or GEDCOM), int year, or None.

    Returns:
        PartialDate, or None when the value is empty or cannot be parsed.

    Raises:
        TypeError: If the value is of an unsupported type.
    """
    if value is None:
        return None
    if isinstance(value, PartialDate):
        return value
    if isinstance(value, _datetime):
        return PartialDate(value.year, value.month, value.day)
    if isinstance(value, _date):
        return PartialDate(value.year, value.month, value.day)
    if isinstance(value, bool):
        raise TypeError(f"Unsupported date type: {type(value)}")
    if isinstance(value, int):
        if 0 < value <= 9999:
            return PartialDate(value)
        logger.warning(f"Integer '{value}' does not look like a valid year")
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        return _parse_iso(text) or _parse_gedcom(text)
    raise TypeError(f"Unsupported date type: {type(value)}")


def age_in_years(birth: Any, when: Any) -> Optional[int]:
    """
    Age in completed years between two dates.

    Month and day are only taken into account when both dates carry them;
    otherwise the plain difference of years is returned.

    Returns:
        Age in years, or None if either date is missing.
    """
    birth_date = coerce_date(birth)
    when_date = coerce_date(when)
    if birth_date is None or when_date is None:
        return None

    age = when_date.year - birth_date.year
    if birth_date.month is not None and when_date.month is not None:
        if birth_date.day is not None and when_date.day is not None:
            before_birthday = (when_date.month, when_date.day) < (birth_date.month, birth_date.day)
        else:
            before_birthday = when_date.month < birth_date.month
        if before_birthday:
            age -= 1
    return age


def year_num(value: Any) -> Optional[int]:
    """Year of a date as an int, or None."""
    parsed = coerce_date(value)
    return parsed.year if parsed else None


def format_date(value: Any) -> str:
    """Display form of a date for evidence descriptions ("unknown date" when missing)."""
    parsed = coerce_date(value)
    return str(parsed) if parsed else UNKNOWN_DATE


def date_to_json(value: Optional[PartialDate]) -> Optional[str]:
    """Serialize a PartialDate for JSON (ISO form, partial where needed)."""
    return str(value) if value is not None else None
