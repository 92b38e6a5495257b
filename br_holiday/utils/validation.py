from datetime import date, datetime
import re
from typing import Union

from br_holiday.core.config import settings

DateInput = Union[str, date, datetime]

CALENDAR_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

INVALID_DATE_MESSAGE = (
    "Invalid date format. Use a date/datetime object, an ISO-8601 string, "
    "or YYYY-MM-DD"
)


class HolidayError(Exception):
    """Base class for holiday lookup errors."""


class InvalidDateError(HolidayError, ValueError):
    """Raised when a date cannot be normalized to YYYY-MM-DD."""


class InvalidYearError(HolidayError, ValueError):
    """Raised when a year is not an integer in the accepted range."""


def _format_calendar_date(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def _local_date(value: datetime) -> date:
    # Aware values are shifted to the local timezone; naive ones already are local.
    if value.tzinfo is not None and value.utcoffset() is not None:
        value = value.astimezone()
    return value.date()


def parse_iso_timestamp(text: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z`` for UTC."""
    # datetime.fromisoformat does not accept a trailing "Z" before Python 3.11
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def normalize_date(value: DateInput) -> str:
    """Normalize a date representation to a canonical ``YYYY-MM-DD`` string.

    Calendar-date strings are validated strictly, so ``2024-13-45`` fails.
    Other strings are parsed as ISO-8601 timestamps and reduced to the local
    calendar date.
    """
    if isinstance(value, datetime):
        return _format_calendar_date(_local_date(value))

    if isinstance(value, date):
        return _format_calendar_date(value)

    if not isinstance(value, str):
        raise InvalidDateError(INVALID_DATE_MESSAGE)

    text = value.strip()
    if CALENDAR_DATE_PATTERN.match(text):
        try:
            return _format_calendar_date(date.fromisoformat(text))
        except ValueError as e:
            raise InvalidDateError(INVALID_DATE_MESSAGE) from e

    try:
        parsed = parse_iso_timestamp(text)
    except ValueError as e:
        raise InvalidDateError(INVALID_DATE_MESSAGE) from e

    return _format_calendar_date(_local_date(parsed))


def year_of(canonical_date: str) -> int:
    """Return the year prefix of a canonical YYYY-MM-DD string."""
    return int(canonical_date[:4])


def validate_year(
    year: int,
    min_year: int | None = None,
    max_year: int | None = None,
) -> int:
    """Validate that ``year`` is an integer within the accepted range."""
    lower = settings.MIN_YEAR if min_year is None else min_year
    upper = settings.MAX_YEAR if max_year is None else max_year

    if isinstance(year, bool) or not isinstance(year, int):
        raise InvalidYearError(f"Year must be an integer, got {year!r}")

    if year < lower or year > upper:
        raise InvalidYearError(
            f"Year must be between {lower} and {upper}, got {year}"
        )

    return year
