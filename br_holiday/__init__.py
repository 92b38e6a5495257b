"""Brazilian national holiday lookups backed by a bundled table and BrasilAPI."""

from br_holiday.core.cache import HolidayCache
from br_holiday.core.config import Settings, settings
from br_holiday.core.logging import configure_logging
from br_holiday.schemas.holiday import Holiday
from br_holiday.services.brasil_api import APIError, BrasilAPIClient
from br_holiday.services.holidays import (
    HolidayService,
    get_default_service,
    get_holidays,
    is_holiday,
    shutdown_default_service,
)
from br_holiday.utils.validation import (
    HolidayError,
    InvalidDateError,
    InvalidYearError,
    normalize_date,
)

__version__ = "2.0.0"

__all__ = [
    "APIError",
    "BrasilAPIClient",
    "Holiday",
    "HolidayCache",
    "HolidayError",
    "HolidayService",
    "InvalidDateError",
    "InvalidYearError",
    "Settings",
    "configure_logging",
    "get_default_service",
    "get_holidays",
    "is_holiday",
    "normalize_date",
    "settings",
    "shutdown_default_service",
]
