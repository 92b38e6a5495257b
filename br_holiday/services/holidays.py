from typing import Mapping, Optional, Sequence

import structlog

from br_holiday.core.cache import HolidayCache
from br_holiday.core.config import settings
from br_holiday.data.static_holidays import STATIC_HOLIDAYS
from br_holiday.schemas.holiday import Holiday
from br_holiday.services.brasil_api import BrasilAPIClient
from br_holiday.utils.validation import (
    DateInput,
    normalize_date,
    validate_year,
    year_of,
)

logger = structlog.get_logger(__name__)


class HolidayService:
    """Service to look up Brazilian national holidays.

    Lookups prefer the bundled static table, then the TTL cache, and only
    then call BrasilAPI, writing the result through to the cache.
    """

    def __init__(
        self,
        skip_static: Optional[bool] = None,
        static_holidays: Optional[Mapping[int, Sequence[Holiday]]] = None,
        cache: Optional[HolidayCache] = None,
        api_client: Optional[BrasilAPIClient] = None,
        auto_cleanup: bool = True,
    ):
        self.skip_static = settings.SKIP_STATIC if skip_static is None else skip_static
        self.static_holidays = STATIC_HOLIDAYS if static_holidays is None else static_holidays
        self.cache = cache if cache is not None else HolidayCache()
        self.api_client = api_client if api_client is not None else BrasilAPIClient()
        self.auto_cleanup = auto_cleanup

    async def __aenter__(self) -> "HolidayService":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def start(self) -> None:
        """Schedule periodic cache cleanup on the running event loop."""
        self.cache.start()

    async def close(self) -> None:
        """Stop cache cleanup and drop cached data."""
        await self.cache.stop()
        self.cache.clear()

    async def get_holidays(self, year: int) -> list[Holiday]:
        """Return the holidays of ``year`` in the order the source provided."""
        validate_year(year)

        if not self.skip_static:
            static = self.static_holidays.get(year)
            if static is not None:
                return list(static)

        if self.auto_cleanup and not self.cache.running:
            self.cache.start()

        cached = self.cache.get(year)
        if cached is not None:
            return cached

        try:
            holidays = await self.api_client.fetch_holidays(year)
        except Exception:
            # Don't keep data correlated with a failed refresh
            if self.cache.delete(year):
                logger.info("Dropped cached holidays after fetch failure", year=year)
            raise

        self.cache.set(year, holidays)
        return list(holidays)

    async def get_holiday(self, value: DateInput) -> Optional[Holiday]:
        """Return the holiday falling on ``value``, if any."""
        normalized = normalize_date(value)
        for holiday in await self.get_holidays(year_of(normalized)):
            if holiday.date == normalized:
                return holiday
        return None

    async def is_holiday(self, value: DateInput) -> bool:
        normalized = normalize_date(value)
        holidays = await self.get_holidays(year_of(normalized))
        return any(holiday.date == normalized for holiday in holidays)


_default_service: Optional[HolidayService] = None


def get_default_service() -> HolidayService:
    """Return the process-wide service used by the module-level helpers."""
    global _default_service
    if _default_service is None:
        _default_service = HolidayService()
    return _default_service


async def shutdown_default_service() -> None:
    global _default_service
    if _default_service is not None:
        await _default_service.close()
        _default_service = None


async def get_holidays(year: int) -> list[Holiday]:
    return await get_default_service().get_holidays(year)


async def is_holiday(value: DateInput) -> bool:
    return await get_default_service().is_holiday(value)
