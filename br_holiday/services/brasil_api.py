from typing import Any, Optional

import httpx
import structlog
from pydantic import ValidationError

from br_holiday.core.config import settings
from br_holiday.schemas.holiday import Holiday
from br_holiday.utils.validation import HolidayError

logger = structlog.get_logger(__name__)


class APIError(HolidayError):
    """Raised when the holiday provider cannot deliver a usable response."""

    def __init__(self, message: str, year: Optional[int] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.year = year
        self.status_code = status_code


class BrasilAPIClient:
    """Client for the BrasilAPI national holidays endpoint.

    Each call performs exactly one GET; retrying is left to the caller.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.API_TIMEOUT_SECONDS
        self._transport = transport
        self._client = client

    def url_for(self, year: int) -> str:
        return f"{self.base_url}/{year}"

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            headers={
                "Accept": "application/json",
                "User-Agent": settings.USER_AGENT,
            },
        )

    async def _get(self, url: str) -> httpx.Response:
        # An injected client is reused; otherwise each fetch owns a short-lived
        # client bound to the running event loop
        if self._client is not None:
            return await self._client.get(url)
        async with self._new_client() as client:
            return await client.get(url)

    async def fetch_holidays(self, year: int) -> list[Holiday]:
        """Fetch the holidays of ``year`` from the provider."""
        url = self.url_for(year)
        logger.info("Fetching holidays from provider", year=year, url=url)

        try:
            response = await self._get(url)
        except httpx.HTTPError as e:
            logger.error("Network error fetching holidays", year=year, error=str(e))
            raise APIError(
                f"Network error fetching holidays for year {year}: {e}",
                year=year,
            ) from e
        except Exception as e:
            logger.error("Unexpected error fetching holidays", year=year, error=repr(e))
            raise APIError(
                f"Unexpected error fetching holidays for year {year}: {e!r}",
                year=year,
            ) from e

        if not response.is_success:
            logger.error(
                "Provider returned an error status",
                year=year,
                status_code=response.status_code,
            )
            raise APIError(
                f"Failed to fetch holidays for year {year}: "
                f"{response.status_code} {response.reason_phrase}",
                year=year,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise APIError(
                f"Provider returned invalid JSON for year {year}",
                year=year,
                status_code=response.status_code,
            ) from e

        return self._parse_holidays(payload, year, response.status_code)

    @staticmethod
    def _parse_holidays(payload: Any, year: int, status_code: int) -> list[Holiday]:
        if not isinstance(payload, list):
            raise APIError(
                f"Unexpected response body for year {year}: expected a list",
                year=year,
                status_code=status_code,
            )

        try:
            return [
                Holiday(date=item["date"], name=item["name"], type=item.get("type") or "national")
                for item in payload
            ]
        except (TypeError, KeyError, AttributeError, ValidationError) as e:
            raise APIError(
                f"Malformed holiday record for year {year}: {e}",
                year=year,
                status_code=status_code,
            ) from e
