from datetime import datetime, timedelta

import httpx
import pytest

from br_holiday.core.cache import HolidayCache
from br_holiday.schemas.holiday import Holiday
from br_holiday.services.brasil_api import BrasilAPIClient
from br_holiday.services.holidays import HolidayService

MOCK_HOLIDAYS = [
    {"date": "2024-01-01", "name": "Confraternização Universal", "type": "national"},
    {"date": "2024-02-13", "name": "Carnaval", "type": "national"},
]


class FakeClock:
    """Controllable replacement for ``datetime.now`` and ``time.monotonic``.

    ``advance`` moves both clocks; ``set`` only moves the wall clock, like a
    system clock adjustment.
    """

    def __init__(self, now: datetime):
        self.current = now
        self.elapsed = 0.0

    def __call__(self) -> datetime:
        return self.current

    def monotonic(self) -> float:
        return self.elapsed

    def advance(self, **kwargs) -> datetime:
        delta = timedelta(**kwargs)
        self.current += delta
        self.elapsed += delta.total_seconds()
        return self.current

    def set(self, now: datetime) -> None:
        self.current = now


class FakeBrasilAPI:
    """Stand-in for the BrasilAPI endpoint served through ``httpx.MockTransport``."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.error: Exception | None = None
        self.payloads: dict[int, list[dict]] = {}

    def holidays_for(self, year: int) -> list[dict]:
        if year in self.payloads:
            return self.payloads[year]
        return [
            {**record, "date": f"{year}{record['date'][4:]}"} for record in MOCK_HOLIDAYS
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        year = int(request.url.path.rstrip("/").rsplit("/", 1)[-1])
        if self.status_code != 200:
            return httpx.Response(self.status_code, request=request)
        return httpx.Response(200, json=self.holidays_for(year), request=request)

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def mock_holidays():
    return [dict(record) for record in MOCK_HOLIDAYS]


@pytest.fixture
def clock():
    """Clock frozen mid-2026."""
    return FakeClock(datetime(2026, 6, 15, 12, 0, 0))


@pytest.fixture
def fake_api():
    return FakeBrasilAPI()


@pytest.fixture
def api_client(fake_api):
    return BrasilAPIClient(transport=httpx.MockTransport(fake_api.handler))


@pytest.fixture
def cache(clock):
    return HolidayCache(clock=clock, monotonic=clock.monotonic)


@pytest.fixture
def static_table():
    """Static table with 2024 only."""
    return {2024: tuple(Holiday(**record) for record in MOCK_HOLIDAYS)}


@pytest.fixture
async def service(static_table, cache, api_client):
    """Service using the injected static table."""
    service = HolidayService(static_holidays=static_table, cache=cache, api_client=api_client)
    yield service
    await service.close()


@pytest.fixture
async def live_only_service(static_table, cache, api_client):
    """Service that always bypasses the static table."""
    service = HolidayService(
        skip_static=True, static_holidays=static_table, cache=cache, api_client=api_client
    )
    yield service
    await service.close()
