"""In-memory TTL cache for holidays fetched from the remote provider."""

import asyncio
import contextlib
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional

import structlog

from br_holiday.core.config import settings
from br_holiday.schemas.holiday import Holiday

logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class CacheEntry:
    """Holidays of one year and the moment they were stored.

    ``timestamp`` is wall-clock time; ``stored_at`` is a monotonic reading used
    to measure age, so wall-clock jumps do not extend an entry's life.
    """
    data: tuple[Holiday, ...]
    timestamp: datetime
    stored_at: float


class HolidayCache:
    """Year -> holidays cache whose expiry depends on the year class.

    The year class (past, current, future) is evaluated against the clock at
    read time, so an entry stored for the current year becomes permanently
    valid once that year is over.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        monotonic: Optional[Callable[[], float]] = None,
        current_year_ttl: Optional[timedelta] = None,
        future_year_ttl: Optional[timedelta] = None,
        cleanup_interval: Optional[timedelta] = None,
        max_entries: Optional[int] = None,
        trim_to: Optional[int] = None,
        cleanup_max_entries: Optional[int] = None,
        preserve_window: Optional[int] = None,
    ):
        self._clock = clock or datetime.now
        self._monotonic = monotonic or time.monotonic
        self.current_year_ttl = (
            current_year_ttl
            if current_year_ttl is not None
            else timedelta(days=settings.CURRENT_YEAR_TTL_DAYS)
        )
        self.future_year_ttl = (
            future_year_ttl
            if future_year_ttl is not None
            else timedelta(days=settings.FUTURE_YEAR_TTL_DAYS)
        )
        self.cleanup_interval = (
            cleanup_interval
            if cleanup_interval is not None
            else timedelta(hours=settings.CACHE_CLEANUP_INTERVAL_HOURS)
        )
        self.max_entries = max_entries if max_entries is not None else settings.CACHE_MAX_ENTRIES
        self.trim_to = trim_to if trim_to is not None else settings.CACHE_TRIM_TO
        self.cleanup_max_entries = (
            cleanup_max_entries
            if cleanup_max_entries is not None
            else settings.CACHE_CLEANUP_MAX_ENTRIES
        )
        self.preserve_window = (
            preserve_window if preserve_window is not None else settings.CACHE_PRESERVE_WINDOW_YEARS
        )

        self._entries: dict[int, CacheEntry] = {}
        self._cleanup_task: Optional[asyncio.Task] = None

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, year: int) -> bool:
        return year in self._entries

    def years(self) -> list[int]:
        return list(self._entries)

    def now(self) -> datetime:
        return self._clock()

    def ttl_for(self, year: int) -> Optional[timedelta]:
        """TTL for ``year`` right now; None means the entry never expires."""
        current_year = self.now().year
        if year < current_year:
            return None
        if year == current_year:
            return self.current_year_ttl
        return self.future_year_ttl

    def _is_fresh(self, year: int, entry: CacheEntry) -> bool:
        ttl = self.ttl_for(year)
        if ttl is None:
            return True
        return self._monotonic() - entry.stored_at < ttl.total_seconds()

    def get(self, year: int) -> Optional[list[Holiday]]:
        """Return a copy of the cached holidays, or None on a miss.

        Stale entries are left in place; they are overwritten by the next
        successful fetch or reaped by ``cleanup``.
        """
        entry = self._entries.get(year)
        if entry is None:
            logger.debug("Holiday cache miss", year=year)
            return None

        if not self._is_fresh(year, entry):
            logger.debug("Holiday cache entry stale", year=year, cached_at=entry.timestamp.isoformat())
            return None

        logger.debug("Holiday cache hit", year=year)
        return list(entry.data)

    def set(self, year: int, holidays: Iterable[Holiday]) -> None:
        """Store holidays for ``year`` stamped with the current time."""
        self._entries[year] = CacheEntry(
            data=tuple(holidays), timestamp=self.now(), stored_at=self._monotonic()
        )

        if len(self._entries) > self.max_entries:
            evicted = self._evict_oldest(self.trim_to)
            logger.warning(
                "Holiday cache over capacity, evicted oldest entries",
                evicted=evicted,
                size=len(self._entries),
            )

    def delete(self, year: int) -> bool:
        return self._entries.pop(year, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def _evict_oldest(self, target: int, preserved: Iterable[int] = ()) -> int:
        """Evict the oldest entries until ``target`` entries remain.

        Years in ``preserved`` are skipped even when they are the oldest.
        """
        keep = set(preserved)
        candidates = sorted(
            (year for year in self._entries if year not in keep),
            key=lambda year: self._entries[year].stored_at,
        )

        evicted = 0
        for year in candidates:
            if len(self._entries) <= target:
                break
            del self._entries[year]
            evicted += 1
        return evicted

    def cleanup(self) -> dict[str, int]:
        """Run one cleanup pass: drop expired entries, then enforce the size cap."""
        expired = [
            year for year, entry in self._entries.items() if not self._is_fresh(year, entry)
        ]
        for year in expired:
            del self._entries[year]

        evicted = 0
        if len(self._entries) > self.cleanup_max_entries:
            current_year = self.now().year
            window = range(current_year - self.preserve_window, current_year + self.preserve_window + 1)
            evicted = self._evict_oldest(self.cleanup_max_entries, preserved=window)

        result = {"expired": len(expired), "evicted": evicted, "size": len(self._entries)}
        logger.info("Holiday cache cleanup finished", **result)
        return result

    @property
    def running(self) -> bool:
        return self._cleanup_task is not None and not self._cleanup_task.done()

    def start(self) -> None:
        """Start the periodic cleanup task on the running event loop."""
        if self.running:
            return

        self._cleanup_task = asyncio.get_running_loop().create_task(
            self._run_periodic_cleanup(), name="holiday-cache-cleanup"
        )
        logger.info(
            "Holiday cache cleanup scheduled",
            interval_seconds=self.cleanup_interval.total_seconds(),
        )

    async def stop(self) -> None:
        """Cancel the periodic cleanup task, if any."""
        task, self._cleanup_task = self._cleanup_task, None
        if task is None or task.done():
            return

        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Holiday cache cleanup stopped")

    async def _run_periodic_cleanup(self) -> None:
        interval = self.cleanup_interval.total_seconds()
        while True:
            await asyncio.sleep(interval)
            try:
                self.cleanup()
            except Exception as e:
                logger.error("Holiday cache cleanup failed", exc_info=e)
