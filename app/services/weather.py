from __future__ import annotations

import threading
import time
from collections import OrderedDict
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Protocol

import structlog

from app.core.errors import CityNotFound, ErrorKind, SummaryFailure, classify_failure
from app.models.weather import WeatherSummary
from app.services.forecast import aggregate

logger = structlog.get_logger()


class ForecastFetcher(Protocol):
    def fetch_forecast(self, city: str) -> str: ...


@dataclass
class _KeyLock:
    lock: threading.Lock
    waiters: int = 0


class SummaryCache:
    """Bounded, thread-safe cache of weather summaries keyed by raw city string.

    Entries expire after ``ttl_seconds`` (disabled when ``<= 0``) and the
    least recently used entry is evicted once ``max_entries`` is exceeded.
    Concurrent misses for the same key are collapsed into one computation.
    """

    def __init__(
        self,
        *,
        max_entries: int = 1024,
        ttl_seconds: float = 600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_entries = max(int(max_entries), 1)
        self._ttl_seconds = float(ttl_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: OrderedDict[str, tuple[float, WeatherSummary]] = OrderedDict()
        self._key_locks: dict[str, _KeyLock] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, city: str) -> WeatherSummary | None:
        with self._lock:
            item = self._entries.get(city)
            if item is None:
                return None
            stored_at, summary = item
            if self._is_expired(stored_at):
                del self._entries[city]
                return None
            self._entries.move_to_end(city)
            return summary

    def put(self, city: str, summary: WeatherSummary) -> None:
        with self._lock:
            self._entries[city] = (self._clock(), summary)
            self._entries.move_to_end(city)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

    def invalidate(self, city: str) -> bool:
        with self._lock:
            return self._entries.pop(city, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def get_or_compute(
        self, city: str, compute: Callable[[], WeatherSummary]
    ) -> WeatherSummary:
        cached = self.get(city)
        if cached is not None:
            return cached

        with self._single_flight(city):
            # Another caller may have filled the entry while we waited.
            cached = self.get(city)
            if cached is not None:
                return cached
            summary = compute()
            self.put(city, summary)
            return summary

    def _is_expired(self, stored_at: float) -> bool:
        if self._ttl_seconds <= 0:
            return False
        return self._clock() - stored_at >= self._ttl_seconds

    @contextmanager
    def _single_flight(self, city: str) -> Iterator[None]:
        with self._lock:
            key_lock = self._key_locks.get(city)
            if key_lock is None:
                key_lock = self._key_locks[city] = _KeyLock(lock=threading.Lock())
            key_lock.waiters += 1
        try:
            with key_lock.lock:
                yield
        finally:
            with self._lock:
                key_lock.waiters -= 1
                if key_lock.waiters == 0:
                    del self._key_locks[city]


class WeatherSummaryService:
    def __init__(self, *, fetcher: ForecastFetcher, cache: SummaryCache) -> None:
        self._fetcher = fetcher
        self._cache = cache

    def summarize(self, city: str) -> WeatherSummary | SummaryFailure:
        try:
            return self._cache.get_or_compute(city, lambda: self._compute(city))
        except Exception as e:  # noqa: BLE001 - classified for the HTTP layer
            failure = classify_failure(e)
            if failure.kind is ErrorKind.OTHER:
                logger.exception("weather.summary_failed", city=city)
            else:
                logger.warning(
                    "weather.summary_failed", city=city, kind=failure.kind.value
                )
            return failure

    def _compute(self, city: str) -> WeatherSummary:
        logger.info("weather.cache_miss", city=city)
        raw = self._fetcher.fetch_forecast(city)
        if not raw:
            raise CityNotFound(city)
        return aggregate(raw)
