"""Cached user preferences and the preference-aware date/time formatter."""

import logging
import threading
import time
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable

from practical.adapters import FilePreferencesStore, PreferencesAPIAdapter
from practical.config import Config, load_config
from practical.core import dates
from practical.core.preferences import DEFAULT_PREFERENCES, Preferences
from practical.ports import PreferencesRepository

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 5 * 60
RETRY_BACKOFF_SECONDS = 30


@dataclass(frozen=True)
class _CacheEntry:
    value: Preferences
    fetched_at: float | None  # None once invalidated


class PreferenceCache:
    """
    TTL-bounded preference cache with push invalidation.

    Reads never block: while one refresh is in flight, other callers get the
    last cached value (or the defaults if nothing was ever loaded). A failed
    refresh is logged and leaves the stale value in place; further fetches
    are held off for retry_backoff seconds so a down backend is not hit on
    every read.
    """

    def __init__(
        self,
        repository: PreferencesRepository,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        retry_backoff: float = RETRY_BACKOFF_SECONDS,
    ):
        self._repository = repository
        self.ttl = ttl
        self.retry_backoff = retry_backoff
        self._clock = clock
        self._entry: _CacheEntry | None = None
        self._generation = 0
        self._retry_after: float | None = None
        self._refresh_lock = threading.Lock()

    def _is_fresh(self, entry: _CacheEntry | None) -> bool:
        return (
            entry is not None
            and entry.fetched_at is not None
            and self._clock() - entry.fetched_at < self.ttl
        )

    def _backing_off(self) -> bool:
        return self._retry_after is not None and self._clock() < self._retry_after

    def peek(self) -> Preferences | None:
        """Cached value, fresh or stale, without fetching."""
        entry = self._entry
        return entry.value if entry else None

    def get(self) -> Preferences:
        """Current preferences, refreshing at most once per TTL window."""
        entry = self._entry
        if self._is_fresh(entry) or self._backing_off():
            return entry.value if entry else DEFAULT_PREFERENCES

        if not self._refresh_lock.acquire(blocking=False):
            # Another caller is already fetching
            return entry.value if entry else DEFAULT_PREFERENCES

        try:
            entry = self._entry
            if self._is_fresh(entry):
                return entry.value
            return self._refresh(entry)
        finally:
            self._refresh_lock.release()

    def _refresh(self, stale: _CacheEntry | None) -> Preferences:
        generation = self._generation
        started = self._clock()
        try:
            value = self._repository.fetch()
        except Exception as e:
            logger.warning(f"Failed to load user preferences, retrying in {self.retry_backoff}s: {e}")
            self._retry_after = self._clock() + self.retry_backoff
            return stale.value if stale else DEFAULT_PREFERENCES

        if generation != self._generation:
            # Invalidated mid-fetch; a pushed value is newer than what we fetched
            current = self._entry
            if current is not None and current.fetched_at is not None:
                return current.value
            # Fetched before the change event; keep it but refetch next time
            self._entry = _CacheEntry(value, None)
            return value

        self._retry_after = None
        self._entry = _CacheEntry(value, started)
        logger.debug(f"Loaded user preferences: {value}")
        return value

    def invalidate(self, preferences: Preferences | None = None) -> None:
        """
        Drop freshness immediately.

        When the change event carries the new preferences they are installed
        as fresh; otherwise the next get() refetches.
        """
        self._generation += 1
        self._retry_after = None
        if preferences is not None:
            self._entry = _CacheEntry(preferences, self._clock())
        elif self._entry is not None:
            self._entry = _CacheEntry(self._entry.value, None)


class DateTimeFormatter:
    """
    Formats dates and times according to the user's cached preferences.

    Every method accepts an explicit pattern override; without one the
    cached preference is used.
    """

    def __init__(self, cache: PreferenceCache):
        self.cache = cache

    @property
    def preferences(self) -> Preferences:
        return self.cache.get()

    def invalidate(self, preferences: Preferences | None = None) -> None:
        self.cache.invalidate(preferences)

    def format_date(self, value, date_format=None) -> str:
        return dates.format_date(value, date_format or self.preferences.date_format)

    def parse_display_date(self, text, date_format=None) -> date | None:
        return dates.parse_display_date(text, date_format or self.preferences.date_format)

    def format_time(self, text, time_format=None) -> str:
        return dates.format_time(text, time_format or self.preferences.time_format)

    def format_datetime(self, value, date_format=None, time_format=None, separator: str = " at ") -> str:
        prefs = self.preferences
        return dates.format_datetime(
            value,
            date_format or prefs.date_format,
            time_format or prefs.time_format,
            separator,
        )

    def format_relative_date(self, value, today: date) -> str:
        return dates.format_relative_date(value, today, self.preferences.date_format)

    def format_utc_for_user(self, value, time_zone: str | None = None) -> str:
        prefs = self.preferences
        return dates.format_utc_for_user(
            value,
            time_zone or prefs.time_zone,
            prefs.date_format,
            prefs.time_format,
        )

    def local_to_utc(self, local_value, time_zone: str | None = None) -> datetime | None:
        return dates.local_to_utc(local_value, time_zone or self.preferences.time_zone)

    def utc_to_local(self, value, time_zone: str | None = None) -> datetime | None:
        return dates.utc_to_local(value, time_zone or self.preferences.time_zone)


def default_preferences(config: Config) -> Preferences:
    """Fallback preferences derived from the config file."""
    return Preferences(
        date_format=dates.coerce_date_format(config.date_format),
        time_format=dates.coerce_time_format(config.time_format),
        time_zone=config.timezone or "UTC",
    )


def build_preferences_repository(config: Config) -> PreferencesRepository:
    """Use the HTTP API when one is configured, the local JSON file otherwise."""
    if config.api_base_url:
        return PreferencesAPIAdapter(config)
    return FilePreferencesStore(config.preferences_path, defaults=default_preferences(config))


def build_formatter(config: Config | None = None) -> DateTimeFormatter:
    """Wire a DateTimeFormatter from configuration."""
    config = config or load_config()
    cache = PreferenceCache(build_preferences_repository(config), ttl=config.preferences_ttl)
    return DateTimeFormatter(cache)
