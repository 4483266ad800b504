"""In-process implementation of ShortURLBaseDAO

Backs the shortener with two TTL maps (shortcode -> target, target -> shortcode)
that expire together. Meant for local development and tests; mappings live
only as long as the process.

The clock is injectable, so expiry can be driven deterministically:

    >>> now = [0.0]
    >>> dao = ShortURLMemoryDAO(ttl=10, timer=lambda: now[0])
    >>> dao.insert(ShortURLModel(target='https://example.com', shortcode='abc'))
    <ShortURLMemoryDAO>
    >>> now[0] = 11.0
    >>> dao.exists('abc')
    False
"""

import sys
import time
import threading
from datetime import datetime, timedelta, UTC
from collections.abc import Callable

from beartype import beartype
from cachetools import TTLCache

from getnews.models import ShortURLModel
from getnews.dao.base import ShortURLBaseDAO
from getnews.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError, TargetAlreadyShortenedError
from getnews.constants import TTL


class ShortURLMemoryDAO(ShortURLBaseDAO):
    """TTL-map backed DAO for short URL mappings."""

    def __init__(self, ttl: int = TTL.ONE_YEAR, timer: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self.timer = timer
        # Unbounded: size-based eviction would drop one direction of a mapping
        self._urls = TTLCache(maxsize=sys.maxsize, ttl=ttl, timer=timer)
        self._shortcodes = TTLCache(maxsize=sys.maxsize, ttl=ttl, timer=timer)
        self._lock = threading.Lock()

    def _model(self, target: str, shortcode: str, inserted_at: float) -> ShortURLModel:
        remaining = inserted_at + self.ttl - self.timer()
        return ShortURLModel(
            target=target,
            shortcode=shortcode,
            expires_at=datetime.now(UTC) + timedelta(seconds=remaining),
        )

    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLMemoryDAO':
        with self._lock:
            if short_url.shortcode in self._urls:
                raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.")
            if short_url.target in self._shortcodes:
                raise TargetAlreadyShortenedError(f"Target URL '{short_url.target}' is already shortened.")
            inserted_at = self.timer()
            self._urls[short_url.shortcode] = (short_url.target, inserted_at)
            self._shortcodes[short_url.target] = (short_url.shortcode, inserted_at)
        return self

    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        with self._lock:
            entry = self._urls.get(shortcode)
        if entry is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
        target, inserted_at = entry
        return self._model(target, shortcode, inserted_at)

    @beartype
    def get_by_target(self, target: str, **kwargs) -> ShortURLModel:
        with self._lock:
            entry = self._shortcodes.get(target)
        if entry is None:
            raise ShortURLNotFoundError(f"Target URL '{target}' has no short URL.")
        shortcode, inserted_at = entry
        return self._model(target, shortcode, inserted_at)

    @beartype
    def exists(self, shortcode: str, **kwargs) -> bool:
        with self._lock:
            return shortcode in self._urls

    def __repr__(self) -> str:
        return '<ShortURLMemoryDAO>'
