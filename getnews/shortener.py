"""Concurrency-safe URL shortener

Maps long URLs to short Base62 codes and back. Mapping the same URL twice
yields the same code; two different URLs never share a code while their
mappings are alive.

Classes:
    URLShortener:
        Get-or-create shortlinks on top of a ShortURLBaseDAO.

Example:
    >>> from getnews.dao.memory import ShortURLMemoryDAO
    >>> shortener = URLShortener(ShortURLMemoryDAO(), base_url='https://getnews.tech')
    >>> link = shortener.get_shortened_url('https://example.com/a/very/long/article')
    >>> link
    'https://getnews.tech/s/q0BzF8kTn2WcY5aL'
    >>> shortener.get_shortened_url('https://example.com/a/very/long/article') == link
    True
    >>> shortener.get_original_url('q0BzF8kTn2WcY5aL')
    'https://example.com/a/very/long/article'
"""

import logging
import threading

from getnews.constants import Shortcode
from getnews.models import ShortURLModel
from getnews.dao.base import ShortURLBaseDAO
from getnews.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError, TargetAlreadyShortenedError
from getnews.utils.shortener import generate_shortcode


logger = logging.getLogger(__name__)


class URLShortener:
    """Get-or-create shortlinks for long URLs.

    All calls to get_shortened_url() on one instance are serialized by a
    single lock: the uniqueness of shortcodes is a property of the whole
    namespace, so minting for two different URLs must not interleave. The lock
    is held across the whole lookup-check-mint-write sequence, which also
    guarantees that a second caller for the same URL sees the first caller's
    write and reuses its code.

    Across processes the lock is not enough; there the DAO's insert() acts as
    a compare-and-set and reports which side of the mapping already exists.

    Store failures propagate as StorageError; nothing is retried here.

    Attributes:
        dao (ShortURLBaseDAO):
            Store holding both directions of every mapping.
        base_url (str):
            Public base URL shortlinks are rendered under.
        length (int):
            Length of generated shortcodes.
    """

    def __init__(self, dao: ShortURLBaseDAO, base_url: str, length: int = Shortcode.LENGTH):
        self.dao = dao
        self.base_url = base_url.rstrip('/')
        self.length = length
        self._lock = threading.Lock()

    def short_url(self, shortcode: str) -> str:
        return f'{self.base_url}/s/{shortcode}'

    def get_shortened_url(self, url: str) -> str:
        """Return the shortlink for a URL, minting one on first use

        Args:
            url (str):
                The long URL to shorten.

        Returns:
            str: full shortlink, e.g. 'https://getnews.tech/s/q0BzF8kTn2WcY5aL'

        Raises:
            StorageError:
                If the underlying store fails.
        """
        with self._lock:
            while True:
                try:
                    existing = self.dao.get_by_target(url)
                except ShortURLNotFoundError:
                    pass
                else:
                    return self.short_url(existing.shortcode)

                shortcode = self._unused_shortcode()
                try:
                    self.dao.insert(ShortURLModel(target=url, shortcode=shortcode))
                except ShortURLAlreadyExistsError:
                    # Another process took the code between the check and the write
                    logger.debug('Shortcode collision on insert, drawing a new one.', extra={'shortcode': shortcode})
                    continue
                except TargetAlreadyShortenedError:
                    # Another process shortened the same URL first; reuse its code
                    logger.debug('Target shortened concurrently, reusing existing code.', extra={'target': url})
                    continue

                logger.info('Minted new short URL.', extra={'shortcode': shortcode, 'target': url})
                return self.short_url(shortcode)

    def get_original_url(self, shortcode: str) -> str | None:
        """Return the URL a shortcode maps to, or None if unknown or expired

        Raises:
            StorageError:
                If the underlying store fails.
        """
        try:
            return self.dao.get(shortcode).target
        except ShortURLNotFoundError:
            return None

    def _unused_shortcode(self) -> str:
        shortcode = generate_shortcode(self.length)
        while self.dao.exists(shortcode):
            logger.debug('Shortcode collision, drawing a new one.', extra={'shortcode': shortcode})
            shortcode = generate_shortcode(self.length)
        return shortcode
