"""Process-wide service instances shared by the Lambda handlers

A Lambda container serves many invocations, so the objects whose state must
outlive one request are created once per process and reused:

    - the URLShortener (its lock guards the whole shortcode namespace);
    - the news API cache;
    - the analytics cache;
    - the GeoIP database reader.

Functions:
    build_dao(app_config: dict) -> ShortURLBaseDAO
        Construct the DAO selected by the handler's configuration section.

    get_shortener(app_config: dict) -> URLShortener
        Return the process-wide URLShortener, creating it on first use.

    get_news_client() -> NewsAPIClient
        Return the process-wide news API client, creating it on first use.

    get_geoip_lookup() -> GeoIPLookup | None
        Return the process-wide visitor country lookup, or None without GEOIP_DATABASE.

    reset() -> None
        Drop every instance (tests only).
"""

import logging
import threading

from cachetools import TTLCache

from getnews.analytics import build_analytics_cache
from getnews.dao.base import ShortURLBaseDAO
from getnews.dao.memory import ShortURLMemoryDAO
from getnews.dao.redis import ShortURLRedisDAO
from getnews.exceptions import BadConfigurationError
from getnews.geoip import GeoIPLookup, build_geoip_lookup
from getnews.news import NewsAPIClient, build_news_cache
from getnews.shortener import URLShortener
from getnews.types import AppConfig
from getnews.utils.config import app_prefix, root_domain, news_api_key, news_api_base_url, geoip_database


logger = logging.getLogger(__name__)

_lock = threading.Lock()
_shortener: URLShortener | None = None
_news_client: NewsAPIClient | None = None
_analytics_cache: TTLCache | None = None
_geoip_lookup: GeoIPLookup | None = None


def build_dao(app_config: AppConfig) -> ShortURLBaseDAO:
    """Construct the DAO for the active backend

    Args:
        app_config (dict): {<backend>: <settings>} as returned by load_config()

    Raises:
        BadConfigurationError: If the backend is unknown.
        StorageError: If the backend is unreachable.
    """
    if 'redis' in app_config:
        logger.debug('Using Redis as the backend database for short URLs.')
        redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}
        return ShortURLRedisDAO(**redis_config, prefix=app_prefix())
    if 'memory' in app_config:
        logger.debug('Using process memory as the backend database for short URLs.')
        return ShortURLMemoryDAO()
    raise BadConfigurationError(f'Unsupported short URL backend(s): {", ".join(app_config) or "none"}.')


def get_shortener(app_config: AppConfig) -> URLShortener:
    global _shortener
    with _lock:
        if _shortener is None:
            _shortener = URLShortener(build_dao(app_config), base_url=f'https://{root_domain()}')
        return _shortener


def get_news_client() -> NewsAPIClient:
    global _news_client
    with _lock:
        if _news_client is None:
            _news_client = NewsAPIClient(
                api_key=news_api_key(),
                base_url=news_api_base_url(),
                cache=build_news_cache(),
            )
        return _news_client


def get_analytics_cache() -> TTLCache:
    global _analytics_cache
    with _lock:
        if _analytics_cache is None:
            _analytics_cache = build_analytics_cache()
        return _analytics_cache


def get_geoip_lookup() -> GeoIPLookup | None:
    global _geoip_lookup
    database = geoip_database()
    if database is None:
        return None
    with _lock:
        if _geoip_lookup is None:
            _geoip_lookup = build_geoip_lookup(database)
        return _geoip_lookup


def reset() -> None:
    global _shortener, _news_client, _analytics_cache, _geoip_lookup
    with _lock:
        _shortener = None
        _news_client = None
        _analytics_cache = None
        _geoip_lookup = None
