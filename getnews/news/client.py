"""Client for the third-party news API

Wraps the `/top-headlines` endpoint of newsapi.org (v2) with an httpx client
and a TTL cache so identical queries within ten minutes hit the API once.

The cache is an explicit component: build it once per process with
`build_news_cache()` and pass it to every client instance. Its clock is
injectable for tests.

Example:
    >>> cache = build_news_cache()
    >>> client = NewsAPIClient(api_key='...', cache=cache)
    >>> articles = client.top_headlines(country='us', category='business', page_size=5)
    >>> articles[0]['title']
    'Markets rally as ...'
"""

import time
import logging
import threading
from collections.abc import Callable

import httpx
from cachetools import TTLCache

from getnews.constants import TTL, CacheSize, DEFAULT_COUNTRY, DEFAULT_NEWS_API_BASE_URL
from getnews.exceptions import NewsAPIError
from getnews.types import Article


logger = logging.getLogger(__name__)

USER_AGENT = 'getnews.tech'
DEFAULT_TIMEOUT_SECONDS = 10.0


def build_http_client(timeout: float = DEFAULT_TIMEOUT_SECONDS) -> httpx.Client:
    return httpx.Client(
        timeout=httpx.Timeout(timeout),
        headers={'User-Agent': USER_AGENT, 'Accept': 'application/json'},
    )


def build_news_cache(ttl: int = TTL.NEWS_CACHE, timer: Callable[[], float] = time.monotonic) -> TTLCache:
    return TTLCache(maxsize=CacheSize.NEWS, ttl=ttl, timer=timer)


class NewsAPIClient:
    """Fetch top headlines from the news API.

    Attributes:
        api_key (str):
            Key sent in the X-Api-Key header.
        base_url (str):
            API root, e.g. 'https://newsapi.org/v2'.
        http (httpx.Client):
            HTTP client used for every request.
        cache (TTLCache):
            Results keyed by request parameters.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_NEWS_API_BASE_URL,
        http_client: httpx.Client | None = None,
        cache: TTLCache | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip('/')
        self.http = http_client or build_http_client()
        self.cache = cache if cache is not None else build_news_cache()
        self._cache_lock = threading.Lock()

    def top_headlines(
        self,
        *,
        country: str | None = None,
        category: str | None = None,
        query: str | None = None,
        page: int | None = None,
        page_size: int | None = None,
    ) -> list[Article]:
        """Return the top headlines matching the given filters

        The API needs at least one filter, so the country falls back to 'us'
        when no country, category or query is given.

        Raises:
            NewsAPIError:
                On transport errors, error statuses or malformed payloads.
        """
        if not (country or category or query):
            country = DEFAULT_COUNTRY

        params = {
            'country': country,
            'category': category,
            'q': query,
            'page': page,
            'pageSize': page_size,
        }
        params = {k: v for k, v in params.items() if v is not None}
        key = tuple(sorted(params.items()))

        with self._cache_lock:
            cached = self.cache.get(key)
        if cached is not None:
            logger.debug('News cache hit.', extra={'params': params})
            return cached

        articles = self._fetch('top-headlines', params)
        with self._cache_lock:
            self.cache[key] = articles
        return articles

    def _fetch(self, endpoint: str, params: dict) -> list[Article]:
        url = f'{self.base_url}/{endpoint}'
        logger.debug('Requesting news API.', extra={'url': url, 'params': params})
        try:
            response = self.http.get(url, params=params, headers={'X-Api-Key': self.api_key})
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise NewsAPIError(f'News API responded with status {e.response.status_code}.') from e
        except httpx.HTTPError as e:
            raise NewsAPIError(f'Error fetching articles from the news API: {e}') from e
        except ValueError as e:
            raise NewsAPIError('News API responded with invalid JSON.') from e

        if not isinstance(data, dict) or data.get('status') != 'ok' or not isinstance(data.get('articles'), list):
            message = data.get('message') if isinstance(data, dict) else None
            raise NewsAPIError(f'News API returned an unexpected payload: {message or "missing articles"}')

        return data['articles']
