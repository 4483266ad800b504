"""Usage analytics from the request log

The news handler logs one record per served request with
`extra={'event': 'request', ...}`; with ANALYTICS_FILE set, JsonFormatter
appends those records to a JSON-lines file. This module reads the file back
and summarizes it, optionally resolving each client IP to the visitor's
country (see getnews.geoip).

Summaries are cached per file for an hour. Build the cache once per process
with `build_analytics_cache()` and pass it in.

Example:
    >>> cache = build_analytics_cache()
    >>> lookup = build_geoip_lookup('/opt/geoip/GeoLite2-Country.mmdb')
    >>> summary = load_analytics('/var/log/getnews/analytics.log', cache, lookup)
    >>> summary['total']
    1289
    >>> summary['by_country']
    {'us': 1001, 'gb': 120, 'none': 168}
    >>> summary['by_visitor_country']
    {'United States': 990, 'Germany': 150, 'unknown': 149}
"""

import json
import time
import logging
import threading
from collections import Counter
from collections.abc import Callable
from typing import Any

from cachetools import TTLCache

from getnews.constants import TTL, CacheSize
from getnews.exceptions import StorageError
from getnews.geoip import GeoIPLookup


logger = logging.getLogger(__name__)

REQUEST_EVENT = 'request'

_lock = threading.Lock()


def build_analytics_cache(ttl: int = TTL.ANALYTICS_CACHE, timer: Callable[[], float] = time.monotonic) -> TTLCache:
    return TTLCache(maxsize=CacheSize.ANALYTICS, ttl=ttl, timer=timer)


def parse_records(lines: list[bytes]) -> list[dict[str, Any]]:
    """Keep the request records of a JSON-lines log, skipping anything malformed"""
    records = []
    for number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            record = json.loads(line.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError):
            logger.warning('Skipping malformed analytics line.', extra={'line_number': number})
            continue
        if isinstance(record, dict) and record.get('event') == REQUEST_EVENT:
            records.append(record)
    return records


def enrich(records: list[dict[str, Any]], lookup: GeoIPLookup) -> list[dict[str, Any]]:
    """Add the visitor's country, resolved from the client IP, to each record"""
    for record in records:
        record['visitor_country'] = lookup(record.get('ip'))
    return records


def summarize(records: list[dict[str, Any]]) -> dict[str, Any]:
    by_country = Counter(str(record.get('country') or 'none') for record in records)
    by_visitor_country = Counter(str(record.get('visitor_country') or 'unknown') for record in records)
    by_status = Counter(str(record.get('status')) for record in records)
    return {
        'total': len(records),
        'by_country': dict(by_country),
        'by_visitor_country': dict(by_visitor_country),
        'by_status': dict(by_status),
        'requests': records,
    }


def load_analytics(path: str, cache: TTLCache, lookup: GeoIPLookup | None = None) -> dict[str, Any]:
    """Read and summarize the request log at `path`

    Args:
        path (str): JSON-lines request log.
        cache (TTLCache): summaries keyed by path.
        lookup (GeoIPLookup | None): client IP -> country name; visitors are
            left unknown without it.

    Raises:
        StorageError:
            If the log file can't be read.
    """
    with _lock:
        cached = cache.get(path)
    if cached is not None:
        return cached

    try:
        with open(path, 'rb') as f:
            lines = f.readlines()
    except OSError as e:
        raise StorageError(f"Can't read analytics file {path}.") from e

    records = parse_records(lines)
    if lookup is not None:
        records = enrich(records, lookup)
    summary = summarize(records)
    with _lock:
        cache[path] = summary
    return summary
