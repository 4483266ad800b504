"""Visitor country lookup backed by a MaxMind GeoIP2/GeoLite2 database

The analytics summary resolves each request's client IP to a country name.
Set GEOIP_DATABASE to the path of a `.mmdb` file (Country or City edition)
to enable it; without it the visitor country is reported as unknown.

Example:
    >>> lookup = build_geoip_lookup('/opt/geoip/GeoLite2-Country.mmdb')
    >>> lookup('81.2.69.160')
    'United Kingdom'
    >>> lookup('10.0.0.1') is None
    True
"""

import logging
from collections.abc import Callable

import geoip2.database
import geoip2.errors
import maxminddb

from getnews.exceptions import BadConfigurationError


logger = logging.getLogger(__name__)

type GeoIPLookup = Callable[[str | None], str | None]


def client_address(forwarded: str | None) -> str | None:
    """Return the originating client of an X-Forwarded-For style value"""
    if not forwarded:
        return None
    return forwarded.split(',')[0].strip() or None


def build_geoip_lookup(database_path: str) -> GeoIPLookup:
    """Open the database at `database_path` and return an IP -> country name function

    Raises:
        BadConfigurationError:
            If the database can't be opened.
    """
    try:
        reader = geoip2.database.Reader(database_path)
    except (OSError, ValueError, maxminddb.InvalidDatabaseError) as e:
        raise BadConfigurationError(f"Can't open GeoIP database {database_path}.") from e

    database_type = reader.metadata().database_type
    query = reader.city if 'City' in database_type else reader.country
    logger.debug('Opened GeoIP database.', extra={'path': database_path, 'databaseType': database_type})

    def lookup(ip: str | None) -> str | None:
        address = client_address(ip)
        if address is None:
            return None
        try:
            return query(address).country.name
        except geoip2.errors.AddressNotFoundError:
            return None
        except ValueError:
            logger.debug('Skipping invalid client address.', extra={'ip': address})
            return None

    return lookup
