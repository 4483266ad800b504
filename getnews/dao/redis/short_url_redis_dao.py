"""Data Access Object (DAO) implementation for managing shortened URLs in Redis

This module provides a Redis-based implementation of ShortURLBaseDAO.

Responsibilities:
    - Insert both directions of a shortlink mapping with a shared TTL;
    - Refuse to overwrite a mapping, even when several processes share one Redis;
    - Retrieve mappings by shortcode or by target URL;
    - Translate Redis failures into StorageError.

Key layout (see RedisKeySchema):
    <prefix>:links:<shortcode>:url           -> target URL
    <prefix>:targets:<sha256>:shortcode      -> shortcode

Classes:
    ShortURLRedisDAO:
        DAO for storing and retrieving ShortURLModel in a Redis datastore.

Example:
    >>> from getnews.models import ShortURLModel
    >>> from getnews.dao.redis import ShortURLRedisDAO

    >>> dao = ShortURLRedisDAO(prefix="getnews:dev")
    >>> dao.insert(ShortURLModel(target="https://example.com/page", shortcode="Ab3dE6gH9jK1mN4p"))
    <ShortURLRedisDAO>

    >>> dao.get("Ab3dE6gH9jK1mN4p").target
    'https://example.com/page'
    >>> dao.get_by_target("https://example.com/page").shortcode
    'Ab3dE6gH9jK1mN4p'
"""

import logging
from datetime import datetime, timedelta, UTC

from beartype import beartype

from getnews.models import ShortURLModel
from getnews.dao.base import ShortURLBaseDAO
from getnews.dao.redis.mixins import RedisClientMixin
from getnews.dao.redis.helpers import handle_redis_error
from getnews.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError, TargetAlreadyShortenedError
from getnews.constants import TTL


logger = logging.getLogger(__name__)


def _expires_at(ttl: int) -> datetime | None:
    # TTL returns -1 for keys without expiry and -2 for missing keys
    return datetime.now(UTC) + timedelta(seconds=ttl) if ttl >= 0 else None


class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short URL mappings

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLRedisDAO:
            Insert both directions of the mapping in one optimistic transaction.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a mapping by shortcode.

        get_by_target(target: str, **kwargs) -> ShortURLModel:
            Retrieve a mapping by target URL.

        exists(shortcode: str, **kwargs) -> bool:
            Check whether the shortcode is mapped.
    """

    @handle_redis_error
    @beartype
    def insert(self, short_url: ShortURLModel, ttl: int = TTL.ONE_YEAR, **kwargs) -> 'ShortURLRedisDAO':
        """Insert a short URL mapping into Redis

        Both keys are checked and written inside WATCH / MULTI / EXEC, so the
        write is a compare-and-set: if another client touches either key
        between the check and EXEC, Redis aborts the transaction and the check
        is repeated. Both SET commands land in the same EXEC, so no reader can
        see one direction without the other.

        Args:
            short_url (ShortURLModel):
                ShortURLModel instance representing the shortened URL mapping.
            ttl (int):
                Expiry of both keys in seconds. Defaults to one year.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLRedisDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a short URL with the same shortcode already exists.
            TargetAlreadyShortenedError:
                If the target URL already has a shortcode.
            StorageError:
                If a Redis connection issue occurs during the transaction.

        Example:
            >>> dao.insert(ShortURLModel(target='https://example.com', shortcode='Ab3dE6gH9jK1mN4p'))
            <ShortURLRedisDAO>
        """
        link_url_key = self.keys.link_url_key(short_url.shortcode)
        target_key = self.keys.target_shortcode_key(short_url.target)

        def _compare_and_set(pipe) -> None:
            if pipe.exists(link_url_key):
                raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.")
            if pipe.exists(target_key):
                raise TargetAlreadyShortenedError(f"Target URL '{short_url.target}' is already shortened.")
            pipe.multi()
            pipe.set(link_url_key, short_url.target, ex=ttl)
            pipe.set(target_key, short_url.shortcode, ex=ttl)

        self.redis.transaction(_compare_and_set, link_url_key, target_key)
        logger.debug('Stored short URL mapping.', extra={'shortcode': short_url.shortcode, 'ttl': ttl})
        return self

    @handle_redis_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a stored short URL mapping by shortcode

        Raises:
            ShortURLNotFoundError:
                If the short URL does not exist in Redis (or has expired).
            StorageError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.get('Ab3dE6gH9jK1mN4p')
            ShortURLModel(target='https://example.com', shortcode='Ab3dE6gH9jK1mN4p', ...)
        """
        link_url_key = self.keys.link_url_key(shortcode)

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.get(link_url_key)
            pipe.ttl(link_url_key)
            target, ttl = pipe.execute()

        if target is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        return ShortURLModel(target=target, shortcode=shortcode, expires_at=_expires_at(ttl))

    @handle_redis_error
    @beartype
    def get_by_target(self, target: str, **kwargs) -> ShortURLModel:
        """Retrieve a stored short URL mapping by its target URL

        Raises:
            ShortURLNotFoundError:
                If the target URL has no shortcode in Redis.
            StorageError:
                If Redis connectivity issues occur.
        """
        target_key = self.keys.target_shortcode_key(target)

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.get(target_key)
            pipe.ttl(target_key)
            shortcode, ttl = pipe.execute()

        if shortcode is None:
            raise ShortURLNotFoundError(f"Target URL '{target}' has no short URL.")

        return ShortURLModel(target=target, shortcode=shortcode, expires_at=_expires_at(ttl))

    @handle_redis_error
    @beartype
    def exists(self, shortcode: str, **kwargs) -> bool:
        return bool(self.redis.exists(self.keys.link_url_key(shortcode)))
