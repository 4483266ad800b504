"""Redis connection shared by the Redis-backed short URL store

`services.build_dao` turns the handler's AppConfig `redis` section into
`redis_*` keyword arguments, so every key of that section maps onto one
parameter of `RedisClientMixin`. The client is checked with a PING as soon
as it is built: an unreachable server fails the cold start with a
StorageError instead of the first request.

Example:
    >>> dao = ShortURLRedisDAO(redis_host='redis.internal', redis_socket_timeout=2, prefix='getnews:prod')
    >>> dao.keys.link_url_key('AbC123')
    'getnews:prod:links:AbC123:url'
"""

import redis

from getnews.dao.redis.redis_key_schema import RedisKeySchema
from getnews.dao.redis.helpers import describe_connection
from getnews.exceptions import StorageError


class RedisClientMixin:
    """Owns `self.redis` and `self.keys` for Redis-backed DAOs"""

    def __init__(
        self,
        redis_host: str = 'localhost',
        redis_port: int | str = 6379,
        redis_db: int | str = 0,
        redis_decode_responses: bool = True,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_socket_timeout: float | None = 5.0,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        """Connect to Redis, or adopt `redis_client` when given

        `redis_socket_timeout` bounds both connecting and each command, so a
        stalled server surfaces as StorageError well within the Lambda timeout.
        Port and db may arrive as strings from AppConfig.

        Raises:
            StorageError: If Redis doesn't answer the initial PING.
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
                socket_timeout=redis_socket_timeout,
                socket_connect_timeout=redis_socket_timeout,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis; with raise_error=False report failure as False"""
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            if raise_error:
                raise StorageError(
                    f"Can't connect to Redis at {describe_connection(self.redis)}. Check the provided configuration parameters."
                ) from e
            return False
        return True
