from getnews.dao.redis.redis_key_schema import RedisKeySchema
from getnews.dao.redis.mixins import RedisClientMixin
from getnews.dao.redis.short_url_redis_dao import ShortURLRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'ShortURLRedisDAO',
]
