"""Unit tests for the ShortURLRedisDAO

Test coverage includes:

1. Insertion behavior
   - Validates inserting a short URL stores both directions with a shared TTL.
   - Confirms the write runs inside an optimistic transaction watching both keys.
   - Confirms taken shortcodes raise ShortURLAlreadyExistsError.
   - Confirms already shortened targets raise TargetAlreadyShortenedError.
   - Ensures invalid types raise TypeError or BeartypeCallHintParamViolation.
   - Confirms Redis connection errors raise StorageError.

2. Retrieval by shortcode
   - Ensures fetching valid shortcodes returns a populated ShortURLModel.
   - Confirms missing keys raise ShortURLNotFoundError.
   - Confirms Redis connection errors raise StorageError.

3. Retrieval by target
   - Ensures fetching a shortened target returns its shortcode.
   - Confirms unknown targets raise ShortURLNotFoundError.

4. Existence checks
"""

import re
from datetime import datetime, timedelta, UTC
from unittest.mock import MagicMock, call

import pytest
import redis
from beartype.roar import BeartypeCallHintParamViolation
from freezegun import freeze_time

from getnews.constants import TTL
from getnews.exceptions import StorageError
from getnews.models import ShortURLModel
from getnews.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError, TargetAlreadyShortenedError
from getnews.dao.redis import RedisKeySchema, ShortURLRedisDAO


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def app_prefix():
    """Provide a consistent Redis key prefix for testing."""
    return 'testapp:test'


@pytest.fixture
def redis_client():
    """Mock a Redis pipeline-compatible client.

    transaction() runs the given function right away against the same mock,
    the way redis-py does once WATCH succeeds.
    """
    _redis_client = MagicMock(spec=redis.client.Pipeline)
    _redis_client.exists.return_value = False
    _redis_client.pipeline.return_value = _redis_client
    _redis_client.transaction.side_effect = lambda func, *watches, **kwargs: func(_redis_client)
    _redis_client.__enter__.return_value = _redis_client
    _redis_client.__exit__.return_value = None
    _redis_client.connection_pool = MagicMock()
    _redis_client.connection_pool.connection_kwargs = {'host': '203.0.113.1', 'port': 18000, 'db': 5}
    return _redis_client


@pytest.fixture
def key_schema():
    """Mock RedisKeySchema to return predictable key values."""
    mock = MagicMock(spec=RedisKeySchema)
    mock.link_url_key.return_value = 'testapp:test:links:abc123:url'
    mock.target_shortcode_key.return_value = 'testapp:test:targets:deadbeef:shortcode'
    return mock


@pytest.fixture
def dao(redis_client, key_schema, app_prefix):
    """Create a ShortURLRedisDAO instance with mocked dependencies."""
    _dao = ShortURLRedisDAO(redis_client=redis_client, prefix=app_prefix)
    _dao.keys = key_schema
    return _dao


@pytest.fixture
def short_url():
    return ShortURLModel(target='https://example.com/test', shortcode='abc123')


# -------------------------------
# 1. Insertion behavior
# -------------------------------


def test_insert_short_url(dao, redis_client, short_url):
    """Ensure both directions of the mapping are written with the same TTL."""
    result = dao.insert(short_url)

    assert result is dao
    redis_client.transaction.assert_called_once()
    assert redis_client.transaction.call_args.args[1:] == ('testapp:test:links:abc123:url', 'testapp:test:targets:deadbeef:shortcode')
    redis_client.multi.assert_called_once()
    redis_client.set.assert_has_calls(
        [
            call('testapp:test:links:abc123:url', 'https://example.com/test', ex=TTL.ONE_YEAR),
            call('testapp:test:targets:deadbeef:shortcode', 'abc123', ex=TTL.ONE_YEAR),
        ],
        any_order=False,
    )


def test_insert_short_url_with_custom_ttl(dao, redis_client, short_url):
    dao.insert(short_url, ttl=60)

    assert redis_client.set.call_count == 2
    for _call in redis_client.set.call_args_list:
        assert _call.kwargs == {'ex': 60}


def test_insert_checks_keys_before_multi(dao, redis_client, short_url):
    """Ensure existence checks run while watching, before MULTI starts buffering."""
    manager = MagicMock()
    manager.attach_mock(redis_client.exists, 'exists')
    manager.attach_mock(redis_client.multi, 'multi')
    manager.attach_mock(redis_client.set, 'set')

    dao.insert(short_url)

    names = [name for name, _, _ in manager.mock_calls]
    assert names == ['exists', 'exists', 'multi', 'set', 'set']


def test_insert_short_url_which_already_exists(dao, redis_client, short_url):
    """Ensure taken shortcodes raise ShortURLAlreadyExistsError and nothing is written."""
    redis_client.exists.side_effect = lambda key: key == 'testapp:test:links:abc123:url'

    with pytest.raises(ShortURLAlreadyExistsError, match=re.escape("Short URL with code 'abc123' already exists.")):
        dao.insert(short_url)

    redis_client.multi.assert_not_called()
    redis_client.set.assert_not_called()


def test_insert_target_which_is_already_shortened(dao, redis_client, short_url):
    """Ensure a second shortcode is never minted for the same target."""
    redis_client.exists.side_effect = lambda key: key == 'testapp:test:targets:deadbeef:shortcode'

    with pytest.raises(TargetAlreadyShortenedError, match=re.escape("Target URL 'https://example.com/test' is already shortened.")):
        dao.insert(short_url)

    redis_client.set.assert_not_called()


def test_insert_short_url_with_invalid_type(dao):
    """Ensure inserting invalid types raises TypeError or Beartype error."""
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.insert('https://example.com/notamodel')


def test_insert_short_url_with_redis_connection_error(dao, redis_client, short_url):
    """Ensure Redis connection errors during insert raise StorageError."""
    redis_client.transaction.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(StorageError, match="Can't connect to Redis at 203.0.113.1:18000/5."):
        dao.insert(short_url)


def test_insert_short_url_with_redis_command_error(dao, redis_client, short_url):
    """Ensure other Redis failures raise StorageError too."""
    redis_client.transaction.side_effect = redis.exceptions.ResponseError('OOM command not allowed')

    with pytest.raises(StorageError, match='Redis operation failed: OOM command not allowed'):
        dao.insert(short_url)


# -------------------------------
# 2. Retrieval by shortcode
# -------------------------------


@freeze_time('2026-01-01')
def test_get_short_url(dao, redis_client):
    """Ensure valid shortcode retrieval returns a complete ShortURLModel."""
    redis_client.execute.return_value = ('https://example.com/test', TTL.ONE_YEAR)

    short_url = dao.get('abc123')

    assert isinstance(short_url, ShortURLModel)
    assert short_url.target == 'https://example.com/test'
    assert short_url.shortcode == 'abc123'
    assert short_url.expires_at == datetime(2026, 1, 1, tzinfo=UTC) + timedelta(seconds=TTL.ONE_YEAR)
    redis_client.get.assert_called_once_with('testapp:test:links:abc123:url')
    redis_client.ttl.assert_called_once_with('testapp:test:links:abc123:url')


def test_get_short_url_without_expiry(dao, redis_client):
    """Ensure keys without TTL map to expires_at=None."""
    redis_client.execute.return_value = ('https://example.com/test', -1)
    assert dao.get('abc123').expires_at is None


def test_get_short_url_with_invalid_type(dao):
    """Ensure invalid shortcode types raise TypeError or Beartype error."""
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.get(12345)


def test_get_short_url_with_redis_connection_error(dao, redis_client):
    """Ensure Redis connection errors during get raise StorageError."""
    redis_client.get.side_effect = redis.exceptions.ConnectionError('Connection Error')

    with pytest.raises(StorageError, match="Can't connect to Redis at 203.0.113.1:18000/5."):
        dao.get('abc123')


def test_get_short_url_which_does_not_exist(dao, redis_client):
    """Ensure missing shortcodes raise ShortURLNotFoundError."""
    redis_client.execute.return_value = (None, -2)
    with pytest.raises(ShortURLNotFoundError, match="Short URL with code 'abc123' not found"):
        dao.get('abc123')


# -------------------------------
# 3. Retrieval by target
# -------------------------------


def test_get_by_target(dao, redis_client):
    redis_client.execute.return_value = ('abc123', 3600)

    short_url = dao.get_by_target('https://example.com/test')

    assert short_url.shortcode == 'abc123'
    assert short_url.target == 'https://example.com/test'
    assert short_url.expires_at is not None
    redis_client.get.assert_called_once_with('testapp:test:targets:deadbeef:shortcode')


def test_get_by_target_which_does_not_exist(dao, redis_client):
    redis_client.execute.return_value = (None, -2)
    with pytest.raises(ShortURLNotFoundError, match=re.escape("Target URL 'https://example.com/test' has no short URL.")):
        dao.get_by_target('https://example.com/test')


def test_get_by_target_with_redis_timeout(dao, redis_client):
    redis_client.execute.side_effect = redis.exceptions.TimeoutError('Timeout')
    with pytest.raises(StorageError, match="Can't connect to Redis"):
        dao.get_by_target('https://example.com/test')


# -------------------------------
# 4. Existence checks
# -------------------------------


@pytest.mark.parametrize('count, expected', [(0, False), (1, True)])
def test_exists(dao, redis_client, count, expected):
    redis_client.exists.return_value = count
    assert dao.exists('abc123') is expected
    redis_client.exists.assert_called_once_with('testapp:test:links:abc123:url')
