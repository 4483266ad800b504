"""Unit tests for the ShortURLMemoryDAO

Test coverage includes:

1. Insertion and retrieval
   - Both directions of a mapping are readable after insert.
   - Taken shortcodes and already shortened targets are refused.

2. Expiry
   - Both directions expire together once the TTL elapses.
   - Expired shortcodes and targets may be mapped again.

3. Type checking
"""

import pytest
from beartype.roar import BeartypeCallHintParamViolation

from getnews.models import ShortURLModel
from getnews.dao.memory import ShortURLMemoryDAO
from getnews.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError, TargetAlreadyShortenedError


# -------------------------------
# Fixtures
# -------------------------------


class FakeTimer:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def timer():
    return FakeTimer()


@pytest.fixture
def dao(timer):
    return ShortURLMemoryDAO(ttl=60, timer=timer)


@pytest.fixture
def short_url():
    return ShortURLModel(target='https://example.com/test', shortcode='abc123')


# -------------------------------
# 1. Insertion and retrieval
# -------------------------------


def test_insert_and_get(dao, short_url):
    assert dao.insert(short_url) is dao

    by_code = dao.get('abc123')
    by_target = dao.get_by_target('https://example.com/test')

    assert by_code.target == 'https://example.com/test'
    assert by_target.shortcode == 'abc123'
    assert by_code.expires_at is not None
    assert dao.exists('abc123')


def test_get_unknown_shortcode(dao):
    with pytest.raises(ShortURLNotFoundError, match="Short URL with code 'nope' not found."):
        dao.get('nope')
    assert not dao.exists('nope')


def test_get_unknown_target(dao):
    with pytest.raises(ShortURLNotFoundError, match="has no short URL"):
        dao.get_by_target('https://example.com/unknown')


def test_insert_taken_shortcode(dao, short_url):
    dao.insert(short_url)
    with pytest.raises(ShortURLAlreadyExistsError):
        dao.insert(ShortURLModel(target='https://example.com/other', shortcode='abc123'))
    assert dao.get('abc123').target == 'https://example.com/test'


def test_insert_already_shortened_target(dao, short_url):
    dao.insert(short_url)
    with pytest.raises(TargetAlreadyShortenedError):
        dao.insert(ShortURLModel(target='https://example.com/test', shortcode='xyz789'))
    assert not dao.exists('xyz789')


# -------------------------------
# 2. Expiry
# -------------------------------


def test_mapping_expires_in_both_directions(dao, timer, short_url):
    dao.insert(short_url)

    timer.now += 59
    assert dao.exists('abc123')

    timer.now += 2
    assert not dao.exists('abc123')
    with pytest.raises(ShortURLNotFoundError):
        dao.get('abc123')
    with pytest.raises(ShortURLNotFoundError):
        dao.get_by_target('https://example.com/test')


def test_expired_mapping_can_be_reissued(dao, timer, short_url):
    dao.insert(short_url)
    timer.now += 61

    dao.insert(ShortURLModel(target='https://example.com/new', shortcode='abc123'))
    dao.insert(ShortURLModel(target='https://example.com/test', shortcode='fresh0'))

    assert dao.get('abc123').target == 'https://example.com/new'
    assert dao.get_by_target('https://example.com/test').shortcode == 'fresh0'


# -------------------------------
# 3. Type checking
# -------------------------------


def test_insert_with_invalid_type(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.insert('https://example.com/notamodel')


def test_repr(dao):
    assert repr(dao) == '<ShortURLMemoryDAO>'
