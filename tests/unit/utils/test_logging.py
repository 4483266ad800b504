"""Unit tests for logging utilities in logging.py

Test coverage includes:

1. JsonFormatter
   - Standard fields, extras and exception text are serialized as JSON.

2. initialize_logging()
   - Honors LOG_LEVEL.
   - Adds a JSON file handler for ANALYTICS_FILE when it is set.
"""

import sys
import json
import logging
import logging.config
from datetime import datetime, UTC
from unittest.mock import MagicMock

import pytest

from getnews.utils.logging import JsonFormatter, initialize_logging


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def dict_config(monkeypatch):
    """Capture the configuration passed to dictConfig without applying it."""
    mock = MagicMock()
    monkeypatch.setattr(logging.config, 'dictConfig', mock)
    return mock


def make_record(msg='Served news request.', exc_info=None, **extra):
    record = logging.LogRecord('getnews.test', logging.INFO, __file__, 1, msg, None, exc_info)
    record.created = datetime(2026, 10, 19, 12, 0, 0, tzinfo=UTC).timestamp()
    for key, value in extra.items():
        setattr(record, key, value)
    return record


# -------------------------------
# 1. JsonFormatter
# -------------------------------


def test_json_formatter_standard_fields():
    payload = json.loads(JsonFormatter().format(make_record()))

    assert payload['level'] == 'INFO'
    assert payload['logger'] == 'getnews.test'
    assert payload['message'] == 'Served news request.'
    assert payload['timestamp'] == '2026-10-19T12:00:00.000Z'


def test_json_formatter_includes_extras():
    record = make_record(event='request', status=200, country=None)
    payload = json.loads(JsonFormatter().format(record))

    assert payload['event'] == 'request'
    assert payload['status'] == 200
    assert payload['country'] is None
    assert 'msg' not in payload
    assert 'levelno' not in payload


def test_json_formatter_serializes_unknown_types():
    record = make_record(arguments={'n': 5}, path=object())
    payload = json.loads(JsonFormatter().format(record))

    assert payload['arguments'] == {'n': 5}
    assert payload['path'].startswith('<object object')


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = make_record(exc_info=sys.exc_info())

    payload = json.loads(JsonFormatter().format(record))
    assert 'RuntimeError: boom' in payload['exception']


# -------------------------------
# 2. initialize_logging()
# -------------------------------


def test_initialize_logging_sets_level(monkeypatch, dict_config):
    monkeypatch.setenv('LOG_LEVEL', 'debug')
    monkeypatch.delenv('ANALYTICS_FILE', raising=False)

    initialize_logging()

    config = dict_config.call_args.args[0]
    assert config['root'] == {'level': 'DEBUG', 'handlers': ['stdout']}
    assert config['formatters']['json']['()'] is JsonFormatter


def test_initialize_logging_defaults_to_info(monkeypatch, dict_config):
    monkeypatch.delenv('LOG_LEVEL', raising=False)
    monkeypatch.delenv('ANALYTICS_FILE', raising=False)

    initialize_logging()

    assert dict_config.call_args.args[0]['root']['level'] == 'INFO'


def test_initialize_logging_adds_analytics_file(monkeypatch, dict_config, tmp_path):
    path = tmp_path / 'analytics.log'
    monkeypatch.setenv('ANALYTICS_FILE', str(path))

    initialize_logging()

    config = dict_config.call_args.args[0]
    assert config['root']['handlers'] == ['stdout', 'analytics']
    assert config['handlers']['analytics']['filename'] == str(path)
    assert config['handlers']['analytics']['formatter'] == 'json'
