"""Unit tests for JsonFormatter and initialize_logging() in logging.py.

Test coverage includes:

1. JsonFormatter
   - Emits one JSON object with timestamp, level, logger, thread and message.
   - Attaches `extra` fields, formatted exceptions and stack info.
   - Serializes non-JSON values with str().

2. initialize_logging()
   - Root level follows the argument, then LOG_LEVEL, then INFO.
   - Records are written to stderr.
"""

import json
import logging
import sys
from pathlib import Path

import pytest
from freezegun import freeze_time

from linkvault.utils.logging import JsonFormatter, initialize_logging


def make_record(msg='Opened mapping store.', exc_info=None, **extra):
    record = logging.LogRecord('linkvault.test', logging.INFO, __file__, 1, msg, None, exc_info)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


# -------------------------------
# 1. JsonFormatter
# -------------------------------


@freeze_time('2026-10-19 12:00:00')
def test_json_formatter_standard_fields():
    log = json.loads(JsonFormatter().format(make_record()))

    assert log['timestamp'] == '2026-10-19T12:00:00.000Z'
    assert log['level'] == 'INFO'
    assert log['logger'] == 'linkvault.test'
    assert log['thread'] == 'MainThread'
    assert log['message'] == 'Opened mapping store.'
    assert 'exception' not in log


def test_json_formatter_includes_extra_fields():
    log = json.loads(JsonFormatter().format(make_record(event='SHORTCODE_MINTED', shortcode='abc123', storePath=Path('/data'))))

    assert log['event'] == 'SHORTCODE_MINTED'
    assert log['shortcode'] == 'abc123'
    assert log['storePath'] == '/data'
    assert 'msg' not in log
    assert 'levelno' not in log


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = make_record(exc_info=sys.exc_info())

    log = json.loads(JsonFormatter().format(record))
    assert 'RuntimeError: boom' in log['exception']


def test_json_formatter_includes_stack_info():
    record = make_record()
    record.stack_info = 'Stack (most recent call last):\n  File "app.py", line 1'

    log = json.loads(JsonFormatter().format(record))
    assert log['stack'].startswith('Stack (most recent call last)')
    assert 'stack_info' not in log


# -------------------------------
# 2. initialize_logging()
# -------------------------------


@pytest.fixture
def _restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    yield
    root.setLevel(level)
    root.handlers[:] = handlers


@pytest.mark.usefixtures('_restore_root_logger')
@pytest.mark.parametrize(
    'argument, env, expected',
    [
        ('debug', 'ERROR', logging.DEBUG),
        (None, 'warning', logging.WARNING),
        (None, None, logging.INFO),
    ],
)
def test_initialize_logging_level(monkeypatch, argument, env, expected):
    if env is not None:
        monkeypatch.setenv('LOG_LEVEL', env)

    initialize_logging(argument)

    root = logging.getLogger()
    assert root.level == expected
    assert any(isinstance(handler.formatter, JsonFormatter) for handler in root.handlers)


@pytest.mark.usefixtures('_restore_root_logger')
def test_initialize_logging_writes_to_stderr():
    initialize_logging()

    handlers = [handler for handler in logging.getLogger().handlers if isinstance(handler.formatter, JsonFormatter)]
    assert len(handlers) == 1
    assert handlers[0].stream is sys.stderr
