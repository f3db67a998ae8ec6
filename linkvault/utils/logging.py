"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` once at process start (see the
entry points local_healthcheck.py and seed_encryption_key.py) before any
other logging is done.

Records go to stderr as one JSON object per line, so stdout stays free for
the command output of the entry points.

Logging format:
{
    "timestamp": "2026-10-19T12:00:00.000Z",
    "level": "INFO",
    "logger": "linkvault.dao.sqlite.mixins",
    "thread": "MainThread",
    "message": "Opened mapping store at url_db.sqlite3 (flush mode: periodic).",
    "flushMode": "periodic",
    "flushIntervalMs": 1000
}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from linkvault.constants import ENV, Defaults


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras

    Anything that is not an attribute of a bare LogRecord was passed through
    `extra=` and is copied into the output. Values JSON cannot encode
    (paths, enums, datetimes) are written with str().
    """

    STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'thread': record.threadName,
            'message': record.getMessage(),
        }

        # Attach `extra` fields
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS:
                log[key] = value

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            log['stack'] = self.formatStack(record.stack_info)

        return json.dumps(log, default=str)


def initialize_logging(level: str | None = None) -> None:
    """Send all records to stderr through JsonFormatter

    Args:
        level (str | None):
            Root log level. Falls back to LOG_LEVEL, then INFO.
    """
    log_level = (level or os.getenv(ENV.App.LOG_LEVEL, Defaults.LOG_LEVEL)).upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stderr': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stderr',
                }
            },
            'root': {
                'level': log_level,
                'handlers': ['stderr'],
            },
        }
    )
