"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` in the lambda handler's module before
any other logging is done.

Logging format (one JSON object per line):
{
    "timestamp": "2026-10-19T12:00:00.000Z",
    "level": "INFO",
    "logger": "getnews.lambdas.get_news.app",
    "message": "Served news request.",
    "event": "request",
    ...extra fields
}

Request records written in this format are what getnews.analytics reads back.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from getnews.constants import ENV


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    STANDARD_ATTRS = frozenset(
        {
            'args',
            'asctime',
            'created',
            'exc_info',
            'exc_text',
            'filename',
            'funcName',
            'levelname',
            'levelno',
            'lineno',
            'module',
            'msecs',
            'msg',
            'name',
            'pathname',
            'process',
            'processName',
            'relativeCreated',
            'stack_info',
            'thread',
            'threadName',
            'taskName',
        }
    )

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
            'message': record.getMessage(),
        }

        # Attach `extra` fields
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS:
                log[key] = value

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


def initialize_logging() -> None:
    log_level = os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper()
    handlers = {
        'stdout': {
            'class': 'logging.StreamHandler',
            'formatter': 'json',
            'stream': 'ext://sys.stdout',
        }
    }
    # Request records are also appended to the analytics file when one is configured
    analytics_file = os.getenv(ENV.App.ANALYTICS_FILE)
    if analytics_file:
        handlers['analytics'] = {
            'class': 'logging.FileHandler',
            'formatter': 'json',
            'filename': analytics_file,
            'level': 'INFO',
        }

    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': handlers,
            'root': {
                'level': log_level,
                'handlers': list(handlers),
            },
        }
    )
