"""Bridge from the standard ``logging`` pipeline to a Teams target."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .models import LogEvent, LogLevel, TargetState
from .target import MsTeamsTarget


# Loggers whose records would be produced while sending a record
IGNORED_LOGGERS = ('msteams_target', 'httpx', 'httpcore')

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord('', logging.NOTSET, '', 0, '', None, None).__dict__
) | {'message', 'asctime', 'taskName'}


def event_from_record(record: logging.LogRecord, formatter: Optional[logging.Formatter] = None) -> LogEvent:
    """Convert a LogRecord into a LogEvent."""
    formatter = formatter or logging.Formatter()

    properties: Dict[str, Any] = {
        key: value for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRIBUTES and not key.startswith('_')
    }

    exception = None
    if record.exc_info:
        exception = formatter.formatException(record.exc_info)
    elif record.exc_text:
        exception = record.exc_text

    return LogEvent(
        level=LogLevel.from_levelno(record.levelno),
        message=record.getMessage(),
        timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
        logger_name=record.name,
        properties=properties,
        exception=exception,
    )


class MsTeamsHandler(logging.Handler):
    """Logging handler posting records to a Teams incoming webhook.

    Each record is sent synchronously; failures are reported through
    ``Handler.handleError`` like any other handler error.
    """

    def __init__(self, target: MsTeamsTarget, level: int = logging.ERROR):
        super().__init__(level)
        self.target = target
        if target.state == TargetState.UNINITIALIZED:
            target.initialize()

    def emit(self, record: logging.LogRecord) -> None:
        if record.name.split('.')[0] in IGNORED_LOGGERS:
            return

        try:
            self.target.write(event_from_record(record, self.formatter))
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        try:
            self.target.close()
        finally:
            super().close()
