import logging
import sys
from datetime import datetime, timezone

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "thinking-profile-engine"
LOG_FORMAT = '%(timestamp)s %(level)s %(name)s %(message)s'


class ProfileJsonFormatter(jsonlogger.JsonFormatter):
    """One JSON object per record, tagged with the service name and call site."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        if not log_record.get('timestamp'):
            log_record['timestamp'] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['service'] = SERVICE_NAME
        log_record['module'] = record.module
        log_record['lineno'] = record.lineno


def setup_logging(log_level_str: str = "INFO") -> None:
    """Routes the root logger and uvicorn's loggers through a single JSON stdout handler."""
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if not any(isinstance(h.formatter, ProfileJsonFormatter) for h in root_logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ProfileJsonFormatter(LOG_FORMAT))
        root_logger.addHandler(handler)

    # uvicorn installs its own plain-text handlers
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    root_logger.info(f"JSON logging configured at level {logging.getLevelName(log_level)}")
