import datetime as dt
import json
import logging
import sys

from .config import config


class JsonLogFormatter(logging.Formatter):
    """
    One JSON object per line: UTC timestamp, level, logger, message, and the
    flat `context` dict the services pass through `extra=`.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": dt.datetime.fromtimestamp(record.created, tz=dt.timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "env": config.ENV,
        }
        context = getattr(record, "context", None)
        if isinstance(context, dict):
            # never let a context key clobber the envelope
            payload.update({k: v for k, v in context.items() if k not in payload})
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        # dates and Decimal-like values in context are stringified
        return json.dumps(payload, default=str)


def get_logger(name: str) -> logging.Logger:
    """Stdout JSON logger at EQUITYDASH_LOG_LEVEL; configured once per name."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonLogFormatter())
    logger.addHandler(handler)
    logger.setLevel(config.LOG_LEVEL.upper())
    logger.propagate = False
    return logger
