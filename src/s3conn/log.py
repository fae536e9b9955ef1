"""Logging setup for the s3conn CLI and embedding applications."""

from __future__ import annotations

import logging
from logging.config import dictConfig

_RESERVED = frozenset(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime"}


class ContextFormatter(logging.Formatter):
    """Plain formatter that appends ``extra`` fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {k: v for k, v in vars(record).items() if k not in _RESERVED}
        if context:
            line += " " + " ".join(f"{k}={v}" for k, v in sorted(context.items()))
        return line


def setup_logging(level: int | str = logging.WARNING) -> None:
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "context": {
                    "()": ContextFormatter,
                    "format": "%(levelname)s %(name)s: %(message)s",
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": "context",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                "s3conn": {
                    "handlers": ["stderr"],
                    "level": level,
                    "propagate": False,
                },
                "botocore": {"level": logging.WARNING},
            },
        }
    )
