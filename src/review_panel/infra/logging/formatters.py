from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter


# LogRecord attributes that are never structured fields
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime", "taskName"}


class JSONFormatter(JsonFormatter):
    """JSON formatter using python-json-logger.

    Structured fields passed via ``extra`` land at the top level of the object.
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = self.formatTime(record, '%Y-%m-%dT%H:%M:%S')
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['message'] = record.getMessage()


class HumanReadableFormatter(logging.Formatter):
    """Console formatter: ``time - LEVEL - event key=value ...``."""

    def __init__(self) -> None:
        super().__init__(
            fmt='%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if not fields:
            return line
        rendered = " ".join(f"{k}={v}" for k, v in fields.items())
        # keep traceback (if any) after the fields
        head, sep, tail = line.partition("\n")
        return f"{head} {rendered}{sep}{tail}"
