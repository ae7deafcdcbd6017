from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class HrmsJsonFormatter(JsonFormatter):
    """One JSON object per line, with level and logger name as fields."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)


def configure_logging(level: str = "INFO", *, json_format: bool = False) -> None:
    """Configure the root logger once per process.

    Later calls only change the level.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())
    if root.handlers:
        return

    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(HrmsJsonFormatter("%(asctime)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
