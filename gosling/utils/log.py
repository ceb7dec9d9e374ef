"""Logging utilities for Gosling.

Context goes in ``extra=``. The file formatter appends it as JSON and masks
anything that looks like a credential, so API keys never reach disk even
when a caller passes one by mistake.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

REDACTED = "***"

# Attributes every LogRecord carries; anything else came from ``extra=``.
_LOG_RECORD_FIELDS = frozenset(logging.makeLogRecord({}).__dict__) | {
    "message",
    "asctime",
    "taskName",
}

_SECRET_FIELDS = frozenset({"api_key", "apikey", "authorization", "key", "token"})


def redact_secrets(value: Any, field: Optional[str] = None) -> Any:
    """Return ``value`` with credential-like fields masked, recursing into containers."""
    if field is not None and field.lower().replace("-", "_") in _SECRET_FIELDS:
        if isinstance(value, str) and value.startswith("Bearer "):
            return f"Bearer {REDACTED}"
        return REDACTED if value else value
    if isinstance(value, dict):
        return {k: redact_secrets(v, str(k)) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [redact_secrets(item) for item in value]
    return value


class StructuredFormatter(logging.Formatter):
    """Formatter with ISO timestamps and masked JSON context."""

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        extras = {
            key: redact_secrets(value, key)
            for key, value in record.__dict__.items()
            if key not in _LOG_RECORD_FIELDS and not key.startswith("_")
        }
        if not extras:
            return message
        try:
            serialized = json.dumps(extras, sort_keys=True, ensure_ascii=True, default=str)
        except (TypeError, ValueError):
            serialized = str(extras)
        return f"{message} | {serialized}"


class GoslingLogger:
    """Console logger on stderr, with an optional debug-level log file."""

    def __init__(self, name: str = "gosling"):
        self.logger = logging.getLogger(name)
        # The logger passes everything; each handler applies its own level.
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False

        if not self.logger.handlers:
            level_name = os.getenv("GOSLING_LOG_LEVEL", "WARNING").upper()
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level_name, logging.WARNING))
            console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
            self.logger.addHandler(console_handler)

        self._file_handler: Optional[logging.FileHandler] = None

    def attach_file_handler(self, log_file: Path) -> Path:
        """Write debug logs to ``log_file``, replacing any previous log file."""
        if self._file_handler is not None:
            if Path(self._file_handler.baseFilename) == log_file.resolve():
                return log_file
            self.logger.removeHandler(self._file_handler)
            self._file_handler.close()

        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(StructuredFormatter("%(asctime)s [%(levelname)s] %(message)s"))
        self.logger.addHandler(handler)
        self._file_handler = handler
        return log_file

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.logger.debug(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self.logger.error(message, *args, **kwargs)


_logger: Optional[GoslingLogger] = None


def get_logger() -> GoslingLogger:
    """Get the global logger instance."""
    global _logger
    if _logger is None:
        _logger = GoslingLogger()
    return _logger


def enable_file_logging(log_file: Path) -> Path:
    """Make the global logger also write to ``log_file``."""
    logger = get_logger()
    logger.attach_file_handler(log_file)
    logger.debug("[logging] File logging enabled", extra={"log_file": str(log_file)})
    return log_file
