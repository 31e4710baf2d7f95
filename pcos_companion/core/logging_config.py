"""
Logging setup for PCOS Companion.

Console records are human-readable and colored; file records are JSON lines
in a size-bounded rotating log. Every handler passes records through
PayloadRedactionFilter, so image data URLs and bearer tokens that end up
in a message are shortened or masked before they are written.
"""

import json
import logging
import logging.handlers
import re
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

FILTERED = "***FILTERED***"
SENSITIVE_KEYS = ['password', 'token', 'secret', 'authorization', 'api_key', 'api-key']

_DATA_URL = re.compile(r"data:(image/[\w.+-]+);base64,([A-Za-z0-9+/=]+)")
_BEARER = re.compile(r"Bearer\s+[\w.\-]+")

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
PLAIN_FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def redact_text(text: str) -> str:
    """Replace image data URLs by their size and mask bearer tokens."""
    text = _DATA_URL.sub(lambda m: f"data:{m.group(1)};base64,<{len(m.group(2))} chars>", text)
    return _BEARER.sub(f"Bearer {FILTERED}", text)


class PayloadRedactionFilter(logging.Filter):
    """Rewrites the record message in place; never drops a record."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_text(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        if hasattr(record, 'extra_fields'):
            record.extra_fields = filter_sensitive_data(record.extra_fields)
        return True


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name for terminal output."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        # Copy: the file handler formats the same record
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname:8s}{self.RESET}"
        return super().format(record)


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with extra_fields merged at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        log_data.update(getattr(record, 'extra_fields', {}))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _file_handler(config: Any, level: int) -> logging.Handler:
    Path(config.log_file_path).parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        filename=config.log_file_path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding='utf-8'
    )
    handler.setLevel(level)
    if config.log_json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(config: Any) -> None:
    """
    Configure the root logger from settings.

    Replaces any handlers already installed, so calling it again (for example
    once per app lifespan in tests) does not duplicate output.

    Args:
        config: Settings object with the log_* fields
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    log_level = getattr(logging, config.log_level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    handlers = []
    if config.log_console_enabled:
        handlers.append(_console_handler(log_level))
    if config.log_file_enabled:
        handlers.append(_file_handler(config, log_level))

    redaction = PayloadRedactionFilter()
    for handler in handlers:
        handler.addFilter(redaction)
        root_logger.addHandler(handler)

    for noisy in ("httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    root_logger.info(
        f"Logging initialized: level={config.log_level.upper()}, "
        f"console={config.log_console_enabled}, "
        f"file={config.log_file_enabled}"
    )


class LoggerAdapter(logging.LoggerAdapter):
    """
    Attaches fixed context (such as the agent name) to the extra_fields of every record.

    Usage:
        log = LoggerAdapter(logging.getLogger(__name__), {"agent": "FoodAnalysisAgent"})
        log.info("Analysis started")
    """

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra = kwargs.setdefault('extra', {})
        extra['extra_fields'] = {**self.extra, **extra.get('extra_fields', {})}
        return msg, kwargs


def filter_sensitive_data(data: Any, sensitive_keys: Optional[list] = None) -> Any:
    """
    Return a copy of data with credential-like values masked.

    Keys are matched case-insensitively by substring, at any depth of
    nested dicts and lists.
    """
    keys = SENSITIVE_KEYS if sensitive_keys is None else sensitive_keys

    if isinstance(data, dict):
        return {
            key: FILTERED if any(k in str(key).lower() for k in keys)
            else filter_sensitive_data(value, keys)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [filter_sensitive_data(item, keys) for item in data]
    return data


def truncate_large_data(data: str, max_length: int = 5000) -> str:
    """Cut long strings such as raw response bodies, noting the original length."""
    if len(data) <= max_length:
        return data
    return data[:max_length] + f"... (truncated, total length: {len(data)})"
