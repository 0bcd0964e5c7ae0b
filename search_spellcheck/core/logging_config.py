"""Logging configuration.

Console logging with optional rotating JSON files. A contextvar carries the request id
so cache and backend log lines can be correlated with the HTTP request that caused them.
"""

import json
import logging
import logging.handlers
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
view_id_ctx: ContextVar[Optional[str]] = ContextVar("view_id", default=None)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attributes copied from `extra=` into the JSON document when present.
_EXTRA_FIELDS = (
    "request_id",
    "view_id",
    "cache_key",
    "endpoint",
    "method",
    "status_code",
    "duration",
)


class JSONFormatter(logging.Formatter):
    """Emit logs as JSON for aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        for field in _EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


class ColoredFormatter(logging.Formatter):
    """Add ANSI colors to console output for local readability."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
        result = super().format(record)
        record.levelname = levelname
        return result


class ContextEnricher(logging.Filter):
    """Inject contextvars (request_id, view_id) into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - trivial
        request_id = request_id_ctx.get()
        view_id = view_id_ctx.get()
        if request_id and not hasattr(record, "request_id"):
            record.request_id = request_id
        if view_id and not hasattr(record, "view_id"):
            record.view_id = view_id
        return True


def bind_request_context(
    *, request_id: Optional[str] = None, view_id: Optional[str] = None
):
    """Bind request context into contextvars; returns tokens for reset."""
    tokens = []
    if request_id is not None:
        tokens.append((request_id_ctx, request_id_ctx.set(request_id)))
    if view_id is not None:
        tokens.append((view_id_ctx, view_id_ctx.set(view_id)))
    return tokens


def reset_request_context(tokens) -> None:
    """Reset bound contextvars using tokens returned by bind_request_context."""
    for var, token in reversed(tokens):
        var.reset(token)


def setup_logging(
    log_level: str = "INFO",
    log_dir: Optional[str] = None,
    app_name: str = "search_spellcheck",
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    use_json: bool = False,
    use_colors: bool = True,
) -> None:
    """Configure root logging.

    Args:
        log_level: Minimum logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory to store log files; if None, logs only to console.
        app_name: Application name used in log filenames.
        max_bytes: Max size per log file before rotation.
        backup_count: Number of rotated files to keep.
        use_json: If True, use JSON for file handlers.
        use_colors: If True, add ANSI colors to console output.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        try:
            handler.flush()
        finally:
            handler.close()
            root_logger.removeHandler(handler)
    context_filter = ContextEnricher()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    formatter_cls = ColoredFormatter if use_colors else logging.Formatter
    console_handler.setFormatter(formatter_cls(LOG_FORMAT, datefmt=DATE_FORMAT))
    console_handler.addFilter(context_filter)
    root_logger.addHandler(console_handler)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path / f"{app_name}.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
            delay=True,
        )
        file_handler.setLevel(logging.DEBUG)
        if use_json:
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        file_handler.addFilter(context_filter)
        root_logger.addHandler(file_handler)

    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logging.info(
        f"Logging configured. Level: {log_level}, Directory: {log_dir or 'console only'}"
    )


def log_request(
    method: str,
    endpoint: str,
    status_code: int,
    duration_ms: float,
    request_id: Optional[str] = None,
) -> None:
    """Log an HTTP request with structured data on the `access` logger."""
    extra = {
        "method": method,
        "endpoint": endpoint,
        "status_code": status_code,
        "duration": f"{duration_ms:.2f}",
    }
    if request_id:
        extra["request_id"] = request_id
    logging.getLogger("access").info(
        f"{method} {endpoint} - {status_code} - {duration_ms:.2f}ms", extra=extra
    )
