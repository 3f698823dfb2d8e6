"""
Logging for the AminWebTech API.

Every record is stamped with the request id and the admin username of the
request that produced it (set by RequestLifecycleMiddleware and the admin
guard). Production writes JSON lines; development gets a colored one-liner.
A rotating JSON file under LOG_DIR is written in every environment.
"""

import logging
import logging.handlers
import json
import os
from datetime import datetime, timezone
from contextvars import ContextVar

APP_LOGGER = "aminwebtech"
LOG_FILE_NAME = "app.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

# Chatty libraries and the level they are held to
QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "uvicorn.error": logging.INFO,
    "motor": logging.WARNING,
    "pymongo": logging.WARNING,
    "httpx": logging.WARNING,
}

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")
username_var: ContextVar[str] = ContextVar("username", default="-")


class RequestContextFilter(logging.Filter):
    """Copies the per-request context vars onto the record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        record.username = username_var.get()
        return True


def _extra_data(record: logging.LogRecord):
    # Call sites attach structured fields as extra={"data": {...}}
    return getattr(record, "data", None)


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "request_id": getattr(record, "request_id", "-"),
            "username": getattr(record, "username", "-"),
            "message": record.getMessage(),
        }
        data = _extra_data(record)
        if data:
            entry["data"] = data
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


class DevFormatter(logging.Formatter):
    """Colored single line per record, traceback underneath."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        parts = [
            f"{color}{record.levelname:<7}{self.RESET}",
            record.name.removeprefix(f"{APP_LOGGER}."),
            f"[req={getattr(record, 'request_id', '-')} user={getattr(record, 'username', '-')}]",
            record.getMessage(),
        ]
        line = " ".join(parts)

        data = _extra_data(record)
        if data:
            line += f"  | data={data}"
        if record.exc_info and record.exc_info[0] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


def _file_handler(log_dir: str) -> logging.Handler:
    os.makedirs(log_dir, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        os.path.join(log_dir, LOG_FILE_NAME),
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(logging.INFO)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging():
    """Configure the root logger. Safe to call more than once."""
    env = os.getenv("ENV", "development").lower()
    level = os.getenv("LOG_LEVEL", "DEBUG" if env == "development" else "INFO").upper()
    log_dir = os.getenv("LOG_DIR", os.path.join(os.path.dirname(os.path.abspath(__file__)), "logs"))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    context_filter = RequestContextFilter()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(JSONFormatter() if env == "production" else DevFormatter())
    console.addFilter(context_filter)
    root.addHandler(console)

    file_handler = _file_handler(log_dir)
    file_handler.addFilter(context_filter)
    root.addHandler(file_handler)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    logging.getLogger(APP_LOGGER).info(
        f"Logging initialized | env={env} level={level}",
        extra={"data": {"log_dir": log_dir}}
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{APP_LOGGER}.{name}")
