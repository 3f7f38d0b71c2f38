"""Structured logging configuration for the invite bot."""

import json
import logging
import logging.config
import os
from datetime import datetime, timezone
from pathlib import Path

from .config import DEFAULT_LOG_PATH

# Client libraries that log every HTTP round trip at INFO/DEBUG
NOISY_LOGGERS = ("slack_sdk", "aiohttp.access", "httpx", "httpcore", "anthropic")


class JSONFormatter(logging.Formatter):
    """One JSON object per record; Slack ids and user text kept unescaped."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        # logger.info(..., extra={"context": {"user_id": ...}})
        context = getattr(record, "context", None)
        if context:
            entry["context"] = context

        return json.dumps(entry, ensure_ascii=False, default=str)


def build_logging_config(log_level: str, log_file: str | Path) -> dict:
    """dictConfig payload: JSON to a rotating file and stdout."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": JSONFormatter},
        },
        "handlers": {
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "filename": str(log_file),
                "maxBytes": 10 * 1024 * 1024,
                "backupCount": 5,
                "formatter": "json",
                "encoding": "utf-8",
            },
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {name: {"level": "WARNING"} for name in NOISY_LOGGERS},
        "root": {
            "level": log_level.upper(),
            "handlers": ["file", "console"],
        },
    }


def setup_logging(log_level: str | None = None, log_file: str | None = None) -> None:
    """
    Configure root logging for the bot process.

    Args:
        log_level: Defaults to LOG_LEVEL, then INFO.
        log_file: Defaults to LOG_FILE, then 04_logs/app.log.
    """
    log_level = log_level or os.getenv("LOG_LEVEL", "INFO")
    log_file = log_file or os.getenv("LOG_FILE") or str(DEFAULT_LOG_PATH)

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(log_level, log_file))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
