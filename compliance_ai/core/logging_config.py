"""
Logging Configuration Module.

Centralized logging setup for the Compliance-AI backend and its maintenance
scripts: one console handler, an optional file handler under ``LOG_FILE_DIR``
and per-module levels that keep third-party libraries quiet.

Formats: ``simple``, ``detailed`` (default) and ``json`` (one object per line).
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

LOG_FILE_NAME = "compliance_ai.log"


def _get_logging_config():
    """Read the logging options; the level comes from the server settings when importable."""
    try:
        from compliance_ai.server.core.config import settings

        log_level = settings.log_level.upper()
    except ImportError:
        log_level = os.getenv("COMPLIANCE_AI_LOG_LEVEL", "INFO").upper()
    return {
        "log_level": log_level,
        "log_format": os.getenv("LOG_FORMAT", "detailed"),
        "log_file_dir": os.getenv("LOG_FILE_DIR", "logs"),
        "enable_file_logging": os.getenv("ENABLE_FILE_LOGGING", "true").lower() in ("true", "1", "yes"),
    }


_config = _get_logging_config()
LOG_LEVEL = _config["log_level"]
LOG_FORMAT = _config["log_format"]
LOG_FILE_DIR = _config["log_file_dir"]
ENABLE_FILE_LOGGING = _config["enable_file_logging"]

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

MODULE_LOG_LEVELS = {
    "compliance_ai.core": "INFO",
    "compliance_ai.core.database": "INFO",
    "compliance_ai.ai_services": "DEBUG",
    "compliance_ai.scripts": "INFO",
    "compliance_ai.server": "INFO",
    "compliance_ai.server.api": "DEBUG",
    "compliance_ai.server.services": "DEBUG",
    "compliance_ai.server.core": "INFO",
    # Third-party noise
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "httpx": "WARNING",
    "asyncio": "WARNING",
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
}


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "module": record.filename,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def build_formatter(fmt: str) -> logging.Formatter:
    """Formatter for ``fmt``; unknown names fall back to ``detailed``."""
    if fmt == "json":
        return JsonFormatter(datefmt=DATE_FORMAT)
    if fmt == "simple":
        return logging.Formatter(SIMPLE_FORMAT, datefmt=DATE_FORMAT)
    return logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT)


def _file_handler(formatter: logging.Formatter) -> logging.Handler:
    log_dir = Path(LOG_FILE_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_dir / LOG_FILE_NAME, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: bool = True,
) -> None:
    """
    Configure logging for the application.

    Calling it again replaces the previous handlers. File logging needs both
    ``enable_file`` and the ``ENABLE_FILE_LOGGING`` environment switch.

    Args:
        log_level: Console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: simple, detailed or json
        enable_file: Whether to write ``compliance_ai.log`` as well
    """
    level = (log_level or LOG_LEVEL).upper()
    fmt = log_format or LOG_FORMAT
    formatter = build_formatter(fmt)

    root_logger = logging.getLogger()
    # Handlers filter; the root passes everything through.
    root_logger.setLevel(logging.DEBUG)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    file_logging = enable_file and ENABLE_FILE_LOGGING
    if file_logging:
        root_logger.addHandler(_file_handler(formatter))

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.info(f"Logging configured: level={level}, format={fmt}, file_logging={file_logging}")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
