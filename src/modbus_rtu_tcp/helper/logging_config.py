"""
Logging configuration for the modbus_rtu_tcp library.

This module provides a centralized logging configuration that can be used
across all modbus_rtu_tcp modules. It supports:
- Console and rotating file handlers
- Environment-based log level control
- Structured JSON formatting for files
- Rate limiting for repeated messages (e.g. timeouts of a polling loop)

Example:
    >>> from modbus_rtu_tcp.helper.logging_config import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Poller started")
"""
import json
import logging
import logging.config
import os
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from modbus_rtu_tcp.defaults.constants import EnvConstants


def format_frame(data: bytes) -> str:
    """Return *data* as space separated lowercase hex pairs, e.g. ``01 03 00``."""
    return bytes(data).hex(" ")


class JsonFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj)


class RateLimitFilter(logging.Filter):
    """
    Filter that suppresses identical messages within a time window.
    """

    def __init__(self, rate: float = 1.0):
        """
        Initialize rate limit filter.

        Args:
            rate: Minimum seconds between identical messages.
        """
        super().__init__()
        self.rate = rate
        self.last_log: Dict[tuple, float] = {}

    def filter(self, record: logging.LogRecord) -> bool:
        key = (record.module, record.levelno, record.msg)
        now = time.monotonic()

        if key in self.last_log and now - self.last_log[key] < self.rate:
            return False

        self.last_log[key] = now
        return True


class RtuTcpLoggingConfig:
    """
    Centralized logging configuration for the modbus_rtu_tcp library.
    """

    _initialized = False
    _log_directory = Path("log/modbus_rtu_tcp")

    @classmethod
    def initialize(
        cls,
        log_level: Optional[str] = None,
        log_directory: Optional[Path] = None,
        log_config: Optional[Dict[str, Any]] = None,
        enable_console: bool = True,
        enable_file: bool = False,
        enable_json: bool = False,
        rate_limit: Optional[float] = None,
    ) -> None:
        """
        Initialize the logging configuration.

        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                      Can also be set via MODBUS_RTU_TCP_LOG_LEVEL.
            log_directory: Directory where log files will be stored.
            log_config: Optional custom dictConfig dictionary.
            enable_console: Whether to enable console logging.
            enable_file: Whether to enable rotating file logging.
            enable_json: Whether to use JSON formatting (file only).
            rate_limit: Minimum seconds between duplicate messages (None = disabled).
        """
        if cls._initialized:
            logging.getLogger(__name__).debug("Logging already initialized, skipping")
            return

        if log_level is None:
            log_level = os.getenv(EnvConstants.LOG_LEVEL, "INFO")
        log_level = log_level.upper()

        if log_directory is not None:
            cls._log_directory = Path(log_directory)

        if log_config is None:
            if enable_file:
                cls._log_directory.mkdir(parents=True, exist_ok=True)
            log_config = cls._build_default_config(
                log_level=log_level,
                log_directory=cls._log_directory,
                enable_console=enable_console,
                enable_file=enable_file,
                enable_json=enable_json,
                rate_limit=rate_limit,
            )

        logging.config.dictConfig(log_config)
        cls._initialized = True

        logging.getLogger("modbus_rtu_tcp").info(
            "Logging initialized (level=%s, dir=%s, json=%s)",
            log_level, cls._log_directory, enable_json,
        )

    @classmethod
    def _build_default_config(
        cls,
        log_level: str,
        log_directory: Path,
        enable_console: bool,
        enable_file: bool,
        enable_json: bool,
        rate_limit: Optional[float],
    ) -> Dict[str, Any]:
        """
        Build the default dictConfig dictionary.

        Returns:
            Logging configuration dictionary.
        """
        formatters: Dict[str, Any] = {
            "standard": {
                "format": "%(asctime)s - %(name)s - %(levelname)-8s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)-8s - [%(filename)s:%(lineno)d] - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
            "json": {
                "()": "modbus_rtu_tcp.helper.logging_config.JsonFormatter",
            }
        }

        filters: Dict[str, Any] = {}
        if rate_limit is not None:
            filters["rate_limit"] = {
                "()": "modbus_rtu_tcp.helper.logging_config.RateLimitFilter",
                "rate": rate_limit
            }

        handlers: Dict[str, Any] = {}
        package_handlers = []

        if enable_console:
            console_handler: Dict[str, Any] = {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "standard",
                "stream": "ext://sys.stdout"
            }
            if rate_limit is not None:
                console_handler["filters"] = ["rate_limit"]
            handlers["console"] = console_handler
            package_handlers.append("console")

        if enable_file:
            handlers["file"] = {
                "class": "logging.handlers.RotatingFileHandler",
                "level": log_level,
                "formatter": "json" if enable_json else "detailed",
                "filename": str(log_directory / "modbus_rtu_tcp.log"),
                "maxBytes": 10485760,  # 10MB
                "backupCount": 10,
                "encoding": "utf8"
            }
            package_handlers.append("file")

        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": formatters,
            "filters": filters,
            "handlers": handlers,
            "loggers": {
                "modbus_rtu_tcp": {
                    "level": log_level,
                    "handlers": package_handlers,
                    "propagate": False
                },
            },
        }

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Get a logger, initializing the default configuration on first use.

        Args:
            name: Logger name (typically __name__ of the module).
        """
        if not cls._initialized:
            cls.initialize()

        return logging.getLogger(name)

    @classmethod
    def set_level(cls, level: str, logger_name: str = "modbus_rtu_tcp") -> None:
        """
        Change the level of a logger and its handlers at runtime.
        """
        logger = logging.getLogger(logger_name)
        numeric_level = getattr(logging, level.upper(), logging.INFO)
        logger.setLevel(numeric_level)

        for handler in logger.handlers:
            handler.setLevel(numeric_level)

    @classmethod
    def reset(cls) -> None:
        """Allow :meth:`initialize` to run again (used by tests)."""
        cls._initialized = False


def get_logger(name: str) -> logging.Logger:
    """Module-level shortcut for :meth:`RtuTcpLoggingConfig.get_logger`."""
    return RtuTcpLoggingConfig.get_logger(name)
