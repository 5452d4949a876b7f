"""
Helper Utilities for modbus_rtu_tcp

Logging facade, logging configuration and traceback reporting.
"""

from modbus_rtu_tcp.helper.error_handler import ErrorTraceback
from modbus_rtu_tcp.helper.logger import Logger, LogEntry, LogMode
from modbus_rtu_tcp.helper.logging_config import (
    RtuTcpLoggingConfig,
    format_frame,
    get_logger,
)

__all__ = [
    "ErrorTraceback",
    "Logger",
    "LogEntry",
    "LogMode",
    "RtuTcpLoggingConfig",
    "format_frame",
    "get_logger",
]
