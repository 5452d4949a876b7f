"""
This module provides default constants and exceptions for the
modbus_rtu_tcp package.
"""

from .constants import (
    EnvConstants,
    FrameConstants,
    FunctionCode,
    LoggerConstants,
    RequiredVersion,
    TimeoutConstants,
)
from .exceptions import (
    CloseError,
    ConnectError,
    CrcError,
    FlushError,
    FrameError,
    ModbusExceptionResponse,
    ReadError,
    RtuTcpError,
    SendError,
    ShortReadError,
    TransportTimeoutError,
    WriteError,
)
