"""
modbus_rtu_tcp

Modbus RTU frames over TCP byte streams.
"""
from modbus_rtu_tcp.__version__ import __version__
from modbus_rtu_tcp.com.modbus import (
    ProtocolDataUnit,
    RtuPackager,
    TcpRtuClientHandler,
    TcpRtuTransporter,
    TransportConfig,
    calculate_response_length,
)
from modbus_rtu_tcp.defaults.exceptions import (
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

__all__ = [
    "__version__",
    "ProtocolDataUnit",
    "RtuPackager",
    "TcpRtuClientHandler",
    "TcpRtuTransporter",
    "TransportConfig",
    "calculate_response_length",
    "CloseError",
    "ConnectError",
    "CrcError",
    "FlushError",
    "FrameError",
    "ModbusExceptionResponse",
    "ReadError",
    "RtuTcpError",
    "SendError",
    "ShortReadError",
    "TransportTimeoutError",
    "WriteError",
]
