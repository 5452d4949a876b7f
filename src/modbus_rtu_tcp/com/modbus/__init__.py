"""
Modbus Protocol Module

Split into base/rtu/rtu_tcp for clear separation of concerns.

Architecture:
    - base/: Framing independent types (protocol data unit)
    - rtu/: RTU frame encoding, CRC and response length table
    - rtu_tcp/: RTU frames over a TCP stream (transporter, handler, config)

Usage:
    >>> from modbus_rtu_tcp.com.modbus import ProtocolDataUnit, TcpRtuClientHandler
    >>>
    >>> with TcpRtuClientHandler("192.168.1.20:4001", slave_id=1) as handler:
    ...     pdu = handler.execute(ProtocolDataUnit(0x03, b"\\x00\\x00\\x00\\x02"))
"""
from modbus_rtu_tcp.com.modbus.base import ProtocolDataUnit
from modbus_rtu_tcp.com.modbus.rtu import RtuPackager, calculate_response_length
from modbus_rtu_tcp.com.modbus.rtu_tcp import (
    TcpRtuClientHandler,
    TcpRtuTransporter,
    TransportConfig,
)

__all__ = [
    "ProtocolDataUnit",
    "RtuPackager",
    "TcpRtuClientHandler",
    "TcpRtuTransporter",
    "TransportConfig",
    "calculate_response_length",
]
