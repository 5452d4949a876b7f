"""
Byte stream layer used by the RTU over TCP transporter.

Provides a blocking TCP connection with absolute deadlines based on
:mod:`socket` (no extra dependencies required).
"""
from modbus_rtu_tcp.com.stream.connection import (
    StreamConnection,
    dial,
    read_at_least,
    read_full,
    split_host_port,
)

__all__ = [
    "StreamConnection",
    "dial",
    "read_at_least",
    "read_full",
    "split_host_port",
]
