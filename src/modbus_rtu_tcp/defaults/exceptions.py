"""
Exception hierarchy of modbus_rtu_tcp.

All errors derive from :class:`RtuTcpError`, which itself is a
:class:`pymodbus.exceptions.ModbusException`, so callers already guarding
pymodbus calls catch transport failures with the same handler.
"""
from __future__ import annotations

from typing import Optional

from pymodbus.exceptions import ModbusException


class RtuTcpError(ModbusException):
    """
    Base class for every error raised by modbus_rtu_tcp.

    :param message: Explanation of the error.
    :type message: str
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __str__(self):
        return f"RTU/TCP: {self.message}"


class ConnectError(RtuTcpError):
    """The stream connection could not be established."""


class CloseError(RtuTcpError):
    """The held stream connection failed to close."""


class FlushError(RtuTcpError):
    """Draining pending bytes failed for a reason other than a timeout."""


class SendError(RtuTcpError):
    """A request/response exchange failed."""


class WriteError(SendError):
    """The request frame could not be written completely."""


class ReadError(SendError):
    """Reading the response frame failed."""


class ShortReadError(ReadError):
    """
    The stream ended before the required number of bytes arrived.

    :param message: Explanation of the error.
    :type message: str
    :param received: Number of bytes read before the stream ended.
    :type received: int
    :param expected: Number of bytes that were required.
    :type expected: int
    """
    def __init__(self, message: str, received: int = 0, expected: int = 0):
        self.received = received
        self.expected = expected
        super().__init__(message)


class TransportTimeoutError(SendError):
    """The exchange deadline elapsed during the write or the read phase."""


class FrameError(RtuTcpError):
    """An RTU frame failed validation."""


class CrcError(FrameError):
    """
    The CRC of a received frame does not match its content.

    :param expected: CRC computed over the frame content.
    :type expected: int
    :param actual: CRC carried by the frame.
    :type actual: int
    """
    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"response crc '0x{actual:04x}' does not match expected '0x{expected:04x}'"
        )


class ModbusExceptionResponse(RtuTcpError):
    """
    The peer answered with an exception response (function code | 0x80).

    :param function_code: Function code of the original request.
    :type function_code: int
    :param exception_code: Exception code sent by the peer.
    :type exception_code: int
    """
    DESCRIPTIONS = {
        0x01: "illegal function",
        0x02: "illegal data address",
        0x03: "illegal data value",
        0x04: "server device failure",
        0x05: "acknowledge",
        0x06: "server device busy",
        0x08: "memory parity error",
        0x0A: "gateway path unavailable",
        0x0B: "gateway target device failed to respond",
    }

    def __init__(self, function_code: int, exception_code: Optional[int]):
        self.function_code = function_code
        self.exception_code = exception_code
        description = self.DESCRIPTIONS.get(exception_code, "unknown exception")
        code = "n/a" if exception_code is None else f"0x{exception_code:02x}"
        super().__init__(
            f"exception '{code}' ({description}), function '0x{function_code:02x}'"
        )
