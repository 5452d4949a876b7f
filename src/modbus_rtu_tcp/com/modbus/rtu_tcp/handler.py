"""
Modbus RTU over TCP Client Handler

Combines an :class:`RtuPackager` (frame encoding, CRC, response length
prediction) with a :class:`TcpRtuTransporter` (connection lifecycle and
stream framing) and exposes both contracts on one object.

Example:
    >>> handler = TcpRtuClientHandler("192.168.1.20:4001", slave_id=17)
    >>> with handler:
    ...     pdu = handler.execute(ProtocolDataUnit(0x03, b"\\x00\\x6b\\x00\\x03"))
"""
from __future__ import annotations

import logging
from typing import Optional

from modbus_rtu_tcp.com.modbus.base.pdu import ProtocolDataUnit
from modbus_rtu_tcp.com.modbus.rtu.packager import RtuPackager
from modbus_rtu_tcp.com.modbus.rtu_tcp.config import TransportConfig
from modbus_rtu_tcp.com.modbus.rtu_tcp.transporter import Dialer, TcpRtuTransporter
from modbus_rtu_tcp.com.stream.connection import dial
from modbus_rtu_tcp.defaults.constants import FrameConstants
from modbus_rtu_tcp.defaults.exceptions import FrameError, ModbusExceptionResponse
from modbus_rtu_tcp.helper.error_handler import ErrorTraceback
from modbus_rtu_tcp.helper.logger import Logger

logger = logging.getLogger(__name__)


class TcpRtuClientHandler:
    """
    RTU packager and TCP stream transporter for one remote unit.

    Args:
        address: Remote ``host:port``.
        slave_id: Address of the remote unit (default: 1).
        timeout: Seconds per connect and per exchange; <= 0 selects the default.
        logger: Optional sink receiving hex dumps of every frame.
        dialer: Opens the byte stream, :func:`dial` by default.
    """

    def __init__(
        self,
        address: str,
        slave_id: int = 1,
        timeout: float = 0.0,
        logger: Optional[logging.Logger] = None,
        *,
        dialer: Dialer = dial,
    ):
        self.packager = RtuPackager(slave_id=slave_id)
        self.transporter = TcpRtuTransporter(
            address,
            timeout,
            logger,
            length_calculator=self.packager.calculate_response_length,
            dialer=dialer,
        )

    @classmethod
    def from_config(cls, config: TransportConfig, *, dialer: Dialer = dial) -> "TcpRtuClientHandler":
        """Create a handler from a :class:`TransportConfig`."""
        return cls(
            config.address,
            slave_id=config.slave_id,
            timeout=config.timeout,
            logger=config.logger,
            dialer=dialer,
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def address(self) -> str:
        return self.transporter.address

    @property
    def timeout(self) -> float:
        return self.transporter.timeout

    @property
    def slave_id(self) -> int:
        return self.packager.slave_id

    @property
    def is_connected(self) -> bool:
        return self.transporter.is_connected

    # ------------------------------------------------------------------
    # Packager contract
    # ------------------------------------------------------------------

    def encode(self, pdu: ProtocolDataUnit) -> bytes:
        return self.packager.encode(pdu)

    def decode(self, adu: bytes) -> ProtocolDataUnit:
        return self.packager.decode(adu)

    def verify(self, request: bytes, response: bytes) -> None:
        self.packager.verify(request, response)

    def calculate_response_length(self, adu: bytes) -> int:
        return self.packager.calculate_response_length(adu)

    # ------------------------------------------------------------------
    # Transporter contract
    # ------------------------------------------------------------------

    def connect(self) -> None:
        self.transporter.connect()

    def close(self) -> None:
        self.transporter.close()

    def send(self, request: bytes) -> bytes:
        return self.transporter.send(request)

    def flush(self, buffer: bytearray) -> None:
        self.transporter.flush(buffer)

    # ------------------------------------------------------------------
    # Exchange
    # ------------------------------------------------------------------

    @Logger.logging_on
    @ErrorTraceback.w_check_error_exist
    def execute(self, pdu: ProtocolDataUnit) -> ProtocolDataUnit:
        """
        Send *pdu* to the remote unit and return the response PDU.

        Raises:
            ModbusExceptionResponse: When the unit answered with an exception.
            FrameError: When the response is malformed or answers another
                function.
            SendError: When the exchange on the stream fails.
        """
        request = self.encode(pdu)
        response = self.send(request)
        self.verify(request, response)
        result = self.decode(response)

        if result.function_code == pdu.function_code | FrameConstants.EXCEPTION_FLAG:
            exception_code = result.data[0] if result.data else None
            raise ModbusExceptionResponse(pdu.function_code, exception_code)
        if result.function_code != pdu.function_code:
            raise FrameError(
                f"response function code '0x{result.function_code:02x}' does not "
                f"match request '0x{pdu.function_code:02x}'"
            )
        return result

    def __enter__(self) -> "TcpRtuClientHandler":
        self.connect()
        return self

    def __exit__(self, *_) -> None:
        self.close()
