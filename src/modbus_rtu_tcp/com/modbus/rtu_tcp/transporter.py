"""
Modbus RTU over TCP Transporter

Sends RTU frames (slave id + PDU + CRC) over a TCP stream, as done by
serial-to-Ethernet converters that forward the serial bytes verbatim.
TCP carries no message boundaries, so the length of each response is
derived from the request's function code and from the bytes received so far.

Example:
    >>> transporter = TcpRtuTransporter("192.168.1.20:4001", timeout=1.0)
    >>> response = transporter.send(request)     # auto-session
    >>>
    >>> with transporter:                        # persistent session
    ...     first = transporter.send(request)
    ...     second = transporter.send(request)
"""
from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from modbus_rtu_tcp.com.modbus.rtu.packager import calculate_response_length
from modbus_rtu_tcp.com.stream.connection import (
    StreamConnection,
    dial,
    read_at_least,
    read_full,
)
from modbus_rtu_tcp.defaults.constants import FrameConstants, TimeoutConstants
from modbus_rtu_tcp.defaults.exceptions import (
    CloseError,
    ConnectError,
    FlushError,
    ReadError,
    RtuTcpError,
    TransportTimeoutError,
    WriteError,
)
from modbus_rtu_tcp.helper.error_handler import ErrorTraceback
from modbus_rtu_tcp.helper.logging_config import format_frame

logger = logging.getLogger(__name__)

Dialer = Callable[[str, float], StreamConnection]


class TcpRtuTransporter:
    """
    Stream transport performing one request/response exchange per call.

    Without a prior :meth:`connect` every :meth:`send` opens a connection and
    closes it again before returning (auto-session). After :meth:`connect`
    the connection is reused until :meth:`close` (persistent session).

    Instances are not thread-safe; use one transporter per logical session.

    Args:
        address: Remote ``host:port``.
        timeout: Seconds for connecting and for one exchange (write and read
            share the budget). Values <= 0 become the default on connect.
        logger: Optional sink receiving hex dumps of sent and received frames.
        length_calculator: Predicts the response length of a request frame.
        dialer: Opens the byte stream, :func:`dial` by default.
    """

    def __init__(
        self,
        address: str = "",
        timeout: float = 0.0,
        logger: Optional[logging.Logger] = None,
        *,
        length_calculator: Callable[[bytes], int] = calculate_response_length,
        dialer: Dialer = dial,
    ):
        self.address = address
        self.timeout = timeout
        self.logger = logger
        self._calculate_response_length = length_calculator
        self._dial = dialer
        self._conn: Optional[StreamConnection] = None

    @property
    def is_connected(self) -> bool:
        """``True`` while a connection is held."""
        return self._conn is not None

    @ErrorTraceback.w_check_error_exist
    def connect(self) -> None:
        """
        Establish a new connection to :attr:`address`.

        Any previously held connection reference is replaced without closing it.

        Raises:
            ConnectError: When resolving, dialing or the connect timeout fails.
        """
        if self.timeout <= 0:
            self.timeout = TimeoutConstants.DEFAULT

        self._conn = None
        try:
            self._conn = self._dial(self.address, self.timeout)
        except (OSError, ValueError) as exc:
            raise ConnectError(f"connect to '{self.address}' failed: {exc}") from exc

        logger.info("✅ RTU/TCP connected to %s", self.address)

    @ErrorTraceback.w_check_error_exist
    def close(self) -> None:
        """
        Close the held connection, if any.

        Raises:
            CloseError: When closing fails. The connection is released anyway.
        """
        conn, self._conn = self._conn, None
        if conn is None:
            return

        try:
            conn.close()
        except OSError as exc:
            raise CloseError(f"close of '{self.address}' failed: {exc}") from exc

        logger.info("🔌 RTU/TCP connection to %s closed", self.address)

    def send(self, request: bytes) -> bytes:
        """
        Write *request* and read back one complete response frame.

        Args:
            request: RTU request frame; byte 1 is the function code.

        Returns:
            The response frame, exactly as many bytes as were framed.

        Raises:
            ValueError: When *request* is shorter than two bytes.
            ConnectError: When an auto-session cannot connect.
            WriteError: When writing the request fails.
            ShortReadError: When the stream ends inside the response.
            ReadError: When reading the response fails.
            TransportTimeoutError: When the exchange deadline elapses.
        """
        request = bytes(request)
        if len(request) < 2:
            raise ValueError(f"request of {len(request)} bytes has no function code")

        if self._conn is not None:
            return self._exchange(self._conn, request)

        self.connect()
        try:
            return self._exchange(self._conn, request)
        finally:
            self._close_auto_session()

    def flush(self, buffer: bytearray) -> None:
        """
        Discard bytes already waiting on the connection.

        One non-blocking read into *buffer* is attempted; an empty stream is
        not an error. The previous read deadline is restored afterwards.

        Raises:
            FlushError: Without a connection, when the peer closed the stream
                or on a read failure other than a timeout.
        """
        conn = self._conn
        if conn is None:
            raise FlushError(f"no connection to '{self.address}' to flush")

        previous = conn.read_deadline
        conn.set_read_deadline(time.monotonic())
        try:
            count = conn.read(buffer)
        except TimeoutError:
            return
        except OSError as exc:
            raise FlushError(f"flush of '{self.address}' failed: {exc}") from exc
        finally:
            conn.set_read_deadline(previous)

        if count == 0 and len(buffer):
            raise FlushError(f"connection to '{self.address}' closed by peer")
        if count:
            logger.debug("Flushed %d stale bytes from %s", count, self.address)

    def _exchange(self, conn: StreamConnection, request: bytes) -> bytes:
        self._emit("sending", request)

        conn.set_deadline(time.monotonic() + self.timeout)
        try:
            conn.write(request)
        except TimeoutError as exc:
            raise TransportTimeoutError(f"write to '{self.address}' timed out") from exc
        except OSError as exc:
            raise WriteError(f"write to '{self.address}' failed: {exc}") from exc

        function = request[1]
        function_fail = request[1] | FrameConstants.EXCEPTION_FLAG
        bytes_to_read = self._calculate_response_length(request)

        data = bytearray(FrameConstants.TCP_MAX_LENGTH)
        view = memoryview(data)
        # Header first, whatever the peer already delivered beyond it is kept.
        received = self._receive(read_at_least, conn, view, FrameConstants.RTU_MIN_SIZE)

        if data[1] == function:
            if (received < bytes_to_read
                    and FrameConstants.RTU_MIN_SIZE < bytes_to_read <= FrameConstants.RTU_MAX_SIZE):
                received += self._receive(read_full, conn, view[received:bytes_to_read])
        elif data[1] == function_fail:
            if received < FrameConstants.EXCEPTION_SIZE:
                received += self._receive(
                    read_full, conn, view[received:FrameConstants.EXCEPTION_SIZE]
                )

        response = bytes(data[:received])
        self._emit("received", response)
        return response

    def _receive(self, reader, conn: StreamConnection, view: memoryview, *args) -> int:
        try:
            return reader(conn, view, *args)
        except TimeoutError as exc:
            raise TransportTimeoutError(f"read from '{self.address}' timed out") from exc
        except OSError as exc:
            raise ReadError(f"read from '{self.address}' failed: {exc}") from exc

    def _close_auto_session(self) -> None:
        try:
            self.close()
        except RtuTcpError as exc:
            logger.warning("⚠️ Closing auto-session to %s failed: %s", self.address, exc)

    def _emit(self, direction: str, frame: bytes) -> None:
        if self.logger is None:
            return
        try:
            self.logger.debug("modbus: %s %s", direction, format_frame(frame))
        except Exception:
            logger.warning("⚠️ Frame logger failed", exc_info=True)

    def __enter__(self) -> "TcpRtuTransporter":
        self.connect()
        return self

    def __exit__(self, *_) -> None:
        self.close()
