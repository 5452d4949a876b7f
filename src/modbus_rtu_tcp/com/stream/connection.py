"""
Blocking TCP byte stream with absolute deadlines.

A :class:`StreamConnection` wraps a connected socket. Instead of a relative
socket timeout every operation is bounded by an absolute
:func:`time.monotonic` deadline, so several reads and writes can share one
time budget.

Example::

    conn = dial("10.0.0.5:502", timeout=1.0)
    conn.set_deadline(time.monotonic() + 1.0)
    conn.write(request)
    data = bytearray(16)
    n = read_at_least(conn, data, 4)
    conn.close()
"""
from __future__ import annotations

import logging
import socket
import time
from typing import Optional, Tuple

from modbus_rtu_tcp.defaults.exceptions import ShortReadError

logger = logging.getLogger(__name__)


def split_host_port(address: str) -> Tuple[str, int]:
    """Split ``host:port`` (or ``[v6-host]:port``) into its parts.

    An empty host means the local machine.

    :raises ValueError: When the address has no valid port.
    """
    host, sep, port = address.rpartition(":")
    if not sep or not port:
        raise ValueError(f"missing port in address '{address}'")

    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    elif ":" in host:
        raise ValueError(f"too many colons in address '{address}'")

    try:
        port_number = int(port)
    except ValueError:
        raise ValueError(f"invalid port '{port}' in address '{address}'") from None
    if not 0 < port_number < 65536:
        raise ValueError(f"port {port_number} out of range in address '{address}'")

    return host or "localhost", port_number


class StreamConnection:
    """Connected TCP stream with independent read and write deadlines.

    :param sock: A connected stream socket. Ownership passes to the connection.
    :type sock: socket.socket
    :param address: Remote address used for log messages.
    :type address: str
    """

    def __init__(self, sock: socket.socket, address: str = ""):
        self._sock = sock
        self._address = address
        self._read_deadline: Optional[float] = None
        self._write_deadline: Optional[float] = None

    @property
    def remote_address(self) -> str:
        return self._address

    @property
    def read_deadline(self) -> Optional[float]:
        return self._read_deadline

    @property
    def write_deadline(self) -> Optional[float]:
        return self._write_deadline

    def set_deadline(self, deadline: Optional[float]) -> None:
        """Set read and write deadline; ``None`` blocks without limit."""
        self._read_deadline = deadline
        self._write_deadline = deadline

    def set_read_deadline(self, deadline: Optional[float]) -> None:
        self._read_deadline = deadline

    def set_write_deadline(self, deadline: Optional[float]) -> None:
        self._write_deadline = deadline

    def _apply_deadline(self, deadline: Optional[float]) -> None:
        # An elapsed deadline turns the next call into a non-blocking attempt.
        if deadline is None:
            self._sock.settimeout(None)
        else:
            self._sock.settimeout(max(deadline - time.monotonic(), 0.0))

    def write(self, data: bytes) -> int:
        """Write all of *data* before the write deadline.

        :return: Number of bytes written, always ``len(data)``.
        :raises TimeoutError: When the deadline elapses.
        :raises OSError: On any other socket failure.
        """
        self._apply_deadline(self._write_deadline)
        try:
            self._sock.sendall(data)
        except BlockingIOError as exc:
            raise TimeoutError(f"write to {self._address} timed out") from exc
        return len(data)

    def read(self, buffer) -> int:
        """Read once into *buffer* before the read deadline.

        :param buffer: Writable bytes-like object.
        :return: Number of bytes read, ``0`` when the peer closed the stream.
        :raises TimeoutError: When no data arrives before the deadline.
        :raises OSError: On any other socket failure.
        """
        self._apply_deadline(self._read_deadline)
        try:
            return self._sock.recv_into(buffer)
        except BlockingIOError as exc:
            raise TimeoutError(f"read from {self._address} timed out") from exc

    def close(self) -> None:
        self._sock.close()


def dial(address: str, timeout: float) -> StreamConnection:
    """Open a TCP connection to *address* within *timeout* seconds.

    :raises ValueError: When the address is malformed.
    :raises OSError: When resolving or connecting fails (``TimeoutError`` on timeout).
    """
    host, port = split_host_port(address)
    sock = socket.create_connection((host, port), timeout=timeout)
    try:
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
    except OSError:
        sock.close()
        raise
    logger.debug("TCP stream opened to %s", address)
    return StreamConnection(sock, address)


def read_at_least(conn: StreamConnection, buffer, minimum: int) -> int:
    """Read from *conn* into *buffer* until at least *minimum* bytes arrived.

    Several underlying reads are issued when the peer delivers the data in
    chunks. More than *minimum* bytes may be read, up to ``len(buffer)``.

    :return: Number of bytes placed into *buffer*.
    :raises ShortReadError: When the stream ends before *minimum* bytes.
    :raises ValueError: When *buffer* is smaller than *minimum*.
    """
    view = memoryview(buffer)
    if len(view) < minimum:
        raise ValueError(f"buffer of {len(view)} bytes cannot hold {minimum} bytes")

    received = 0
    while received < minimum:
        count = conn.read(view[received:])
        if count == 0:
            raise ShortReadError(
                f"stream closed after {received} of {minimum} bytes",
                received=received,
                expected=minimum,
            )
        received += count
    return received


def read_full(conn: StreamConnection, buffer) -> int:
    """Fill *buffer* completely from *conn*."""
    return read_at_least(conn, buffer, len(memoryview(buffer)))
