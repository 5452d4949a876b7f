"""
Shared fixtures for the modbus_rtu_tcp test suite.

Two peers are provided:

* :class:`ScriptedStream` replaces the byte stream in memory and hands out
  pre-recorded chunks, so tests can control exactly how a response is split
  across reads.
* :class:`FakeRtuPeer` is a loopback TCP server answering each request with
  scripted chunks, used by the ``integration`` tests.
"""
from __future__ import annotations

import queue
import socket
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Iterable, List, Optional

import pytest

from modbus_rtu_tcp.com.modbus.rtu.crc import append_crc
from modbus_rtu_tcp.helper.logger import Logger


# ---------------------------------------------------------------------------
# Frames
# ---------------------------------------------------------------------------

# Read two holding registers starting at 0 from unit 1.
READ_HOLDING_REQUEST = append_crc(bytes([0x01, 0x03, 0x00, 0x00, 0x00, 0x02]))
READ_HOLDING_RESPONSE = append_crc(bytes([0x01, 0x03, 0x04, 0x00, 0x0A, 0x00, 0x0B]))
# Illegal data address.
READ_HOLDING_EXCEPTION = append_crc(bytes([0x01, 0x83, 0x02]))


@pytest.fixture
def frames():
    """Request, normal response and exception response of a holding register read."""
    return SimpleNamespace(
        request=READ_HOLDING_REQUEST,
        response=READ_HOLDING_RESPONSE,
        exception=READ_HOLDING_EXCEPTION,
    )


# ---------------------------------------------------------------------------
# In-memory stream
# ---------------------------------------------------------------------------

class ScriptedStream:
    """Stand-in for :class:`StreamConnection` replaying scripted chunks.

    :param chunks: Byte chunks returned by successive reads. A chunk larger
        than the read buffer is split and the rest kept for the next read.
    :param when_empty: ``"eof"`` to report a closed stream once all chunks
        are consumed, ``"timeout"`` to raise :class:`TimeoutError`.
    """

    def __init__(self, chunks: Iterable[bytes] = (), when_empty: str = "eof"):
        self.chunks = deque(bytes(chunk) for chunk in chunks)
        self.when_empty = when_empty
        self.written: List[bytes] = []
        self.deadlines: List[Optional[float]] = []
        self.read_deadline: Optional[float] = None
        self.write_deadline: Optional[float] = None
        self.reads = 0
        self.closed = False
        self.read_error: Optional[BaseException] = None
        self.write_error: Optional[BaseException] = None
        self.close_error: Optional[BaseException] = None

    def set_deadline(self, deadline):
        self.deadlines.append(deadline)
        self.read_deadline = deadline
        self.write_deadline = deadline

    def set_read_deadline(self, deadline):
        self.read_deadline = deadline

    def set_write_deadline(self, deadline):
        self.write_deadline = deadline

    def write(self, data):
        if self.write_error is not None:
            raise self.write_error
        self.written.append(bytes(data))
        return len(data)

    def read(self, buffer):
        self.reads += 1
        if not self.chunks:
            if self.read_error is not None:
                raise self.read_error
            if self.when_empty == "timeout":
                raise TimeoutError("no data before deadline")
            return 0

        chunk = self.chunks.popleft()
        view = memoryview(buffer)
        count = min(len(view), len(chunk))
        view[:count] = chunk[:count]
        if count < len(chunk):
            self.chunks.appendleft(chunk[count:])
        return count

    def close(self):
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


class RecordingDialer:
    """Dialer handing out prepared streams and recording each call."""

    def __init__(self, *streams: ScriptedStream):
        self.streams = deque(streams)
        self.calls: List[tuple] = []
        self.error: Optional[BaseException] = None

    def __call__(self, address: str, timeout: float):
        self.calls.append((address, timeout))
        if self.error is not None:
            raise self.error
        return self.streams.popleft()


@pytest.fixture
def scripted_stream():
    """Factory fixture: ``scripted_stream([chunk, ...], when_empty="eof")``."""
    return ScriptedStream


@pytest.fixture
def recording_dialer():
    """Factory fixture: ``recording_dialer(stream, ...)``."""
    return RecordingDialer


# ---------------------------------------------------------------------------
# Loopback peer
# ---------------------------------------------------------------------------

@dataclass
class Reply:
    """Scripted answer of :class:`FakeRtuPeer` to one request."""
    chunks: List[bytes] = field(default_factory=list)
    delay: float = 0.0
    close: bool = False


class FakeRtuPeer:
    """Loopback TCP server answering requests with scripted replies.

    Requests without a queued reply are left unanswered.
    """

    def __init__(self):
        self._server = socket.create_server(("127.0.0.1", 0))
        self.port = self._server.getsockname()[1]
        self.address = f"127.0.0.1:{self.port}"
        self.requests: List[bytes] = []
        self.connections = 0
        self.disconnections = 0
        self._replies: "queue.Queue[Reply]" = queue.Queue()
        self._lock = threading.Lock()
        self._thread = threading.Thread(target=self._accept_loop, daemon=True)
        self._thread.start()

    def reply(self, *chunks: bytes, delay: float = 0.0, close: bool = False) -> None:
        """Queue the answer to the next request, sent as separate *chunks*."""
        self._replies.put(Reply(list(chunks), delay, close))

    def wait_for_disconnections(self, count: int, timeout: float = 2.0) -> bool:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            with self._lock:
                if self.disconnections >= count:
                    return True
            time.sleep(0.01)
        return False

    def stop(self) -> None:
        self._server.close()

    def _accept_loop(self) -> None:
        while True:
            try:
                conn, _ = self._server.accept()
            except OSError:
                return
            with self._lock:
                self.connections += 1
            threading.Thread(target=self._serve, args=(conn,), daemon=True).start()

    def _serve(self, conn: socket.socket) -> None:
        with conn:
            while True:
                try:
                    request = conn.recv(260)
                except OSError:
                    break
                if not request:
                    break
                with self._lock:
                    self.requests.append(request)
                try:
                    reply = self._replies.get_nowait()
                except queue.Empty:
                    continue

                try:
                    for index, chunk in enumerate(reply.chunks):
                        if index and reply.delay:
                            time.sleep(reply.delay)
                        conn.sendall(chunk)
                except OSError:
                    break
                if reply.close:
                    break
        with self._lock:
            self.disconnections += 1


@pytest.fixture
def rtu_peer():
    peer = FakeRtuPeer()
    yield peer
    peer.stop()


# ---------------------------------------------------------------------------
# Logger state
# ---------------------------------------------------------------------------

@pytest.fixture
def reset_logger():
    """Reset the class-level :class:`Logger` state around a test."""
    def _reset():
        if hasattr(Logger, "logger"):
            del Logger.logger
        Logger._LOG_ACTIVE = False
        Logger.pre_log_buffer.clear()

    _reset()
    yield
    _reset()
