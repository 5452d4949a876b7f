"""
CRC-16/MODBUS helpers.

The checksum is computed with :mod:`crcmod` (poly 0x8005 reflected, init
0xFFFF) and transmitted little-endian at the end of every RTU frame.
"""
from __future__ import annotations

import crcmod.predefined

from modbus_rtu_tcp.defaults.exceptions import CrcError, FrameError

_modbus_crc = crcmod.predefined.mkCrcFun("modbus")


def crc16(data: bytes) -> int:
    """Return the CRC-16/MODBUS of *data*."""
    return _modbus_crc(bytes(data))


def append_crc(frame: bytes) -> bytes:
    """Return *frame* followed by its little-endian CRC."""
    frame = bytes(frame)
    return frame + crc16(frame).to_bytes(2, "little")


def check_crc(adu: bytes) -> None:
    """Validate the trailing CRC of a complete RTU frame.

    :raises FrameError: When the frame is too short to carry a CRC.
    :raises CrcError: When the CRC does not match.
    """
    if len(adu) < 3:
        raise FrameError(f"frame of {len(adu)} bytes is too short to carry a crc")
    expected = crc16(adu[:-2])
    actual = int.from_bytes(adu[-2:], "little")
    if expected != actual:
        raise CrcError(expected=expected, actual=actual)
