"""
Modbus protocol data unit shared by all framings.
"""
from __future__ import annotations

from dataclasses import dataclass

from modbus_rtu_tcp.defaults.constants import FrameConstants


@dataclass(frozen=True)
class ProtocolDataUnit:
    """
    Function code and payload of a Modbus message, without addressing or CRC.

    :param function_code: Modbus function code (0-255).
    :type function_code: int
    :param data: Function specific payload.
    :type data: bytes
    """
    function_code: int
    data: bytes = b""

    def __post_init__(self):
        if not 0 <= self.function_code <= 0xFF:
            raise ValueError(f"function code {self.function_code} out of range")
        object.__setattr__(self, "data", bytes(self.data))

    @property
    def is_exception(self) -> bool:
        """``True`` when the function code carries the exception flag."""
        return bool(self.function_code & FrameConstants.EXCEPTION_FLAG)

    def __repr__(self) -> str:
        return (
            f"ProtocolDataUnit(function_code=0x{self.function_code:02x}, "
            f"data={self.data.hex(' ') if self.data else '(empty)'})"
        )
