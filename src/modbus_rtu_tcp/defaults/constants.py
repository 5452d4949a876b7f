from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Final


class RequiredVersion(Enum):
    """
    Minimum interpreter version supported by modbus_rtu_tcp.
    """
    PYTHON_MIN = (3, 10, 0)


class FunctionCode(IntEnum):
    """
    Modbus public function codes understood by the frame length table.
    """
    READ_COILS = 0x01
    READ_DISCRETE_INPUTS = 0x02
    READ_HOLDING_REGISTERS = 0x03
    READ_INPUT_REGISTERS = 0x04
    WRITE_SINGLE_COIL = 0x05
    WRITE_SINGLE_REGISTER = 0x06
    WRITE_MULTIPLE_COILS = 0x0F
    WRITE_MULTIPLE_REGISTERS = 0x10
    MASK_WRITE_REGISTER = 0x16
    READ_WRITE_MULTIPLE_REGISTERS = 0x17
    READ_FIFO_QUEUE = 0x18


@dataclass(frozen=True)
class FrameConstants:
    """
    Size limits of an RTU frame carried over a TCP stream.

    :cvar RTU_MIN_SIZE: Smallest valid frame (address, function, CRC).
    :cvar RTU_MAX_SIZE: Largest valid RTU frame.
    :cvar TCP_MAX_LENGTH: Capacity of the receive buffer.
    :cvar EXCEPTION_SIZE: Total length of an exception response.
    :cvar EXCEPTION_FLAG: Bit set in the function code of an exception response.
    """
    RTU_MIN_SIZE: Final[int] = 4
    RTU_MAX_SIZE: Final[int] = 256
    TCP_MAX_LENGTH: Final[int] = 260
    EXCEPTION_SIZE: Final[int] = 5
    EXCEPTION_FLAG: Final[int] = 0x80


@dataclass(frozen=True)
class TimeoutConstants:
    """
    Timeouts of the stream transport in seconds.

    :cvar DEFAULT: Applied when a transporter is configured with a timeout <= 0.
    """
    DEFAULT: Final[float] = 1.0


@dataclass(frozen=True)
class EnvConstants:
    """
    Environment variables read by the configuration helpers.
    """
    PREFIX: Final[str] = "MODBUS_RTU_TCP_"
    LOG_LEVEL: Final[str] = "MODBUS_RTU_TCP_LOG_LEVEL"


@dataclass(frozen=True)
class LoggerConstants:
    """
    Constants for logger configuration.

    :cvar MAX_QUEUE_LENGTH: Entries kept while the logger is not initialized.
    """
    MAX_QUEUE_LENGTH: Final[int] = 1000
