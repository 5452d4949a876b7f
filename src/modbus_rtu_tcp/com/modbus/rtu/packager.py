"""
Modbus RTU Packager

Builds and parses RTU application data units::

    +------------+---------------+----------------+-------------+
    | slave id   | function code | data           | CRC (LE)    |
    | 1 byte     | 1 byte        | 0..252 bytes   | 2 bytes     |
    +------------+---------------+----------------+-------------+

The packager also owns the frame length table used by stream transports to
predict how many bytes a response to a given request occupies.

Example:
    >>> packager = RtuPackager(slave_id=1)
    >>> adu = packager.encode(ProtocolDataUnit(0x03, b"\\x00\\x00\\x00\\x02"))
    >>> packager.calculate_response_length(adu)
    9
"""
from __future__ import annotations

from modbus_rtu_tcp.com.modbus.base.pdu import ProtocolDataUnit
from modbus_rtu_tcp.com.modbus.rtu.crc import append_crc, check_crc
from modbus_rtu_tcp.defaults.constants import FrameConstants, FunctionCode
from modbus_rtu_tcp.defaults.exceptions import FrameError

_BIT_READS = frozenset({
    FunctionCode.READ_COILS,
    FunctionCode.READ_DISCRETE_INPUTS,
})
_REGISTER_READS = frozenset({
    FunctionCode.READ_HOLDING_REGISTERS,
    FunctionCode.READ_INPUT_REGISTERS,
    FunctionCode.READ_WRITE_MULTIPLE_REGISTERS,
})
_WRITE_ECHOES = frozenset({
    FunctionCode.WRITE_SINGLE_COIL,
    FunctionCode.WRITE_SINGLE_REGISTER,
    FunctionCode.WRITE_MULTIPLE_COILS,
    FunctionCode.WRITE_MULTIPLE_REGISTERS,
})


def calculate_response_length(adu: bytes) -> int:
    """Predict the length of the response ADU to the request *adu*.

    Function codes whose response size cannot be derived from the request
    (e.g. read FIFO queue) yield the minimum frame size.

    :param adu: Complete request frame, at least slave id and function code.
    :return: Expected response length in bytes including address and CRC.
    """
    length = FrameConstants.RTU_MIN_SIZE
    function = adu[1]

    if function in _BIT_READS:
        if len(adu) < 6:
            return length
        count = int.from_bytes(adu[4:6], "big")
        length += 1 + count // 8
        if count % 8:
            length += 1
    elif function in _REGISTER_READS:
        if len(adu) < 6:
            return length
        count = int.from_bytes(adu[4:6], "big")
        length += 1 + count * 2
    elif function in _WRITE_ECHOES:
        length += 4
    elif function == FunctionCode.MASK_WRITE_REGISTER:
        length += 6

    return length


class RtuPackager:
    """
    Encoder and decoder of RTU frames for one slave.

    Args:
        slave_id: Address of the remote unit (0-255).
    """

    def __init__(self, slave_id: int = 1):
        if not 0 <= slave_id <= 0xFF:
            raise ValueError(f"slave id {slave_id} out of range")
        self.slave_id = slave_id

    def encode(self, pdu: ProtocolDataUnit) -> bytes:
        """
        Wrap *pdu* into an RTU frame addressed to :attr:`slave_id`.

        Raises:
            FrameError: When the frame would exceed the maximum RTU size.
        """
        length = len(pdu.data) + FrameConstants.RTU_MIN_SIZE
        if length > FrameConstants.RTU_MAX_SIZE:
            raise FrameError(
                f"length of data '{length}' must not be bigger than "
                f"'{FrameConstants.RTU_MAX_SIZE}'"
            )
        return append_crc(bytes([self.slave_id, pdu.function_code]) + pdu.data)

    def verify(self, request: bytes, response: bytes) -> None:
        """
        Check that *response* is long enough and answers the addressed slave.

        Raises:
            FrameError: On a too short response or a slave id mismatch.
        """
        if len(response) < FrameConstants.RTU_MIN_SIZE:
            raise FrameError(
                f"response length '{len(response)}' does not meet minimum "
                f"'{FrameConstants.RTU_MIN_SIZE}'"
            )
        if response[0] != request[0]:
            raise FrameError(
                f"response slave id '{response[0]}' does not match request '{request[0]}'"
            )

    def decode(self, adu: bytes) -> ProtocolDataUnit:
        """
        Validate the CRC of *adu* and extract its protocol data unit.

        Raises:
            FrameError: When the frame is shorter than the minimum size.
            CrcError: When the CRC does not match.
        """
        if len(adu) < FrameConstants.RTU_MIN_SIZE:
            raise FrameError(
                f"frame length '{len(adu)}' does not meet minimum "
                f"'{FrameConstants.RTU_MIN_SIZE}'"
            )
        check_crc(adu)
        return ProtocolDataUnit(function_code=adu[1], data=bytes(adu[2:-2]))

    @staticmethod
    def calculate_response_length(adu: bytes) -> int:
        """See :func:`calculate_response_length`."""
        return calculate_response_length(adu)
