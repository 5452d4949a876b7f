"""
Modbus RTU Module

RTU frame encoding, decoding, CRC and response length prediction.
"""
from modbus_rtu_tcp.com.modbus.rtu.crc import append_crc, check_crc, crc16
from modbus_rtu_tcp.com.modbus.rtu.packager import (
    RtuPackager,
    calculate_response_length,
)

__all__ = [
    "RtuPackager",
    "append_crc",
    "calculate_response_length",
    "check_crc",
    "crc16",
]
