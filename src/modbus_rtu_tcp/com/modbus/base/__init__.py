"""
Modbus Base Module

Framing independent Modbus types.
"""
from modbus_rtu_tcp.com.modbus.base.pdu import ProtocolDataUnit

__all__ = ["ProtocolDataUnit"]
