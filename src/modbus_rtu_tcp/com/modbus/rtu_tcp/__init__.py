"""
Modbus RTU over TCP Module

RTU framed Modbus carried over a TCP byte stream (serial-to-Ethernet
converters in transparent mode).
"""
from modbus_rtu_tcp.com.modbus.rtu_tcp.config import TransportConfig
from modbus_rtu_tcp.com.modbus.rtu_tcp.handler import TcpRtuClientHandler
from modbus_rtu_tcp.com.modbus.rtu_tcp.transporter import TcpRtuTransporter

__all__ = [
    "TcpRtuClientHandler",
    "TcpRtuTransporter",
    "TransportConfig",
]
