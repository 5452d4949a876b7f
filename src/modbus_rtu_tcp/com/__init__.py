"""
Communication layer of modbus_rtu_tcp.

- stream/: blocking TCP byte stream with deadlines
- modbus/: RTU packager, RTU over TCP transporter and client handler
"""
