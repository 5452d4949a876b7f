"""
Module to retrieve the version of the 'modbus_rtu_tcp' package.

Attributes
----------
__version__ : str
    The installed version of the 'modbus-rtu-tcp' distribution.
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version("modbus-rtu-tcp")
except PackageNotFoundError:
    __version__ = "0.0.0"
