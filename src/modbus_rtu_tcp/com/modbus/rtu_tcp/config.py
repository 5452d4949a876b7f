"""
Configuration of an RTU over TCP client.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from modbus_rtu_tcp.com.stream.connection import split_host_port
from modbus_rtu_tcp.defaults.constants import EnvConstants, TimeoutConstants


@dataclass(frozen=True)
class TransportConfig:
    """
    Settings of one RTU over TCP session.

    :param address: Remote ``host:port`` (IPv6 hosts in brackets).
    :type address: str
    :param timeout: Seconds for connecting and for one request/response
        exchange. Values <= 0 are replaced by the default on first connect.
    :type timeout: float
    :param slave_id: Address of the remote unit.
    :type slave_id: int
    :param logger: Optional sink receiving hex dumps of every frame.
    :type logger: logging.Logger
    """
    address: str
    timeout: float = TimeoutConstants.DEFAULT
    slave_id: int = 1
    logger: Optional[logging.Logger] = field(default=None, compare=False)

    def __post_init__(self):
        split_host_port(self.address)
        if not 0 <= self.slave_id <= 0xFF:
            raise ValueError(f"slave id {self.slave_id} out of range")

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        prefix: str = EnvConstants.PREFIX,
        logger: Optional[logging.Logger] = None,
    ) -> "TransportConfig":
        """
        Build a configuration from ``<prefix>ADDRESS``, ``<prefix>TIMEOUT``
        and ``<prefix>SLAVE_ID``.

        :raises KeyError: When the address variable is missing.
        :raises ValueError: When a value cannot be parsed.
        """
        environ = os.environ if environ is None else environ

        address = environ[f"{prefix}ADDRESS"]
        timeout = float(environ.get(f"{prefix}TIMEOUT", TimeoutConstants.DEFAULT))
        slave_id = int(environ.get(f"{prefix}SLAVE_ID", "1"), 0)

        return cls(address=address, timeout=timeout, slave_id=slave_id, logger=logger)
