from __future__ import annotations

import functools
import json
import logging
import logging.config
import time
from collections import deque
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

from modbus_rtu_tcp.defaults.constants import LoggerConstants


class LogMode(Enum):
    """
    Enum for the different logging modes.

    * 0: debug-msg
    * 1: info-msg
    * 2: warning-msg
    * 3: error-msg
    """
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(slots=True)
class LogEntry:
    """
    Object for Logger entries.

    :param message: The log message.
    :type message: str
    :param mode: The log mode (default: LogMode.INFO).
    :type mode: LogMode
    """
    message: str
    mode: LogMode = LogMode.INFO

    def debug(self):
        """
        Set the mode to debug.

        :return: Self with mode set to DEBUG.
        :rtype: LogEntry
        """
        self.mode = LogMode.DEBUG
        return self

    def error(self):
        """
        Set the mode to error.

        :return: Self with mode set to ERROR.
        :rtype: LogEntry
        """
        self.mode = LogMode.ERROR
        return self

    def warn(self):
        """
        Set the mode to warning.

        :return: Self with mode set to WARNING.
        :rtype: LogEntry
        """
        self.mode = LogMode.WARNING
        return self

    def warning(self):
        return self.warn()


class Logger:
    """
    Class-level logging facade for the modbus_rtu_tcp package.

    Entries logged before :meth:`initialize` is called are buffered and
    replayed once the underlying :class:`logging.Logger` exists.
    """
    _LOGGER_NAME: str = 'modbus_rtu_tcp'
    _LOG_ACTIVE: bool = False

    logger: logging.Logger

    pre_log_buffer: deque[LogEntry] = deque(maxlen=LoggerConstants.MAX_QUEUE_LENGTH)

    @classmethod
    def initialize(
        cls,
        log_config_path: Optional[Path] = None,
        log_active: bool = True,
        log_config: Optional[dict] = None
    ) -> None:
        """
        Initialize the logger from a dictConfig file and/or dictionary.

        :param log_config_path: Path to a JSON logging configuration file.
        :type log_config_path: Path
        :param log_active: Whether logging is active.
        :type log_active: bool
        :param log_config: Configuration merged over the file content.
        :type log_config: dict
        """
        loaded_log_config: dict = {}
        if log_config_path is not None:
            with Path(log_config_path).open(mode='r') as content:
                loaded_log_config = json.load(content)

        if log_config:
            loaded_log_config = {**loaded_log_config, **log_config}

        if loaded_log_config:
            logging.config.dictConfig(loaded_log_config)

        Logger._LOG_ACTIVE = log_active
        Logger.logger = logging.getLogger(Logger._LOGGER_NAME)

        buffered = list(cls.pre_log_buffer)
        cls.pre_log_buffer.clear()
        for entry in buffered:
            cls.log(entry)

    @classmethod
    def log(cls, entry: Union[LogEntry, str, Any]) -> None:
        """
        Log a message in different modes.

        :param entry: Message and log level to be logged. For more information see LogEntry class.
        :type entry: Union[LogEntry, str, Any]
        :return: None. If logging is not active, the message is dropped.
        :rtype: None
        """
        if not isinstance(entry, LogEntry):
            entry = LogEntry(
                message=f"{entry}",
                mode=LogMode.INFO
            )

        if not hasattr(Logger, 'logger'):
            Logger.pre_log_buffer.append(entry)
            return None

        if not Logger._LOG_ACTIVE:
            return None

        match entry.mode:
            case LogMode.DEBUG:
                Logger.logger.debug(entry.message)
            case LogMode.INFO:
                Logger.logger.info(entry.message)
            case LogMode.WARNING:
                Logger.logger.warning(entry.message)
            case LogMode.ERROR:
                Logger.logger.error(entry.message)
            case _:
                Logger.logger.info(f"{entry.message}: !! Unknown mode: {entry.mode} !!")

    @classmethod
    def _log_as(cls, entry: Union[LogEntry, str], mode: LogMode) -> None:
        if isinstance(entry, str):
            entry = LogEntry(message=entry, mode=mode)
        else:
            entry.mode = mode

        Logger.log(entry)

    @classmethod
    def debug(cls, entry: Union[LogEntry, str]):
        """
        Log a message in debug mode, overriding the mode of a given entry.

        :param entry: Message or entry to be logged.
        :type entry: Union[LogEntry, str]
        """
        cls._log_as(entry, LogMode.DEBUG)

    @classmethod
    def info(cls, entry: Union[LogEntry, str]):
        """
        Log a message in info mode, overriding the mode of a given entry.

        :param entry: Message or entry to be logged.
        :type entry: Union[LogEntry, str]
        """
        cls._log_as(entry, LogMode.INFO)

    @classmethod
    def warn(cls, entry: Union[LogEntry, str]):
        """
        Log a message in warning mode, overriding the mode of a given entry.

        :param entry: Message or entry to be logged.
        :type entry: Union[LogEntry, str]
        """
        cls._log_as(entry, LogMode.WARNING)

    @classmethod
    def warning(cls, entry: Union[LogEntry, str]):
        Logger.warn(entry)

    @classmethod
    def error(cls, entry: Union[LogEntry, str]):
        """
        Log a message in error mode, overriding the mode of a given entry.

        :param entry: Message or entry to be logged.
        :type entry: Union[LogEntry, str]
        """
        cls._log_as(entry, LogMode.ERROR)

    @staticmethod
    def logging_on(func):
        """
        Decorator-function to log the name of the functions that are called.

        The runtime duration of that function will also be logged.

        :param func: Function to be decorated.
        :type func: Callable
        :return: Wrapper function.
        :rtype: Callable
        """
        func_str = f'[ {func.__qualname__} ]'

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            Logger.log(LogEntry(f'Call {func_str}').debug())
            start_time = time.perf_counter()
            func_value = func(*args, **kwargs)
            elapsed_time = time.perf_counter() - start_time
            Logger.log(
                LogEntry(f'Called {func_str} took {elapsed_time:.4f} sec')
                .debug()
            )
            return func_value
        return wrapper
