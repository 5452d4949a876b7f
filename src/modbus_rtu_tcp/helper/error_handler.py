import functools
import sys
import traceback

from modbus_rtu_tcp.helper.logger import Logger, LogEntry


class ErrorTraceback:
    """
    Class to check traceback errors and feedback them to the logger.
    """

    @staticmethod
    def check_error_exist(error_details: list | None = None) -> bool:
        """
        Check if an error is currently being handled and log it.

        :param error_details: List to append error details to.
        :type error_details: list
        :return: True if an error exists, otherwise False.
        :rtype: bool
        """
        exc_type, exc_obj, exc_tb = sys.exc_info()
        if not any([exc_type, exc_obj, exc_tb]):
            return False

        if error_details is not None:
            error_details.append(traceback.format_exc())

        Logger.log(LogEntry(f'{exc_type}|{exc_obj}|').error())
        Logger.log(LogEntry(''.join(traceback.format_tb(exc_tb))).error())
        return True

    @staticmethod
    def w_check_error_exist(func):
        """
        Decorator reporting exceptions raised by *func* to the logger.

        The exception itself is re-raised unchanged.

        :param func: The function to decorate.
        :type func: callable
        :return: The wrapped function.
        :rtype: callable
        """
        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception:
                ErrorTraceback.check_error_exist()
                raise

        return sync_wrapper
