"""
Structured logger for QuickFire.

Keyword arguments become record fields; sensitive values are masked
before they reach any handler.
"""

import logging
from typing import Optional, Any

from .config import LoggingConfig
from .formatters import get_formatter
from .filters import CorrelationIdFilter, ExtraFieldsFilter
from .handlers import create_console_handler, create_file_handler
from ...utils.sanitizer import mask_sensitive_data


class QuickFireLogger:
    """
    Logger with console/file handlers and structured fields.

    Example:
        >>> logger = QuickFireLogger(LoggingConfig.create(level="DEBUG"))
        >>> logger.info("Request started", method="GET", url="https://api.com/x/")
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = "quickfire"):
        self.config = config or LoggingConfig()
        self.name = name
        self._closed = False

        level = self.config.level_number
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.propagate = False

        # Reinitialising replaces previous handlers
        self._logger.handlers.clear()

        filters = []
        if self.config.enable_correlation_id:
            filters.append(CorrelationIdFilter())
        if self.config.extra_fields:
            filters.append(ExtraFieldsFilter(self.config.extra_fields))

        formatter = get_formatter(self.config.format.value)

        if self.config.enable_console:
            self._logger.addHandler(create_console_handler(level, formatter, filters))

        if self.config.writes_file:
            self._logger.addHandler(create_file_handler(
                file_path=self.config.file_path,
                level=level,
                formatter=formatter,
                max_bytes=self.config.max_bytes,
                backup_count=self.config.backup_count,
                filters=filters
            ))

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    def _log(self, level: int, message: str, kwargs: dict, exc_info: bool = False) -> None:
        if self._closed or not self._logger.isEnabledFor(level):
            return
        self._logger.log(level, message, extra=mask_sensitive_data(kwargs), exc_info=exc_info)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """
        Log info message.

        Example:
            >>> logger.info("Request completed", status_code=200, duration_ms=150)
        """
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log error with traceback; call from an exception handler."""
        self._log(logging.ERROR, message, kwargs, exc_info=True)

    def close(self) -> None:
        """
        Flush and close handlers. Idempotent.

        Example:
            >>> with QuickFireLogger(config) as logger:
            ...     logger.info("Uploading")
        """
        if self._closed:
            return

        for handler in self._logger.handlers[:]:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)

        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


# Global logger instance (singleton pattern)
_default_logger: Optional[QuickFireLogger] = None


def get_logger(config: Optional[LoggingConfig] = None) -> QuickFireLogger:
    """
    Get global logger instance; config is only used on the first call.
    """
    global _default_logger

    if _default_logger is None:
        _default_logger = QuickFireLogger(config)

    return _default_logger


def configure_logging(config: LoggingConfig) -> QuickFireLogger:
    """
    Replace the global logger with a newly configured one.

    Example:
        >>> configure_logging(LoggingConfig.create(level="DEBUG", format="json"))
    """
    global _default_logger
    if _default_logger is not None:
        _default_logger.close()
    _default_logger = QuickFireLogger(config)
    return _default_logger
