"""
Request logging configuration.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

DEFAULT_MAX_BYTES = 10 * 1024 * 1024


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def number(self) -> int:
        """Numeric level understood by the logging module."""
        return logging.getLevelName(self.value)


class LogFormat(str, Enum):
    JSON = "json"
    TEXT = "text"
    COLORED = "colored"


@dataclass(frozen=True)
class LoggingConfig:
    """
    How NetworkManager reports request lifecycle events.

    DEBUG also shows the curl reproduction of each request when
    NetworkConfig.debug is on. Records carry the request correlation_id;
    extra_fields are stamped on every record.

    Example:
        >>> LoggingConfig.create(level="debug", format="colored")
        >>> LoggingConfig.create(enable_console=False, enable_file=True,
        ...                      file_path="logs/quickfire.log")
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    enable_console: bool = True
    enable_file: bool = False
    file_path: Optional[str] = None
    max_bytes: int = DEFAULT_MAX_BYTES
    backup_count: int = 5
    enable_correlation_id: bool = True
    extra_fields: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.enable_file and not self.file_path:
            raise ValueError("file_path is required when enable_file=True")
        if self.max_bytes <= 0:
            raise ValueError("max_bytes must be positive")
        if self.backup_count < 0:
            raise ValueError("backup_count must be non-negative")

    @property
    def level_number(self) -> int:
        return self.level.number

    @property
    def writes_file(self) -> bool:
        return self.enable_file and bool(self.file_path)

    @classmethod
    def create(
        cls,
        level: Union[str, LogLevel] = LogLevel.INFO,
        format: Union[str, LogFormat] = LogFormat.TEXT,
        **options: Any
    ) -> "LoggingConfig":
        """
        Build from case-insensitive level/format names.

        Raises:
            ValueError: unknown level or format
        """
        if options.get("extra_fields") is None:
            options.pop("extra_fields", None)
        return cls(
            level=LogLevel(str(getattr(level, "value", level)).upper()),
            format=LogFormat(str(getattr(format, "value", format)).lower()),
            **options
        )

    @classmethod
    def from_settings(cls, settings: Any) -> Optional["LoggingConfig"]:
        """
        LoggingConfig from QuickFireSettings, None when log_enabled is off.
        """
        if not settings.log_enabled:
            return None
        return cls.create(
            level=settings.log_level,
            format=settings.log_format,
            enable_console=settings.log_enable_console,
            enable_file=settings.log_enable_file,
            file_path=settings.log_file_path,
        )
