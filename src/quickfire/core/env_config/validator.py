"""
Pydantic settings for environment configuration.
"""

from typing import Optional, Literal
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class QuickFireSettings(BaseSettings):
    """
    QuickFire configuration from environment variables.

    Reads from:
    1. Environment variables (QUICKFIRE_*)
    2. .env file
    3. Defaults

    Example .env file:
        QUICKFIRE_BASE_URL=https://www.example.com
        QUICKFIRE_TIMEOUT=30
        QUICKFIRE_DEBUG=true
        QUICKFIRE_LOG_LEVEL=DEBUG
        QUICKFIRE_LOG_FORMAT=json

    Usage:
        >>> settings = QuickFireSettings()
        >>> settings.base_url
        'https://www.example.com'
    """

    model_config = SettingsConfigDict(
        env_prefix='QUICKFIRE_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    base_url: str = Field(default="", description="Base URL prepended to every path")
    timeout: float = Field(default=30.0, gt=0, description="Connection timeout in seconds")
    debug: bool = Field(default=False, description="Log equivalent curl commands")
    user_agent: Optional[str] = Field(default=None, description="User-Agent override")

    # Logging (disabled unless log_enabled)
    log_enabled: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text", "colored"] = Field(default="text")
    log_enable_console: bool = Field(default=True)
    log_enable_file: bool = Field(default=False)
    log_file_path: Optional[str] = Field(default=None, validate_default=True)

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """base_url must be empty or an absolute http(s) URL."""
        if v and not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https://, got {v!r}")
        return v.rstrip('/')

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator('log_format', mode='before')
    @classmethod
    def normalize_log_format(cls, v):
        return v.lower() if isinstance(v, str) else v

    @field_validator('log_file_path')
    @classmethod
    def validate_file_path(cls, v: Optional[str], info) -> Optional[str]:
        """file_path is required when log_enable_file=True."""
        if info.data.get('log_enable_file') and not v:
            raise ValueError("log_file_path is required when log_enable_file=True")
        return v
