"""
Configuration loader from environment variables and .env files.
"""

from typing import Any, Optional, Tuple

from pydantic import ValidationError

from ..config import NetworkConfig
from ..exceptions import ConfigurationError
from ..logging.config import LoggingConfig
from .validator import QuickFireSettings


def load_settings(env_file: Optional[str] = None, **overrides: Any) -> QuickFireSettings:
    """
    Read and validate QUICKFIRE_* settings.

    Priority (highest to lowest):
    1. **overrides
    2. Environment variables (QUICKFIRE_*)
    3. .env file
    4. Defaults

    Raises:
        ConfigurationError: settings failed validation
    """
    try:
        if env_file is not None:
            return QuickFireSettings(_env_file=env_file, **overrides)
        return QuickFireSettings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid QuickFire settings: {e}") from e


def load_from_env(env_file: Optional[str] = None, **overrides: Any) -> NetworkConfig:
    """
    Load NetworkConfig from environment variables.

    Example:
        >>> config = load_from_env()
        >>> set_default_config(config)

        >>> config = load_from_env(base_url="https://staging.example.com")
    """
    settings = load_settings(env_file, **overrides)
    return NetworkConfig(
        base_url=settings.base_url,
        timeout=settings.timeout,
        debug=settings.debug,
        user_agent=settings.user_agent,
    )


def load_logging_from_env(env_file: Optional[str] = None, **overrides: Any) -> Optional[LoggingConfig]:
    """
    Load LoggingConfig, or None when QUICKFIRE_LOG_ENABLED is false.
    """
    return LoggingConfig.from_settings(load_settings(env_file, **overrides))


def load_all_from_env(
    env_file: Optional[str] = None, **overrides: Any
) -> Tuple[NetworkConfig, Optional[LoggingConfig]]:
    """Both configs from a single settings read."""
    settings = load_settings(env_file, **overrides)
    config = NetworkConfig(
        base_url=settings.base_url,
        timeout=settings.timeout,
        debug=settings.debug,
        user_agent=settings.user_agent,
    )
    return config, LoggingConfig.from_settings(settings)


def print_config_summary(config: NetworkConfig, mask_secrets: bool = True) -> None:
    """
    Print configuration summary.

    Args:
        config: Configuration to print
        mask_secrets: Mask sensitive header values

    Example:
        >>> print_config_summary(load_from_env())
        NetworkConfig:
          base_url: https://www.example.com
          timeout: 30.0s
          ...
    """
    from ...utils.sanitizer import mask_headers

    headers = dict(config.headers)
    if mask_secrets:
        headers = mask_headers(headers)

    print("NetworkConfig:")
    print(f"  base_url: {config.base_url or '(none)'}")
    print(f"  timeout: {config.timeout}s")
    print(f"  debug: {config.debug}")
    print(f"  user_agent: {config.user_agent}")
    for name, value in headers.items():
        print(f"  header {name}: {value}")
