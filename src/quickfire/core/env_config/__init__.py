"""
Environment configuration for QuickFire.

Example:
    >>> from src.quickfire.core.env_config import load_from_env
    >>>
    >>> # QUICKFIRE_* variables and .env
    >>> config = load_from_env()
    >>>
    >>> # With overrides
    >>> config = load_from_env(base_url="https://staging.example.com")
"""

from .loader import (
    load_settings,
    load_from_env,
    load_logging_from_env,
    load_all_from_env,
    print_config_summary,
)
from .validator import QuickFireSettings

__all__ = [
    "load_settings",
    "load_from_env",
    "load_logging_from_env",
    "load_all_from_env",
    "print_config_summary",
    "QuickFireSettings",
]
