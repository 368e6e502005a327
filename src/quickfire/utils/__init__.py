"""Utility modules for QuickFire."""

from .sanitizer import (
    mask_sensitive_data,
    mask_string,
    mask_headers,
    add_sensitive_keys,
    is_sensitive_key,
)
from .user_agent import AppInfo, build_user_agent, default_user_agent

__all__ = [
    'mask_sensitive_data',
    'mask_string',
    'mask_headers',
    'add_sensitive_keys',
    'is_sensitive_key',
    'AppInfo',
    'build_user_agent',
    'default_user_agent',
]
