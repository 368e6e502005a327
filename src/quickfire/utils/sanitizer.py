# src/quickfire/utils/sanitizer.py
"""
Маскирование чувствительных данных в логах и curl командах.

Заголовки авторизации, токены и пароли не должны попадать в логи
даже в debug режиме.
"""

import re
from typing import Any, Dict

REDACTED = "***REDACTED***"

# Чувствительные ключи (case-insensitive, частичное совпадение)
SENSITIVE_KEYS = {
    'password', 'passwd', 'pwd',
    'token', 'access_token', 'refresh_token', 'jwt',
    'secret', 'client_secret',
    'api_key', 'apikey', 'x-api-key',
    'authorization', 'proxy-authorization', 'auth',
    'cookie', 'set-cookie', 'session', 'csrf',
}

# Паттерны для строк (значения заголовков, curl команды, URL)
SENSITIVE_PATTERNS = [
    (re.compile(r'(Bearer\s+)([A-Za-z0-9\-._~+/]+=*)', re.IGNORECASE), r'\1' + REDACTED),
    (re.compile(r'(Basic\s+)([A-Za-z0-9+/]+=*)', re.IGNORECASE), r'\1' + REDACTED),
    (re.compile(r'(api[_-]?key[=:]\s*)([^\s&,;\']+)', re.IGNORECASE), r'\1' + REDACTED),
    (re.compile(r'(token[=:]\s*)([^\s&,;\']+)', re.IGNORECASE), r'\1' + REDACTED),
    (re.compile(r'(password[=:]\s*)([^\s&,;\']+)', re.IGNORECASE), r'\1' + REDACTED),
]


def is_sensitive_key(key: Any) -> bool:
    """
    Проверяет, является ли ключ чувствительным.

    Examples:
        >>> is_sensitive_key("Authorization")
        True
        >>> is_sensitive_key("X-Refresh-Token")
        True
        >>> is_sensitive_key("Content-Type")
        False
    """
    key_lower = str(key).lower()
    return any(sensitive in key_lower for sensitive in SENSITIVE_KEYS)


def mask_string(text: str, mask: str = REDACTED) -> str:
    """Маскирует чувствительные фрагменты строки по SENSITIVE_PATTERNS."""
    result = text
    for pattern, replacement in SENSITIVE_PATTERNS:
        result = pattern.sub(replacement.replace(REDACTED, mask), result)
    return result


def mask_sensitive_data(data: Any, mask: str = REDACTED) -> Any:
    """
    Рекурсивно маскирует dict/list/str, остальные типы возвращает как есть.

    Args:
        data: Данные для маскирования
        mask: Строка-заменитель

    Returns:
        Копия данных с замаскированными значениями

    Examples:
        >>> mask_sensitive_data({"user": "alice", "password": "s3cret"})
        {'user': 'alice', 'password': '***REDACTED***'}
    """
    if isinstance(data, str):
        return mask_string(data, mask)

    if isinstance(data, dict):
        return {
            key: mask if is_sensitive_key(key) else mask_sensitive_data(value, mask)
            for key, value in data.items()
        }

    if isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive_data(item, mask) for item in data)

    return data


def mask_headers(headers: Dict[str, str], mask: str = REDACTED) -> Dict[str, str]:
    """
    Маскирует значения чувствительных HTTP заголовков.

    Examples:
        >>> mask_headers({"Authorization": "Bearer abc", "User-Agent": "shop/1.0"})
        {'Authorization': '***REDACTED***', 'User-Agent': 'shop/1.0'}
    """
    return {
        key: mask if is_sensitive_key(key) else value
        for key, value in headers.items()
    }


def add_sensitive_keys(*keys: str) -> None:
    """
    Расширяет набор чувствительных ключей.

    Example:
        >>> add_sensitive_keys("x-shop-signature")
    """
    for key in keys:
        SENSITIVE_KEYS.add(key.lower())
