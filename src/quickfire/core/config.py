"""
Конфигурация QuickFire.

NetworkConfig immutable (frozen dataclass) и передаётся в каждый запрос явно.
Процессный default config - для удобства: его нужно настроить один раз при
старте, до первых конкурентных запросов. Изменение default config во время
выполнения запросов - ответственность вызывающего кода, блокировок нет.
"""

from concurrent.futures import Executor
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from ..utils.user_agent import default_user_agent

DEFAULT_TIMEOUT = 30.0

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# NETWORK CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class NetworkConfig:
    """
    Конфигурация сетевых запросов.

    Args:
        base_url: Базовый URL, к которому добавляется path запроса
        timeout: Таймаут подключения (сек), передаётся транспорту как есть
        headers: Дополнительные заголовки по умолчанию
        user_agent: User-Agent (None = из метаданных приложения)
        debug: Логировать эквивалентную curl команду
        callback_executor: Где вызывать callbacks (None = в потоке транспорта)

    Examples:
        >>> NetworkConfig(base_url="https://www.example.com")
        >>> NetworkConfig(base_url="https://api.example.com/", debug=True)
    """
    base_url: str = ""
    timeout: float = DEFAULT_TIMEOUT
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    user_agent: Optional[str] = None
    debug: bool = False
    callback_executor: Optional[Executor] = None

    def __post_init__(self):
        """Валидация и нормализация."""
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

        if isinstance(self.headers, dict):
            object.__setattr__(self, 'headers', MappingProxyType(dict(self.headers)))

        # Убираем завершающие слеши: path всегда начинается с '/'
        if self.base_url:
            normalized = self.base_url.rstrip('/')
            if normalized != self.base_url:
                object.__setattr__(self, 'base_url', normalized)

        if self.user_agent is None:
            object.__setattr__(self, 'user_agent', default_user_agent())

    def default_headers(self) -> Dict[str, str]:
        """
        Заголовки, которые получает каждый запрос.

        Returns:
            Новый словарь: User-Agent + headers из конфига
        """
        headers = {"User-Agent": self.user_agent}
        headers.update(self.headers)
        return headers

    def with_base_url(self, base_url: str) -> 'NetworkConfig':
        """
        Создать новый конфиг с другим base_url.

        Example:
            >>> staging = config.with_base_url("https://staging.example.com")
        """
        return replace(self, base_url=base_url)

    def with_headers(self, headers: Dict[str, str]) -> 'NetworkConfig':
        """
        Создать новый конфиг с дополнительными заголовками.

        Args:
            headers: Заголовки для объединения с существующими
        """
        merged = dict(self.headers)
        merged.update(headers)
        return replace(self, headers=merged)

    def with_timeout(self, timeout: float) -> 'NetworkConfig':
        """Создать новый конфиг с другим таймаутом."""
        return replace(self, timeout=timeout)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# PROCESS-WIDE DEFAULT
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

_default_config: Optional[NetworkConfig] = None


def get_default_config() -> NetworkConfig:
    """
    Получить процессный конфиг по умолчанию.

    Создаётся лениво при первом обращении.
    """
    global _default_config

    if _default_config is None:
        _default_config = NetworkConfig()

    return _default_config


def set_default_config(config: NetworkConfig) -> NetworkConfig:
    """
    Заменить процессный конфиг по умолчанию.

    Вызывать при старте приложения, до первых запросов.
    """
    global _default_config
    _default_config = config
    return _default_config


def set_base_url(base_url: str) -> NetworkConfig:
    """
    Установить base_url процессного конфига.

    Example:
        >>> set_base_url("https://www.example.com")
    """
    return set_default_config(get_default_config().with_base_url(base_url))
