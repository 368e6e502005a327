"""
Иерархия исключений QuickFire.

Классификация:
- NetworkError - ошибки, которыми отклоняется Deferred запроса
- MalformedEndpointError / InvalidURLError - ошибки построения запроса
- ConfigurationError - невалидная конфигурация
"""

from enum import Enum
from typing import Optional

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class QuickFireException(Exception):
    """Базовое исключение QuickFire."""

    def __init__(self, message: str, **kwargs):
        self.message = message
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# СЕТЕВЫЕ ОШИБКИ (failure channel of Deferred)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ErrorKind(str, Enum):
    """Вариант сетевой ошибки."""
    INVALID = "invalid"
    SERVER_STATUS = "server_status"
    PARSING = "parsing"
    USER_ABANDONED = "user_abandoned"
    CUSTOM = "custom"


class NetworkError(QuickFireException):
    """
    Базовая сетевая ошибка.

    Каждый подкласс соответствует одному варианту ErrorKind.
    UI слой может проверить has_readable_message, чтобы решить,
    показывать ли description пользователю как есть.

    Examples:
        >>> NetworkError.from_status(404).description
        'Server Error 404'
        >>> NetworkError.from_status(None).kind
        <ErrorKind.INVALID: 'invalid'>
    """

    kind: ErrorKind = ErrorKind.INVALID
    has_readable_message: bool = False

    @property
    def description(self) -> str:
        """Человекочитаемое описание."""
        return self.message

    @property
    def failure_reason(self) -> str:
        return self.description

    @property
    def recovery_suggestion(self) -> str:
        return self.description

    @classmethod
    def from_status(cls, status_code: Optional[int]) -> "NetworkError":
        """
        Ошибка по статусу ответа, тело которого не удалось разобрать.

        Args:
            status_code: HTTP статус (None если ответ не получен)

        Returns:
            InvalidError без ответа, ParsingError для 2xx,
            иначе ServerStatusError
        """
        if status_code is None:
            return InvalidError()
        if 200 <= status_code <= 299:
            return ParsingError()
        return ServerStatusError(status_code)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class InvalidError(NetworkError):
    """Нет пригодного ответа."""

    kind = ErrorKind.INVALID

    def __init__(self, message: str = "Invalid Error"):
        super().__init__(message)


class ServerStatusError(NetworkError):
    """
    HTTP ошибка сервера.

    Args:
        status_code: HTTP статус код
    """

    kind = ErrorKind.SERVER_STATUS

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Server Error {status_code}")

    def __repr__(self) -> str:
        return f"ServerStatusError({self.status_code})"


class ParsingError(NetworkError):
    """2xx ответ, тело которого не удалось декодировать в ожидаемый тип."""

    kind = ErrorKind.PARSING

    def __init__(self, message: str = "Parsing Error"):
        super().__init__(message)


class UserAbandonedError(NetworkError):
    """Запрос отменён пользователем. Внутри библиотеки не выбрасывается."""

    kind = ErrorKind.USER_ABANDONED
    has_readable_message = True

    def __init__(self, message: str = "User Abandoned Request Error"):
        super().__init__(message)


class CustomError(NetworkError):
    """Ошибка транспорта с сообщением."""

    kind = ErrorKind.CUSTOM
    has_readable_message = True

    def __init__(self, message: str):
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОШИБКИ ПОСТРОЕНИЯ ЗАПРОСА
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class MalformedEndpointError(QuickFireException):
    """
    Строка endpoint не в формате "METHOD /path".

    Args:
        endpoint: Исходная строка
    """

    def __init__(self, endpoint: str):
        self.endpoint = endpoint
        super().__init__(
            f"Malformed endpoint {endpoint!r}: expected 'METHOD /path'"
        )


class InvalidURLError(QuickFireException):
    """
    Не удалось построить URL запроса.

    Args:
        message: Сообщение
        url: Собранный URL (если есть)
    """

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        msg = message
        if url:
            msg += f" (url: {url})"
        super().__init__(msg)


class ConfigurationError(QuickFireException):
    """Ошибка конфигурации."""
    pass
