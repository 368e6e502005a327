"""
User-Agent строка из метаданных приложения-хоста.

Формат:
    {executable}/{version} ({platform}; {os} {os_version}; build:{build};)
"""

import platform
import sys
from dataclasses import dataclass
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, metadata
from pathlib import Path
from typing import Optional


DEFAULT_USER_AGENT = "QuickFire/1.0.0 Python"


@dataclass(frozen=True)
class AppInfo:
    """
    Идентификация приложения-хоста.

    Args:
        executable: Имя исполняемого файла / приложения
        version: Версия приложения
        build: Номер сборки
        platform: Платформа устройства (например x86_64)
        os_name: Название ОС
        os_version: Версия ОС
    """

    executable: str
    version: str
    build: str
    platform: str
    os_name: str
    os_version: str

    @property
    def user_agent(self) -> str:
        return (
            f"{self.executable}/{self.version} "
            f"({self.platform}; {self.os_name} {self.os_version}; build:{self.build};)"
        )

    @classmethod
    def detect(cls, distribution: Optional[str] = None) -> Optional["AppInfo"]:
        """
        Собрать AppInfo из метаданных установленного дистрибутива.

        Args:
            distribution: Имя дистрибутива приложения. Если не указано,
                используется имя запущенного скрипта.

        Returns:
            AppInfo или None, если метаданные недоступны
        """
        name = distribution or Path(sys.argv[0] or "").stem
        if not name:
            return None

        try:
            meta = metadata(name)
        except PackageNotFoundError:
            return None

        version = meta.get("Version")
        if not version:
            return None

        return cls(
            executable=meta.get("Name") or name,
            version=version,
            build=_build_number(version),
            platform=platform.machine() or "unknown",
            os_name=platform.system() or "unknown",
            os_version=platform.release() or "unknown",
        )


def _build_number(version: str) -> str:
    """Local version label (1.2.3+45 -> 45), иначе сама версия."""
    if "+" in version:
        return version.split("+", 1)[1]
    return version


def build_user_agent(app_info: Optional[AppInfo] = None) -> str:
    """
    Построить User-Agent.

    Args:
        app_info: Метаданные приложения (None = fallback)

    Returns:
        User-Agent строка

    Examples:
        >>> build_user_agent(AppInfo("shop", "2.1", "77", "arm64", "Darwin", "23.1.0"))
        'shop/2.1 (arm64; Darwin 23.1.0; build:77;)'
        >>> build_user_agent()
        'QuickFire/1.0.0 Python'
    """
    if app_info is None:
        return DEFAULT_USER_AGENT
    return app_info.user_agent


@lru_cache(maxsize=1)
def default_user_agent() -> str:
    """User-Agent текущего процесса (вычисляется один раз)."""
    return build_user_agent(AppInfo.detect())
