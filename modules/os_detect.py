# modules/os_detect.py
"""Определение дистрибутива и пакетного менеджера."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional

Probe = Callable[[str], bool]

OS_RELEASE_PATH = "/etc/os-release"


class Distribution(Enum):
    CENTOS = "centos"
    DEBIAN = "debian"
    RHEL = "rhel"
    UNKNOWN = "unknown"


class PackageManager(Enum):
    RPM = "rpm"
    DEB = "deb"
    UNKNOWN = "unknown"


# Порядок важен: CentOS тоже содержит /etc/redhat-release.
MARKER_FILES = (
    ("/etc/centos-release", Distribution.CENTOS),
    ("/etc/debian_version", Distribution.DEBIAN),
    ("/etc/redhat-release", Distribution.RHEL),
)


def read_os_release(path: str = OS_RELEASE_PATH) -> Dict[str, str]:
    """
    Читает файл /etc/os-release и возвращает словарь параметров ОС.

    Файл содержит информацию об операционной системе в формате KEY=VALUE.

    Returns:
        Dict[str, str]: Словарь с параметрами ОС (ID, VERSION_ID, NAME и т.д.)
                       Пустой словарь, если файл не найден или не читается.

    Example:
        >>> info = read_os_release()
        >>> print(info.get('ID'))
        'debian'
    """
    osr_path = Path(path)
    if not osr_path.exists():
        return {}

    data = {}
    try:
        for line in osr_path.read_text(encoding="utf-8", errors="ignore").splitlines():
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip().upper()
            value = value.strip().strip('"')
            data[key] = value
    except (OSError, UnicodeDecodeError):
        return {}

    return data


def _from_os_release(info: Dict[str, str]) -> Distribution:
    os_id = info.get("ID", "").lower()
    os_like = info.get("ID_LIKE", "").lower().split()

    if os_id == "centos" or "centos" in os_like:
        return Distribution.CENTOS
    if os_id in ("debian", "ubuntu") or "debian" in os_like or "ubuntu" in os_like:
        return Distribution.DEBIAN
    if os_id in ("rhel", "fedora") or "rhel" in os_like or "fedora" in os_like:
        return Distribution.RHEL
    return Distribution.UNKNOWN


def detect_distribution(
    probe: Optional[Probe] = None,
    os_release: Optional[Callable[[], Dict[str, str]]] = None,
) -> Distribution:
    """
    Определяет дистрибутив по файлам-маркерам.

    Args:
        probe: Функция проверки существования файла (по умолчанию
            ``os.path.exists``). Подменяется в тестах.
        os_release: Источник данных /etc/os-release, используется, если ни
            один маркер не найден.

    Note:
        Приоритет определения:
        1. /etc/centos-release
        2. /etc/debian_version
        3. /etc/redhat-release
        4. ID и ID_LIKE из /etc/os-release
    """
    probe = probe or os.path.exists
    for marker, distribution in MARKER_FILES:
        if probe(marker):
            return distribution
    return _from_os_release((os_release or read_os_release)())


def detect_package_manager(
    probe: Optional[Probe] = None,
    os_release: Optional[Callable[[], Dict[str, str]]] = None,
) -> PackageManager:
    distribution = detect_distribution(probe, os_release)
    if distribution in (Distribution.CENTOS, Distribution.RHEL):
        return PackageManager.RPM
    if distribution is Distribution.DEBIAN:
        return PackageManager.DEB
    return PackageManager.UNKNOWN
