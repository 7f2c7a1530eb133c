# modules/package.py
"""Installed-package checks backed by dpkg-query or rpm."""

from __future__ import annotations

from functools import partial
from typing import Optional

from modules.command_executor import Runner, default_timeout, run_command
from modules.os_detect import PackageManager, detect_package_manager
from modules.outcome import Outcome, Report, UnitError, UnitSuccess
from modules.parsing import parse_bool
from utils.logger import log_debug

SEPARATOR = "---"
INSTALLED_TOKEN = "installed"
TEST_NAME = "package - installed"


def _stdout(runner: Runner, argv: list[str]) -> str:
    # Код возврата и stderr игнорируются: неизвестный пакет == "не найден".
    return runner(argv).stdout or ""


def query_debian(name: str, version: Optional[str], runner: Runner) -> bool:
    """Returns True if dpkg reports *name* installed (at *version*, if given).

    Each output line is ``status---version``; the status of an installed
    package ends with ``installed`` (``install ok installed``,
    ``hold ok installed``).
    """
    out = _stdout(runner, ["dpkg-query", "-W", "-f", "${Status}---${Version}\\n", name])
    for line in out.splitlines():
        status, sep, line_version = line.strip().partition(SEPARATOR)
        if not sep:
            continue
        words = status.split()
        if not words or words[-1] != INSTALLED_TOKEN:
            continue
        if version is None or line_version == version:
            return True
    return False


def query_rpm(name: str, version: Optional[str], runner: Runner) -> bool:
    """Returns True if rpm knows *name* (exactly ``name---version`` if given)."""
    out = _stdout(runner, ["rpm", "-q", "--queryformat", "%{NAME}---%{VERSION}\\n", name])
    for line in out.splitlines():
        line = line.strip()
        if version is not None:
            if line == f"{name}{SEPARATOR}{version}":
                return True
        elif line.partition(SEPARATOR)[0] == name:
            return True
    return False


def _describe(name: str, version: Optional[str], installed: bool) -> str:
    shown = version if version is not None else "any"
    return f"name: {name}, version: {shown}, installed: {'true' if installed else 'false'}"


def check_installed(
    name: str,
    installed: bool,
    version: Optional[str],
    manager: PackageManager,
    runner: Runner,
    report: Report,
) -> Outcome:
    expected = _describe(name, version, installed)

    if manager is PackageManager.DEB:
        found = query_debian(name, version, runner)
    elif manager is PackageManager.RPM:
        found = query_rpm(name, version, runner)
    else:
        return report.record(
            UnitError(
                test=TEST_NAME,
                expected=expected,
                actual="package manager not found",
                message="package manager not found",
            )
        )

    log_debug(f"Пакет {name}: found={found} ({manager.value})")
    if found == installed:
        return report.record(UnitSuccess(test=TEST_NAME, expected=expected))
    return report.record(
        UnitError(
            test=TEST_NAME,
            expected=expected,
            actual=f"package found: {'true' if found else 'false'}",
            message="package installed" if found else "package not installed",
        )
    )


def check(
    name: str,
    installed: str,
    version: Optional[str] = None,
    manager: Optional[PackageManager] = None,
    runner: Optional[Runner] = None,
) -> Report:
    """Проверяет состояние пакета *name*.

    Args:
        name: Имя пакета.
        installed: ``"true"`` или ``"false"``.
        version: Точная ожидаемая версия (строковое сравнение).
        manager: Пакетный менеджер; определяется автоматически, если не задан.
        runner: Функция запуска команды, по умолчанию :func:`run_command`.

    Raises:
        CheckError: при некорректном ``installed`` или если менеджер пакетов
            не удаётся запустить.
    """
    installed_bool = parse_bool(installed, "installed")
    if manager is None:
        manager = detect_package_manager()
    if runner is None:
        runner = partial(run_command, timeout=default_timeout())

    report = Report()
    check_installed(name, installed_bool, version, manager, runner, report)
    return report
