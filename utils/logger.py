# utils/logger.py
"""Модуль логирования с поддержкой цветного вывода и уровней детализации."""

import sys
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO
from colorama import init, Fore, Style

init(autoreset=True)

# Глобальные настройки логирования
_log_file: Optional[Path] = None
_log_level: int = logging.INFO
_verbose: bool = False
_quiet: bool = False


def configure_logging(
    log_file: Optional[str] = None,
    verbose: bool = False,
    level: int = logging.INFO,
    quiet: bool = False,
):
    """
    Настройка параметров логирования.

    Args:
        log_file: Путь к файлу для записи логов
        verbose: Включить отладочные сообщения
        level: Уровень логирования (logging.DEBUG, INFO, WARNING, ERROR)
        quiet: Не печатать информационные сообщения в консоль (например,
            когда stdout занят JSON-отчётом). Ошибки печатаются всегда.
    """
    global _log_file, _log_level, _verbose, _quiet
    _log_file = Path(log_file) if log_file else None
    _log_level = level
    _verbose = verbose
    _quiet = quiet

    if _log_file:
        _log_file.parent.mkdir(parents=True, exist_ok=True)


def _write_to_file(level: str, msg: str):
    """Запись сообщения в файл лога."""
    if _log_file:
        try:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            with open(_log_file, "a", encoding="utf-8") as f:
                f.write(f"[{timestamp}] [{level}] {msg}\n")
        except OSError:
            pass


def _emit(prefix: str, level: str, msg: str, stream: Optional[TextIO] = None):
    if stream is None and _quiet:
        stream = sys.stderr
    print(prefix + f"[{level}] " + Style.RESET_ALL + msg, file=stream or sys.stdout)
    _write_to_file(level, msg)


def log_debug(msg: str):
    """Отладочное сообщение (только при verbose=True)."""
    if _verbose or _log_level <= logging.DEBUG:
        _emit(Fore.BLUE, "DEBUG", msg, sys.stderr)


def log_info(msg: str):
    """Информационное сообщение."""
    _emit(Fore.CYAN, "INFO", msg)


def log_pass(msg: str):
    """Сообщение об успешной проверке."""
    _emit(Fore.GREEN, "PASS", msg)


def log_fail(msg: str):
    """Сообщение о провале проверки."""
    _emit(Fore.RED, "FAIL", msg)


def log_warn(msg: str):
    """Предупреждение."""
    _emit(Fore.YELLOW, "WARN", msg)


def log_error(msg: str):
    _emit(Fore.MAGENTA, "ERROR", msg, sys.stderr)


def log_critical(msg: str):
    """Критическая ошибка: проверка не выполнена."""
    _emit(Fore.RED + Style.BRIGHT, "CRITICAL", msg, sys.stderr)


def log_section(title: str):
    """Заголовок секции для структурирования вывода."""
    stream = sys.stderr if _quiet else sys.stdout
    separator = "=" * 60
    print(Fore.CYAN + Style.BRIGHT + f"\n{separator}", file=stream)
    print(f"  {title}", file=stream)
    print(f"{separator}" + Style.RESET_ALL, file=stream)
    _write_to_file("SECTION", title)
