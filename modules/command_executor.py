# modules/command_executor.py
"""Utility functions for running external commands with error handling."""

from __future__ import annotations

import os
import subprocess
from typing import Callable, Optional, Sequence

from sysassert.exceptions import CheckError, ErrorKind
from utils.logger import log_debug

Runner = Callable[[Sequence[str]], subprocess.CompletedProcess]


def default_timeout() -> Optional[float]:
    """Таймаут из SYSASSERT_COMMAND_TIMEOUT; 0 или пусто — без ограничения."""
    raw = os.environ.get("SYSASSERT_COMMAND_TIMEOUT", "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise CheckError(
            "invalid SYSASSERT_COMMAND_TIMEOUT",
            kind=ErrorKind.PARSE_INT,
            original=exc,
        ) from exc
    return value if value > 0 else None


def run_command(
    argv: Sequence[str],
    timeout: Optional[float] = None,
) -> subprocess.CompletedProcess:
    """Run *argv* without a shell and return the completed process.

    The exit code is not interpreted here: package queries exit non-zero for
    unknown packages and callers only look at ``stdout``.

    Args:
        argv: Команда и её аргументы.
        timeout: Максимальное время выполнения в секундах (``None`` — без
            ограничения).

    Returns:
        Объект :class:`subprocess.CompletedProcess`.

    Raises:
        CheckError: Если процесс не удалось запустить или истёк таймаут.
    """

    log_debug(f"Запуск команды: {' '.join(argv)}")
    try:
        result = subprocess.run(
            list(argv),
            text=True,
            capture_output=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise CheckError(
            f"Command '{argv[0]}' timed out after {timeout} seconds",
            kind=ErrorKind.COMMAND,
            original=e,
        ) from e
    except OSError as e:
        raise CheckError(
            f"Command '{argv[0]}' could not be started",
            kind=ErrorKind.COMMAND,
            original=e,
        ) from e

    log_debug(f"Команда {argv[0]} завершилась с кодом {result.returncode}")
    return result
