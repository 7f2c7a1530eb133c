"""Custom exceptions used across sysassert."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional


class ErrorKind(Enum):
    """Категории жёстких ошибок (не путать с результатами проверок)."""

    IO = "io"
    PARSE_INT = "parse_int"
    PARSE_BOOL = "parse_bool"
    PARSE_RECORD = "parse_record"
    INVALID_ARGUMENT = "invalid_argument"
    COMMAND = "command"


class CheckError(RuntimeError):
    """Raised when a check cannot produce a report at all.

    Mismatches between the system and the expectation never raise: they are
    recorded as :class:`modules.outcome.UnitError` entries. This exception is
    for an unreadable database, an unparseable argument or a package manager
    that cannot be started.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind,
        original: Optional[BaseException] = None,
    ) -> None:
        self.kind = kind
        self.original = original
        super().__init__(message)

    def __str__(self) -> str:
        text = super().__str__()
        if self.original is not None:
            return f"[{self.kind.value}] {text}: {self.original}"
        return f"[{self.kind.value}] {text}"


class ManifestError(RuntimeError):
    """Файл манифеста не прошёл валидацию."""

    def __init__(self, path: str, errors: List[str]) -> None:
        self.path = path
        self.errors = list(errors)
        details = "; ".join(self.errors) if self.errors else "неизвестная ошибка"
        super().__init__(f"Манифест '{path}' невалиден: {details}")


class MissingDependencyError(RuntimeError):
    """Raised when an optional runtime dependency is not installed."""

    def __init__(
        self,
        *,
        package: str,
        import_name: Optional[str] = None,
        instructions: Optional[str] = None,
        original: Optional[BaseException] = None,
    ) -> None:
        self.package = package
        self.import_name = import_name or package
        self.instructions = instructions
        self.original = original

        dependency_label = self.package
        if self.import_name and self.import_name != self.package:
            dependency_label += f" (модуль '{self.import_name}')"

        message = f"Отсутствует обязательная зависимость {dependency_label}."
        if self.instructions:
            message += f" Установите её и повторите попытку: {self.instructions}."
        else:
            message += " Установите требуемый пакет и повторите попытку."

        super().__init__(message)
