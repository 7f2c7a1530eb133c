# modules/file.py
"""Existence and type checks for filesystem paths."""

from __future__ import annotations

import os
import stat
from typing import Optional

from modules.outcome import Outcome, Report, UnitError, UnitSuccess, check_exists
from modules.parsing import parse_bool
from sysassert.exceptions import CheckError, ErrorKind

FILE_TYPES = ("file", "directory")


def get_metadata(path: str) -> Optional[os.stat_result]:
    """Returns ``os.stat`` of *path* (symlinks followed) or None if absent."""
    try:
        return os.stat(path)
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise CheckError(f"cannot stat {path}", kind=ErrorKind.IO, original=exc) from exc


def file_type(metadata: os.stat_result) -> str:
    if stat.S_ISREG(metadata.st_mode):
        return "file"
    if stat.S_ISDIR(metadata.st_mode):
        return "directory"
    return "other"


def check_type(expected: str, metadata: os.stat_result, report: Report) -> Outcome:
    test_name = "file - type"
    actual = file_type(metadata)
    if actual == expected:
        return report.record(UnitSuccess(test=test_name, expected=expected))
    return report.record(
        UnitError(
            test=test_name,
            expected=expected,
            actual=actual,
            message=f"path is a {actual}, not a {expected}",
        )
    )


def check(path: str, exists: str, type_: Optional[str] = None) -> Report:
    """Проверяет наличие пути и, при необходимости, его тип."""
    exists_bool = parse_bool(exists, "exists")
    if type_ is not None and type_ not in FILE_TYPES:
        raise CheckError(
            f"invalid file type '{type_}', expected one of {', '.join(FILE_TYPES)}",
            kind=ErrorKind.INVALID_ARGUMENT,
        )

    report = Report()
    metadata = get_metadata(path)
    check_exists(metadata is not None, exists_bool, report, "file")
    if metadata is None:
        return report

    if type_ is not None:
        check_type(type_, metadata, report)
    return report
