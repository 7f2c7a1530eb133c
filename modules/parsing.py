"""Strict parsers for caller-supplied expectation strings."""

from __future__ import annotations

from typing import Optional

from sysassert.exceptions import CheckError, ErrorKind

# Диапазон 32-битного знакового целого.
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1


def parse_int(value: str, field: str) -> int:
    """Строгий разбор целого: необязательный знак и цифры.

    Пробелы, подчёркивания, дробные значения (``"1.3"``) и числа вне
    диапазона 32-битного целого отвергаются.
    """
    text = value or ""
    digits = text[1:] if text[:1] in ("+", "-") else text
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise CheckError(
            f"invalid integer for {field}",
            kind=ErrorKind.PARSE_INT,
            original=ValueError(f"invalid literal for int(): {value!r}"),
        )
    number = int(text)
    if not INT_MIN <= number <= INT_MAX:
        raise CheckError(
            f"invalid integer for {field}",
            kind=ErrorKind.PARSE_INT,
            original=OverflowError(f"{value!r} is out of range for a 32-bit integer"),
        )
    return number


def parse_optional_int(value: Optional[str], field: str) -> Optional[int]:
    if value is None:
        return None
    return parse_int(value, field)


def parse_bool(value: str, field: str = "exists") -> bool:
    """Accepts exactly ``"true"`` or ``"false"``."""
    if value == "true":
        return True
    if value == "false":
        return False
    raise CheckError(
        f"invalid boolean for {field}",
        kind=ErrorKind.PARSE_BOOL,
        original=ValueError(f"expected 'true' or 'false', got {value!r}"),
    )
