# modules/records.py
"""Readers for the colon-delimited account and group databases."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

from sysassert.exceptions import CheckError, ErrorKind
from modules.parsing import parse_int
from utils.logger import log_debug

DEFAULT_PASSWD_FILE = "/etc/passwd"
DEFAULT_GROUP_FILE = "/etc/group"

# Позиции полей в /etc/group
GROUP_NAME = 0
GROUP_GID = 2
GROUP_MEMBERS = 3


@dataclass(frozen=True)
class SystemDatabases:
    """Пути к базам учётных записей и групп."""

    passwd: Path = Path(DEFAULT_PASSWD_FILE)
    group: Path = Path(DEFAULT_GROUP_FILE)

    @classmethod
    def from_env(cls) -> "SystemDatabases":
        return cls(
            passwd=Path(os.environ.get("SYSASSERT_PASSWD_FILE", DEFAULT_PASSWD_FILE)),
            group=Path(os.environ.get("SYSASSERT_GROUP_FILE", DEFAULT_GROUP_FILE)),
        )


def read_records(path: Path) -> Iterator[List[str]]:
    """Yield the fields of every non-empty line of *path*.

    Raises:
        CheckError: Если файл не удаётся открыть или прочитать.
    """
    log_debug(f"Чтение {path}")
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            for raw_line in f:
                line = raw_line.strip()
                if not line:
                    continue
                yield line.split(":")
    except OSError as exc:
        raise CheckError(f"cannot read {path}", kind=ErrorKind.IO, original=exc) from exc


def _find_by_name(path: Path, name: str) -> Optional[List[str]]:
    for fields in read_records(path):
        if fields[0] == name:
            return fields
    return None


def get_user_line(username: str, databases: SystemDatabases) -> Optional[List[str]]:
    """Returns the raw fields of the first account line for *username*."""
    return _find_by_name(databases.passwd, username)


def get_group_line_from_name(name: str, databases: SystemDatabases) -> Optional[List[str]]:
    return _find_by_name(databases.group, name)


def get_group_line_from_gid(gid: int, databases: SystemDatabases) -> Optional[List[str]]:
    """Returns the first group line with *gid*.

    Every scanned line must carry a numeric gid: a malformed group database
    is a hard failure, not a miss.
    """
    for fields in read_records(databases.group):
        if len(fields) <= GROUP_GID:
            raise CheckError(
                f"malformed group record '{fields[GROUP_NAME]}' in {databases.group}",
                kind=ErrorKind.PARSE_RECORD,
            )
        if parse_int(fields[GROUP_GID], "group gid") == gid:
            return fields
    return None


def split_members(fields: List[str]) -> List[str]:
    if len(fields) <= GROUP_MEMBERS or fields[GROUP_MEMBERS] == "":
        return []
    return fields[GROUP_MEMBERS].split(",")


def get_user_secondary_groups(username: str, databases: SystemDatabases) -> List[str]:
    """Names of the groups listing *username* as a member, in file order."""
    return [
        fields[GROUP_NAME]
        for fields in read_records(databases.group)
        if username in split_members(fields)
    ]
