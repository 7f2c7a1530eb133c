# modules/group.py
"""Group entity, group attribute checks and the ``group`` orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from modules.outcome import Outcome, Report, UnitError, UnitSuccess, check_exists
from modules.parsing import parse_bool, parse_int, parse_optional_int
from modules.records import (
    SystemDatabases,
    get_group_line_from_name,
    split_members,
)
from sysassert.exceptions import CheckError, ErrorKind


@dataclass(frozen=True)
class Group:
    name: str
    password: str
    gid: int
    members: Tuple[str, ...] = ()


def parse_group_line(fields: List[str]) -> Group:
    if len(fields) < 3:
        raise CheckError(
            f"malformed group record '{fields[0]}': expected at least 3 fields, got {len(fields)}",
            kind=ErrorKind.PARSE_RECORD,
        )
    return Group(
        name=fields[0],
        password=fields[1],
        gid=parse_int(fields[2], "group gid"),
        members=tuple(split_members(fields)),
    )


def get_group(name: str, databases: Optional[SystemDatabases] = None) -> Optional[Group]:
    databases = databases or SystemDatabases.from_env()
    fields = get_group_line_from_name(name, databases)
    if fields is None:
        return None
    return parse_group_line(fields)


def check_gid(gid: int, group: Group, report: Report) -> Outcome:
    test_name = "group - gid"
    if group.gid == gid:
        return report.record(UnitSuccess(test=test_name, expected=str(gid)))
    return report.record(
        UnitError(
            test=test_name,
            expected=str(gid),
            actual=str(group.gid),
            message="incorrect gid",
        )
    )


def check(
    name: str,
    exists: str,
    gid: Optional[str] = None,
    databases: Optional[SystemDatabases] = None,
) -> Report:
    """Проверяет группу *name* против ожиданий.

    Raises:
        CheckError: при некорректных аргументах или нечитаемой базе групп.
    """
    exists_bool = parse_bool(exists, "exists")
    gid_int = parse_optional_int(gid, "gid")

    report = Report()
    group = get_group(name, databases)
    check_exists(group is not None, exists_bool, report, "group")
    if group is None:
        return report

    if gid_int is not None:
        check_gid(gid_int, group, report)
    return report
