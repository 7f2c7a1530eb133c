# modules/user.py
"""User accounts: parsing, attribute checks and the ``user`` orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from modules.outcome import Outcome, Report, UnitError, UnitSuccess, check_exists
from modules.parsing import parse_bool, parse_int, parse_optional_int
from modules.records import (
    GROUP_NAME,
    SystemDatabases,
    get_group_line_from_gid,
    get_user_line,
    get_user_secondary_groups,
)
from sysassert.exceptions import CheckError, ErrorKind
from utils.logger import log_debug

PASSWD_FIELDS = 7


@dataclass(frozen=True)
class User:
    """Учётная запись из /etc/passwd, дополненная сведениями о группах.

    ``group`` is the primary group name (empty if no group carries ``gid``),
    ``groups`` the sorted names of the secondary groups.
    """

    name: str
    password: str
    uid: int
    gid: int
    comment: str
    home: str
    init: str
    group: str = ""
    groups: Tuple[str, ...] = ()


def parse_user_line(fields: List[str], databases: SystemDatabases) -> User:
    """Builds a :class:`User` from one account line.

    Args:
        fields: Поля строки /etc/passwd в исходном порядке.
        databases: Базы, из которых берутся сведения о группах.

    Raises:
        CheckError: Если uid/gid не числовые, строка короче семи полей или
            база групп не читается.
    """
    if len(fields) < PASSWD_FIELDS:
        raise CheckError(
            f"malformed account record '{fields[0]}': expected {PASSWD_FIELDS} fields, got {len(fields)}",
            kind=ErrorKind.PARSE_RECORD,
        )
    username, password = fields[0], fields[1]
    uid = parse_int(fields[2], "uid")
    gid = parse_int(fields[3], "gid")

    primary = get_group_line_from_gid(gid, databases)
    group = primary[GROUP_NAME] if primary is not None else ""
    secondary = tuple(sorted(get_user_secondary_groups(username, databases)))

    return User(
        name=username,
        password=password,
        uid=uid,
        gid=gid,
        comment=fields[4],
        home=fields[5],
        init=fields[6],
        group=group,
        groups=secondary,
    )


def get_user(username: str, databases: Optional[SystemDatabases] = None) -> Optional[User]:
    databases = databases or SystemDatabases.from_env()
    fields = get_user_line(username, databases)
    if fields is None:
        log_debug(f"Пользователь {username} не найден в {databases.passwd}")
        return None
    return parse_user_line(fields, databases)


def check_uid(uid: int, user: User, report: Report) -> Outcome:
    test_name = "user - uid"
    if user.uid == uid:
        return report.record(UnitSuccess(test=test_name, expected=str(uid)))
    return report.record(
        UnitError(test=test_name, expected=str(uid), actual=str(user.uid), message="incorrect uid")
    )


def check_gid(gid: int, user: User, report: Report) -> Outcome:
    test_name = "user - gid"
    if user.gid == gid:
        return report.record(UnitSuccess(test=test_name, expected=str(gid)))
    return report.record(
        UnitError(test=test_name, expected=str(gid), actual=str(user.gid), message="incorrect gid")
    )


def check_primary_group(group: str, user: User, report: Report) -> Outcome:
    test_name = "user - group"
    if user.group == group:
        return report.record(UnitSuccess(test=test_name, expected=group))
    return report.record(
        UnitError(
            test=test_name,
            expected=group,
            actual=user.group,
            message="incorrect primary group",
        )
    )


def check_secondary_groups(groups: str, user: User, report: Report) -> Outcome:
    """Compares a comma-separated group list with the user's secondary groups.

    The expected list is sorted, so order does not matter. Duplicates in it
    are kept as given and therefore never match.
    """
    test_name = "user - groups"
    expected = tuple(sorted(groups.split(",")))
    if expected == user.groups:
        return report.record(UnitSuccess(test=test_name, expected=groups))
    return report.record(
        UnitError(
            test=test_name,
            expected=groups,
            actual=",".join(user.groups),
            message="incorrect secondary groups",
        )
    )


def check(
    username: str,
    exists: str,
    uid: Optional[str] = None,
    gid: Optional[str] = None,
    group: Optional[str] = None,
    groups: Optional[str] = None,
    databases: Optional[SystemDatabases] = None,
) -> Report:
    """Проверяет учётную запись *username* против переданных ожиданий.

    Ожидания со значением ``None`` пропускаются. Если пользователь
    отсутствует, атрибуты не проверяются.

    Raises:
        CheckError: при некорректных ``exists``/``uid``/``gid`` или
            нечитаемой базе учётных записей.
    """
    exists_bool = parse_bool(exists, "exists")
    uid_int = parse_optional_int(uid, "uid")
    gid_int = parse_optional_int(gid, "gid")

    report = Report()
    user = get_user(username, databases)
    check_exists(user is not None, exists_bool, report, "user")
    if user is None:
        return report

    if uid_int is not None:
        check_uid(uid_int, user, report)
    if gid_int is not None:
        check_gid(gid_int, user, report)
    if group is not None:
        check_primary_group(group, user, report)
    if groups is not None:
        check_secondary_groups(groups, user, report)
    return report
