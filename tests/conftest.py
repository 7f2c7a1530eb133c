import textwrap
from pathlib import Path

import pytest

from modules.records import SystemDatabases

PASSWD = textwrap.dedent(
    """\
    root:x:0:0:root:/root:/bin/bash
    daemon:x:1:1:daemon:/usr/sbin:/usr/sbin/nologin
    mathieu:x:1000:1000:Mathieu,,,:/home/mathieu:/bin/bash
    orphan:x:1001:4242::/home/orphan:/bin/sh
    """
)

GROUP = textwrap.dedent(
    """\
    root:x:0:
    daemon:x:1:
    cdrom:x:24:mathieu
    floppy:x:25:daemon,mathieu
    mathieu:x:1000:
    group1:x:2001:
    """
)


def write_databases(base: Path, passwd: str = PASSWD, group: str = GROUP) -> SystemDatabases:
    passwd_path = base / "passwd"
    group_path = base / "group"
    passwd_path.write_text(passwd, encoding="utf-8")
    group_path.write_text(group, encoding="utf-8")
    return SystemDatabases(passwd=passwd_path, group=group_path)


@pytest.fixture
def databases(tmp_path: Path) -> SystemDatabases:
    return write_databases(tmp_path)
