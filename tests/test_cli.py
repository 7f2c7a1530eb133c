import sys

import pytest

from modules.cli import parse_args


def test_parse_args_user(monkeypatch):
    argv = [
        "sysassert",
        "user",
        "root",
        "--exists",
        "true",
        "--uid",
        "0",
        "--groups",
        "cdrom,floppy",
    ]
    monkeypatch.setattr(sys, "argv", argv)

    args = parse_args()

    assert args.command == "user"
    assert args.name == "root"
    assert args.exists == "true"
    assert args.uid == "0"
    assert args.gid is None
    assert args.group is None
    assert args.groups == "cdrom,floppy"
    assert args.format == "text"


def test_parse_args_package_and_globals():
    args = parse_args(["--format", "json", "-o", "r.xml", "package", "openssl", "--installed", "false", "--version", "1.0.2"])

    assert args.command == "package"
    assert args.installed == "false"
    assert args.version == "1.0.2"
    assert args.format == "json"
    assert args.output == "r.xml"


def test_parse_args_env_defaults(monkeypatch):
    monkeypatch.setenv("SYSASSERT_PASSWD_FILE", "/tmp/passwd")
    monkeypatch.setenv("SYSASSERT_GROUP_FILE", "/tmp/group")
    monkeypatch.setenv("SYSASSERT_COMMAND_TIMEOUT", "15")
    monkeypatch.setenv("SYSASSERT_LOG_FILE", "/tmp/sysassert.log")

    args = parse_args(["group", "wheel", "--exists", "true"])

    assert args.passwd_file == "/tmp/passwd"
    assert args.group_file == "/tmp/group"
    assert args.timeout == 15.0
    assert args.log_file == "/tmp/sysassert.log"


def test_parse_args_file_type():
    args = parse_args(["file", "/etc", "--exists", "true", "--type", "directory"])
    assert args.file_type == "directory"


@pytest.mark.parametrize(
    "argv",
    [
        ["user", "root"],
        ["package", "openssl"],
        ["file", "/etc", "--exists", "true", "--type", "socket"],
        [],
        ["--timeout", "-1", "user", "root", "--exists", "true"],
    ],
)
def test_parse_args_usage_errors(argv):
    with pytest.raises(SystemExit) as exc:
        parse_args(argv)

    assert exc.value.code == 2
