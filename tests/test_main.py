"""End-to-end tests of the command entry point and its exit codes."""
import json
import sys

import pytest

from sysassert.main import EXIT_FAILED, EXIT_OK, EXIT_SYSTEM_ERROR, main
import sysassert.main as main_module
from utils import logger


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger.configure_logging()


def _run(monkeypatch, databases, *argv):
    monkeypatch.setattr(
        sys,
        "argv",
        ["sysassert", "--passwd-file", str(databases.passwd), "--group-file", str(databases.group), *argv],
    )
    with pytest.raises(SystemExit) as exc:
        main()
    return exc.value.code


def test_all_checks_pass(monkeypatch, databases, capsys):
    code = _run(monkeypatch, databases, "user", "root", "--exists", "true", "--uid", "0")

    assert code == EXIT_OK
    out = capsys.readouterr().out
    assert "user - uid" in out
    assert "Успешно: 2, ошибок: 0" in out


def test_error_outcome_exits_one(monkeypatch, databases, capsys):
    code = _run(monkeypatch, databases, "user", "root", "--exists", "true", "--uid", "1")

    assert code == EXIT_FAILED
    assert "incorrect uid" in capsys.readouterr().out


def test_absent_entity(monkeypatch, databases):
    assert _run(monkeypatch, databases, "group", "ghost", "--exists", "false", "--gid", "5") == EXIT_OK


def test_bad_argument_exits_two(monkeypatch, databases, capsys):
    code = _run(monkeypatch, databases, "user", "root", "--exists", "true", "--uid", "hello")

    assert code == EXIT_SYSTEM_ERROR
    assert "parse_int" in capsys.readouterr().err


def test_bad_exists_exits_two(monkeypatch, databases):
    assert _run(monkeypatch, databases, "group", "root", "--exists", "yes") == EXIT_SYSTEM_ERROR


def test_unreadable_database_exits_two(monkeypatch, databases, tmp_path):
    databases.passwd.unlink()
    assert _run(monkeypatch, databases, "user", "root", "--exists", "true") == EXIT_SYSTEM_ERROR


def test_json_output(monkeypatch, databases, capsys):
    code = _run(monkeypatch, databases, "--format", "json", "user", "mathieu", "--exists", "true", "--groups", "cdrom")

    assert code == EXIT_FAILED
    payload = json.loads(capsys.readouterr().out)
    assert payload["success"] == 1
    assert payload["error"] == 1
    assert payload["outcomes"][1]["actual"] == "cdrom,floppy"


def test_output_file(monkeypatch, databases, tmp_path):
    output = tmp_path / "report.json"
    code = _run(monkeypatch, databases, "-o", str(output), "user", "root", "--exists", "true")

    assert code == EXIT_OK
    assert json.loads(output.read_text(encoding="utf-8"))["ok"] is True


def test_package_spawn_failure(monkeypatch, databases):
    from modules import package as package_module
    from modules.os_detect import PackageManager
    from sysassert.exceptions import CheckError, ErrorKind

    def broken(argv, timeout=None):
        raise CheckError("Command 'dpkg-query' could not be started", kind=ErrorKind.COMMAND)

    monkeypatch.setattr(package_module, "detect_package_manager", lambda: PackageManager.DEB)
    monkeypatch.setattr(main_module, "run_command", broken)

    assert _run(monkeypatch, databases, "package", "openssl", "--installed", "true") == EXIT_SYSTEM_ERROR


def test_run_manifest(monkeypatch, databases, tmp_path):
    manifest = tmp_path / "checks.yml"
    manifest.write_text(
        "schema_version: '1.0'\n"
        "checks:\n"
        "  - {type: user, name: root, exists: true, uid: 0}\n"
        "  - {type: group, name: cdrom, exists: true, gid: 24}\n",
        encoding="utf-8",
    )
    assert _run(monkeypatch, databases, "run", str(manifest)) == EXIT_OK


def test_run_invalid_manifest(monkeypatch, databases, tmp_path):
    manifest = tmp_path / "checks.yml"
    manifest.write_text("schema_version: '1.0'\nchecks: []\n", encoding="utf-8")
    assert _run(monkeypatch, databases, "run", str(manifest)) == EXIT_SYSTEM_ERROR


def test_validate(monkeypatch, databases, tmp_path, capsys):
    manifest = tmp_path / "checks.yml"
    manifest.write_text("schema_version: '1.0'\nchecks:\n  - {type: file, path: /, exists: true}\n", encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["sysassert", "validate", str(manifest)])

    main()

    assert "OK" in capsys.readouterr().out


def test_run_manifest_directory_exits_two(monkeypatch, databases, tmp_path):
    folder = tmp_path / "manifests"
    folder.mkdir()
    assert _run(monkeypatch, databases, "run", str(folder)) == EXIT_SYSTEM_ERROR


@pytest.mark.parametrize("command", ["run", "validate"])
def test_non_utf8_manifest_exits_two(monkeypatch, databases, tmp_path, command):
    manifest = tmp_path / "checks.yml"
    manifest.write_bytes(b"schema_version: '1.0'\n# \xff\n")
    assert _run(monkeypatch, databases, command, str(manifest)) == EXIT_SYSTEM_ERROR


def test_validate_directory_exits_two(monkeypatch, databases, tmp_path):
    assert _run(monkeypatch, databases, "validate", str(tmp_path)) == EXIT_SYSTEM_ERROR
