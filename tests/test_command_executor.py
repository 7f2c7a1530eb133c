"""Tests for command executor module."""
import sys

import pytest

from modules.command_executor import default_timeout, run_command
from sysassert.exceptions import CheckError, ErrorKind


def test_run_command_simple():
    """Test running a simple command."""
    result = run_command([sys.executable, "-c", "print('hello')"])
    assert result.returncode == 0
    assert "hello" in result.stdout


def test_run_command_non_zero_exit_is_not_an_error():
    result = run_command([sys.executable, "-c", "import sys; sys.exit(42)"])
    assert result.returncode == 42


def test_run_command_multiline_output():
    """Test command with multiline output."""
    result = run_command([sys.executable, "-c", "print('line1\\nline2\\nline3')"])
    lines = result.stdout.strip().split("\n")
    assert lines == ["line1", "line2", "line3"]


def test_run_command_missing_binary():
    with pytest.raises(CheckError) as exc:
        run_command(["sysassert-definitely-not-a-binary"])
    assert exc.value.kind is ErrorKind.COMMAND
    assert isinstance(exc.value.original, OSError)


def test_run_command_timeout():
    """Test command timeout."""
    with pytest.raises(CheckError) as exc:
        run_command([sys.executable, "-c", "import time; time.sleep(10)"], timeout=0.5)
    assert exc.value.kind is ErrorKind.COMMAND


@pytest.mark.parametrize("raw, expected", [("", None), ("0", None), ("2.5", 2.5)])
def test_default_timeout(monkeypatch, raw, expected):
    monkeypatch.setenv("SYSASSERT_COMMAND_TIMEOUT", raw)
    assert default_timeout() == expected


def test_default_timeout_invalid(monkeypatch):
    monkeypatch.setenv("SYSASSERT_COMMAND_TIMEOUT", "soon")
    with pytest.raises(CheckError):
        default_timeout()
