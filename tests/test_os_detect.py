"""Tests for OS detection module."""
import pytest
from pathlib import Path

from modules.os_detect import (
    Distribution,
    PackageManager,
    detect_distribution,
    detect_package_manager,
    read_os_release,
)


def _probe(*present):
    return lambda path: path in present


@pytest.mark.parametrize(
    "markers, distribution, manager",
    [
        (("/etc/centos-release", "/etc/redhat-release"), Distribution.CENTOS, PackageManager.RPM),
        (("/etc/redhat-release",), Distribution.RHEL, PackageManager.RPM),
        (("/etc/debian_version",), Distribution.DEBIAN, PackageManager.DEB),
    ],
)
def test_detect_by_marker(markers, distribution, manager):
    assert detect_distribution(_probe(*markers), lambda: {}) is distribution
    assert detect_package_manager(_probe(*markers), lambda: {}) is manager


def test_detect_unknown():
    assert detect_distribution(_probe(), lambda: {}) is Distribution.UNKNOWN
    assert detect_package_manager(_probe(), lambda: {}) is PackageManager.UNKNOWN


@pytest.mark.parametrize(
    "info, manager",
    [
        ({"ID": "ubuntu", "ID_LIKE": "debian"}, PackageManager.DEB),
        ({"ID": "rocky", "ID_LIKE": "rhel centos fedora"}, PackageManager.RPM),
        ({"ID": "fedora"}, PackageManager.RPM),
        ({"ID": "alpine"}, PackageManager.UNKNOWN),
    ],
)
def test_detect_falls_back_to_os_release(info, manager):
    assert detect_package_manager(_probe(), lambda: info) is manager


def test_read_os_release(tmp_path: Path):
    """Test parsing of an os-release file."""
    os_release = tmp_path / "os-release"
    os_release.write_text(
        '# comment\nID=ubuntu\nVERSION_ID="22.04"\nNAME="Ubuntu"\n\ngarbage\n',
        encoding="utf-8",
    )

    result = read_os_release(str(os_release))
    assert result == {"ID": "ubuntu", "VERSION_ID": "22.04", "NAME": "Ubuntu"}


def test_read_os_release_missing(tmp_path: Path):
    assert read_os_release(str(tmp_path / "absent")) == {}
