"""Tests for host platform detection."""

import pytest

from kops_gce.core.deployments.gce_kops import Platform, UnsupportedPlatformError, detect_platform
from kops_gce.core.deployments.gce_kops.platform import artifact_name


@pytest.mark.parametrize(
    ("system", "cloud_shell", "expected"),
    [
        ("darwin", False, Platform.MAC),
        ("Darwin", True, Platform.MAC),
        ("linux", False, Platform.LINUX),
        ("linux2", False, Platform.LINUX),
        ("linux", True, Platform.CLOUDSHELL),
    ],
)
def test_detect_platform(system: str, cloud_shell: bool, expected: Platform) -> None:
    assert detect_platform(system, cloud_shell) is expected


@pytest.mark.parametrize("system", ["win32", "cygwin", "freebsd13", ""])
def test_unknown_system_is_fatal(system: str) -> None:
    with pytest.raises(UnsupportedPlatformError):
        detect_platform(system)


def test_cloud_shell_uses_linux_artifact() -> None:
    assert artifact_name(Platform.CLOUDSHELL) == artifact_name(Platform.LINUX) == "kops-linux-amd64"
    assert artifact_name(Platform.MAC) == "kops-darwin-amd64"
