"""Host platform detection."""

from kops_gce.core.deployments.gce_kops.errors import UnsupportedPlatformError
from kops_gce.core.deployments.gce_kops.models import Platform

ARTIFACT_OS = {
    Platform.LINUX: "linux",
    Platform.CLOUDSHELL: "linux",
    Platform.MAC: "darwin",
}


def detect_platform(system: str, cloud_shell: bool = False) -> Platform:
    """Map an operating system identifier to a supported platform.

    Args:
        system: Host OS identifier, for example ``sys.platform``.
        cloud_shell: True when running inside Google Cloud Shell.

    Returns:
        The detected platform.
    """
    normalised = system.lower()
    if normalised.startswith("darwin"):
        return Platform.MAC
    if normalised.startswith("linux"):
        return Platform.CLOUDSHELL if cloud_shell else Platform.LINUX
    raise UnsupportedPlatformError(f"Unsupported operating system: {system}")


def artifact_name(platform: Platform) -> str:
    """Return the release artifact name for a platform."""
    return f"kops-{ARTIFACT_OS[platform]}-amd64"
