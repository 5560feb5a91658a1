"""Runtime settings for kops-gce."""

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from kops_gce.config.paths import default_work_dir, env_path
from kops_gce.core.deployments.gce_kops.errors import ConfigurationError
from kops_gce.core.deployments.gce_kops.gcloud import configured_value
from kops_gce.core.deployments.gce_kops.models import (
    ClusterIdentity,
    InstallConfig,
    Platform,
    WorkDir,
)
from kops_gce.core.deployments.gce_kops.platform import detect_platform
from kops_gce.core.deployments.gce_kops.runner import CommandRunner

ENV_FILE_PATH = str(env_path())
DEFAULT_CLUSTER_NAME = "kops"


class KopsSettings(BaseSettings):
    """Environment-influenced defaults for install and destroy."""

    model_config = SettingsConfigDict(
        env_prefix="KOPS_GCE_",
        env_file=ENV_FILE_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    work_dir: Path = Field(default_factory=default_work_dir, description="Working directory root")
    node_count: int = Field(default=4, ge=1, description="Number of worker nodes")
    node_size: str = Field(default="n1-standard-2", description="GCE machine type for nodes")
    platform: Platform | None = Field(default=None, description="Platform override")
    skip_credentials: bool = Field(default=False, description="Skip the credential login")

    command_timeout_seconds: float = Field(default=3600, gt=0)
    validate_timeout_seconds: float = Field(default=600, gt=0)
    download_timeout_seconds: float = Field(default=120, gt=0)

    release_api_url: str = "https://api.github.com/repos/kubernetes/kops/releases/latest"
    download_base_url: str = "https://github.com/kubernetes/kops/releases/download"


@dataclass(frozen=True)
class CliOptions:
    """Values supplied on the command line."""

    cluster_name: str = DEFAULT_CLUSTER_NAME
    zone: str | None = None
    project_id: str | None = None
    skip_credentials: bool = False


def get_settings() -> KopsSettings:
    """Load settings from the environment and the user env file."""
    return KopsSettings()


def host_platform(settings: KopsSettings) -> Platform:
    """Return the platform override or detect it from the host."""
    if settings.platform is not None:
        return settings.platform
    return detect_platform(sys.platform, os.environ.get("CLOUD_SHELL", "").lower() == "true")


def build_install_config(
    settings: KopsSettings,
    options: CliOptions,
    runner: CommandRunner,
) -> InstallConfig:
    """Build the immutable run configuration.

    Project and zone fall back to the active gcloud configuration when they
    are not given on the command line.

    Args:
        settings: Environment-influenced defaults.
        options: Command line overrides.
        runner: Command runner used to query gcloud.

    Returns:
        The configuration passed to every provisioning step.
    """
    project_id = options.project_id or configured_value(runner, "project")
    if not project_id:
        raise ConfigurationError(
            "No project set. Pass --project-id or run: gcloud config set project <id>"
        )
    zone = options.zone or configured_value(runner, "compute/zone")
    if not zone:
        raise ConfigurationError(
            "No zone set. Pass --zone or run: gcloud config set compute/zone <zone>"
        )

    return InstallConfig(
        identity=ClusterIdentity(name_base=options.cluster_name),
        project_id=project_id,
        zone=zone,
        work_dir=WorkDir(root=settings.work_dir.expanduser()),
        platform=host_platform(settings),
        skip_credentials=options.skip_credentials or settings.skip_credentials,
        node_count=settings.node_count,
        node_size=settings.node_size,
        command_timeout_seconds=settings.command_timeout_seconds,
        validate_timeout_seconds=settings.validate_timeout_seconds,
        download_timeout_seconds=settings.download_timeout_seconds,
        release_api_url=settings.release_api_url,
        download_base_url=settings.download_base_url,
    )
