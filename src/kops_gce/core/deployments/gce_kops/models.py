"""Data models for kops clusters on GCE."""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

CLUSTER_DOMAIN_SUFFIX = ".k8s.local"
STORE_SCHEME = "gs://"
BINARY_NAME = "kops"
KUBECONFIG_FILENAME = "kubeconfig"


class Platform(StrEnum):
    """Host platforms with a published kops artifact."""

    LINUX = "linux"
    MAC = "mac"
    CLOUDSHELL = "cloudshell"


class DeletionOutcome(StrEnum):
    """Outcome of a single tolerant deletion."""

    DELETED = "deleted"
    ALREADY_ABSENT = "already-absent"
    FAILED = "failed"


@dataclass(frozen=True)
class ClusterIdentity:
    """Logical name under which cluster resources are addressed.

    The base name must be a non-empty DNS label; it is not validated here.
    """

    name_base: str

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.name_base}{CLUSTER_DOMAIN_SUFFIX}"


@dataclass(frozen=True)
class StoreLocation:
    """Remote bucket holding the kops state for one cluster identity."""

    project_id: str
    name_base: str

    @property
    def bucket(self) -> str:
        return f"{self.project_id}-{self.name_base}-state"

    @property
    def uri(self) -> str:
        return f"{STORE_SCHEME}{self.bucket}"


@dataclass(frozen=True)
class WorkDir:
    """Local directory owned by a single run."""

    root: Path

    @property
    def bin_dir(self) -> Path:
        return self.root / "bin"

    @property
    def binary_path(self) -> Path:
        return self.bin_dir / BINARY_NAME

    @property
    def kubeconfig_path(self) -> Path:
        return self.root / KUBECONFIG_FILENAME


@dataclass(frozen=True)
class ToolBinary:
    """A kops binary resolved for a platform."""

    version: str
    platform: Platform
    path: Path


@dataclass(frozen=True)
class InstallConfig:
    """Immutable configuration for one install or destroy run."""

    identity: ClusterIdentity
    project_id: str
    zone: str
    work_dir: WorkDir
    platform: Platform
    skip_credentials: bool = False
    node_count: int = 4
    node_size: str = "n1-standard-2"
    command_timeout_seconds: float = 3600
    validate_timeout_seconds: float = 600
    download_timeout_seconds: float = 120
    release_api_url: str = "https://api.github.com/repos/kubernetes/kops/releases/latest"
    download_base_url: str = "https://github.com/kubernetes/kops/releases/download"

    @property
    def store(self) -> StoreLocation:
        return StoreLocation(project_id=self.project_id, name_base=self.identity.name_base)


@dataclass(frozen=True)
class DeletionResult:
    """Result of deleting one resource during destroy."""

    resource: str
    outcome: DeletionOutcome
    detail: str = ""
