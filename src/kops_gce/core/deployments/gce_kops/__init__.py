"""kops on GCE deployment helpers."""

from kops_gce.core.deployments.gce_kops.binary import create_http_client, ensure_binary
from kops_gce.core.deployments.gce_kops.cluster import (
    archive_kubeconfig,
    cluster_exists,
    create_cluster,
    delete_cluster,
    validate_cluster,
)
from kops_gce.core.deployments.gce_kops.context import grant_cluster_admin, rename_context
from kops_gce.core.deployments.gce_kops.errors import (
    ConfigurationError,
    ContextNotFoundError,
    ProvisioningError,
    UnsupportedPlatformError,
)
from kops_gce.core.deployments.gce_kops.gcloud import configured_value, ensure_credentials
from kops_gce.core.deployments.gce_kops.lifecycle import (
    cluster_status,
    destroy_cluster,
    install_cluster,
)
from kops_gce.core.deployments.gce_kops.models import (
    ClusterIdentity,
    DeletionOutcome,
    DeletionResult,
    InstallConfig,
    Platform,
    StoreLocation,
    ToolBinary,
    WorkDir,
)
from kops_gce.core.deployments.gce_kops.platform import detect_platform
from kops_gce.core.deployments.gce_kops.runner import CommandRunner, scoped_environment
from kops_gce.core.deployments.gce_kops.storage import delete_store, ensure_store

__all__ = [
    "ClusterIdentity",
    "CommandRunner",
    "ConfigurationError",
    "ContextNotFoundError",
    "DeletionOutcome",
    "DeletionResult",
    "InstallConfig",
    "Platform",
    "ProvisioningError",
    "StoreLocation",
    "ToolBinary",
    "UnsupportedPlatformError",
    "WorkDir",
    "archive_kubeconfig",
    "cluster_exists",
    "cluster_status",
    "configured_value",
    "create_cluster",
    "create_http_client",
    "delete_cluster",
    "delete_store",
    "destroy_cluster",
    "detect_platform",
    "ensure_binary",
    "ensure_credentials",
    "ensure_store",
    "grant_cluster_admin",
    "install_cluster",
    "rename_context",
    "scoped_environment",
    "validate_cluster",
]
