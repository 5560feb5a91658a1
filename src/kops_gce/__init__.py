"""kops-gce - provision and tear down kops Kubernetes clusters on Google Compute Engine."""

from kops_gce.core.deployments.gce_kops import (
    ClusterIdentity,
    InstallConfig,
    ProvisioningError,
    destroy_cluster,
    install_cluster,
)

__version__ = "0.1.0"

__all__ = [
    "ClusterIdentity",
    "InstallConfig",
    "ProvisioningError",
    "destroy_cluster",
    "install_cluster",
]
