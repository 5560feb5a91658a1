"""kops cluster operations."""

import logging
from pathlib import Path

from kops_gce.core.deployments.gce_kops.models import (
    DeletionOutcome,
    DeletionResult,
    InstallConfig,
)
from kops_gce.core.deployments.gce_kops.runner import CommandError, CommandRunner

logger = logging.getLogger(__name__)

NOT_FOUND_MARKERS = ("not found", "notfound", "does not exist")
API_LOADBALANCER_TYPE = "public"


def _kops(config: InstallConfig, *args: str) -> list[str]:
    return [str(config.work_dir.binary_path), *args]


def cluster_exists(runner: CommandRunner, config: InstallConfig) -> bool:
    """Return True when kops knows about the cluster in the state store."""
    result = runner.run(
        _kops(
            config,
            "get",
            "cluster",
            "--name",
            config.identity.fully_qualified_name,
            "--state",
            config.store.uri,
        ),
        capture=True,
        check=False,
    )
    if result.returncode == 0:
        return True
    if _is_not_found(result.output):
        return False
    raise CommandError(result)


def create_cluster(runner: CommandRunner, config: InstallConfig) -> None:
    """Create the cluster and block until kops returns."""
    runner.run(
        _kops(
            config,
            "create",
            "cluster",
            "--name",
            config.identity.fully_qualified_name,
            "--zones",
            config.zone,
            "--state",
            config.store.uri,
            "--project",
            config.project_id,
            "--node-count",
            str(config.node_count),
            "--node-size",
            config.node_size,
            "--api-loadbalancer-type",
            API_LOADBALANCER_TYPE,
            "--yes",
        )
    )


def export_kubeconfig(runner: CommandRunner, config: InstallConfig) -> None:
    """Write admin credentials for an existing cluster to the kubeconfig."""
    runner.run(
        _kops(
            config,
            "export",
            "kubecfg",
            "--name",
            config.identity.fully_qualified_name,
            "--state",
            config.store.uri,
            "--admin",
        )
    )


def validate_cluster(runner: CommandRunner, config: InstallConfig) -> None:
    """Wait for the control plane and nodes to report healthy."""
    budget = config.validate_timeout_seconds
    runner.run(
        _kops(
            config,
            "validate",
            "cluster",
            "--name",
            config.identity.fully_qualified_name,
            "--state",
            config.store.uri,
            "--wait",
            f"{int(budget)}s",
        ),
        # Local budget sits one minute past the kops --wait.
        timeout=budget + 60,
    )


def delete_cluster(runner: CommandRunner, config: InstallConfig) -> DeletionResult:
    """Delete the cluster without prompting."""
    name = config.identity.fully_qualified_name
    resource = f"cluster {name}"
    result = runner.run(
        _kops(config, "delete", "cluster", "--name", name, "--state", config.store.uri, "--yes"),
        capture=True,
        check=False,
    )
    if result.returncode == 0:
        return DeletionResult(resource, DeletionOutcome.DELETED)
    if _is_not_found(result.output):
        logger.info("Cluster %s is already absent", name)
        return DeletionResult(resource, DeletionOutcome.ALREADY_ABSENT)
    logger.warning("Deleting cluster %s failed:\n%s", name, result.output)
    return DeletionResult(resource, DeletionOutcome.FAILED, result.summary)


def archive_kubeconfig(path: Path) -> Path | None:
    """Move an existing kubeconfig aside with a ``.old`` suffix.

    Returns:
        The archive path, or None when there was nothing to archive.
    """
    if not path.exists():
        return None
    archive = path.with_name(f"{path.name}.old")
    path.replace(archive)
    logger.info("Archived existing kubeconfig to %s", archive)
    return archive


def _is_not_found(output: str) -> bool:
    lowered = output.lower()
    return any(marker in lowered for marker in NOT_FOUND_MARKERS)
