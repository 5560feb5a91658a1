"""Install and destroy entrypoints for kops clusters on GCE."""

import logging
import shutil
from collections.abc import Callable, Iterator
from contextlib import contextmanager

import httpx

from kops_gce.core.deployments.gce_kops.binary import ensure_binary
from kops_gce.core.deployments.gce_kops.cluster import (
    archive_kubeconfig,
    cluster_exists,
    create_cluster,
    delete_cluster,
    export_kubeconfig,
    validate_cluster,
)
from kops_gce.core.deployments.gce_kops.context import (
    grant_cluster_admin,
    read_kubeconfig,
    rename_context,
)
from kops_gce.core.deployments.gce_kops.errors import ProvisioningError
from kops_gce.core.deployments.gce_kops.gcloud import active_account, ensure_credentials
from kops_gce.core.deployments.gce_kops.models import (
    DeletionOutcome,
    DeletionResult,
    InstallConfig,
)
from kops_gce.core.deployments.gce_kops.runner import (
    CommandError,
    CommandRunner,
    scoped_environment,
)
from kops_gce.core.deployments.gce_kops.storage import delete_store, ensure_store, store_exists

logger = logging.getLogger(__name__)

KOPS_FEATURE_FLAGS = "AlphaAllowGCE"

STEP_FAILURES = (RuntimeError, httpx.HTTPError, OSError)


def kops_environment(config: InstallConfig) -> dict[str, str]:
    """Environment variables kops and kubectl need for one run."""
    return {
        "KOPS_STATE_STORE": config.store.uri,
        "KOPS_FEATURE_FLAGS": KOPS_FEATURE_FLAGS,
        "KUBECONFIG": str(config.work_dir.kubeconfig_path),
    }


@contextmanager
def _step(name: str) -> Iterator[None]:
    """Convert a failure inside a step into a ProvisioningError."""
    try:
        yield
    except ProvisioningError:
        raise
    except STEP_FAILURES as exc:
        failed = _failed_command(exc)
        if failed is not None and failed.result.output:
            logger.error("%s output:\n%s", name, failed.result.output)
        raise ProvisioningError(name, str(exc)) from exc


def _failed_command(exc: BaseException) -> CommandError | None:
    current: BaseException | None = exc
    while current is not None:
        if isinstance(current, CommandError):
            return current
        current = current.__cause__
    return None


def install_cluster(
    config: InstallConfig,
    runner: CommandRunner,
    client: httpx.Client,
    reporter: Callable[[str], None],
) -> None:
    """Create a cluster, wait for it, and point the local context at it."""
    identity = config.identity
    config.work_dir.root.mkdir(parents=True, exist_ok=True)

    with _step("credential login"):
        ensure_credentials(runner, config, reporter)

    with _step("state store"):
        reporter(f"Ensuring state store {config.store.uri}")
        ensure_store(runner, config.store)

    with _step("kops binary"):
        ensure_binary(client, config, reporter)

    with scoped_environment(kops_environment(config)):
        with _step("cluster create"):
            if cluster_exists(runner, config):
                logger.info(
                    "Cluster %s already exists, skipping create", identity.fully_qualified_name
                )
                reporter(f"Exporting credentials for {identity.fully_qualified_name}")
                archive_kubeconfig(config.work_dir.kubeconfig_path)
                export_kubeconfig(runner, config)
            else:
                reporter(f"Creating cluster {identity.fully_qualified_name}")
                archive_kubeconfig(config.work_dir.kubeconfig_path)
                create_cluster(runner, config)

        with _step("cluster validation"):
            reporter(f"Validating cluster (up to {int(config.validate_timeout_seconds)}s)")
            validate_cluster(runner, config)

        with _step("context rename"):
            reporter(f"Switching kubectl context to {identity.name_base}")
            rename_context(runner, identity.fully_qualified_name, identity.name_base)

        with _step("admin binding"):
            account = active_account(runner)
            reporter(f"Granting cluster-admin to {account}")
            grant_cluster_admin(runner, f"{identity.name_base}-cluster-admin", account)

    reporter(f"Cluster {identity.name_base} is ready")


def destroy_cluster(
    config: InstallConfig,
    runner: CommandRunner,
    client: httpx.Client,
    reporter: Callable[[str], None],
) -> list[DeletionResult]:
    """Delete the cluster, its state store and the working directory.

    Every deletion is attempted. Resources that are already gone count as
    success; any failed deletion makes the whole destroy fail afterwards.
    """
    with _step("kops binary"):
        ensure_binary(client, config, reporter)

    results: list[DeletionResult] = []
    with scoped_environment(kops_environment(config)):
        reporter(f"Deleting cluster {config.identity.fully_qualified_name}")
        cluster = f"cluster {config.identity.fully_qualified_name}"
        results.append(_attempt(cluster, delete_cluster, runner, config))

    reporter(f"Deleting state store {config.store.uri}")
    results.append(_attempt(f"state store {config.store.uri}", delete_store, runner, config.store))

    reporter(f"Removing working directory {config.work_dir.root}")
    results.append(remove_work_dir(config))

    for result in results:
        reporter(f"{result.resource}: {result.outcome.value}")

    failed = [result for result in results if result.outcome is DeletionOutcome.FAILED]
    if failed:
        details = "; ".join(f"{result.resource}: {result.detail}" for result in failed)
        raise ProvisioningError("destroy", details)
    return results


def remove_work_dir(config: InstallConfig) -> DeletionResult:
    """Remove the local working directory."""
    root = config.work_dir.root
    resource = f"working directory {root}"
    if not root.exists():
        logger.info("Working directory %s is already absent", root)
        return DeletionResult(resource, DeletionOutcome.ALREADY_ABSENT)
    try:
        shutil.rmtree(root)
    except OSError as exc:
        return DeletionResult(resource, DeletionOutcome.FAILED, str(exc))
    return DeletionResult(resource, DeletionOutcome.DELETED)


def cluster_status(config: InstallConfig, runner: CommandRunner) -> dict[str, str]:
    """Report which cluster resources exist without changing anything."""
    results: dict[str, str] = {}
    binary = config.work_dir.binary_path
    results["kops binary"] = "present" if binary.exists() else "missing"
    results["State store"] = _presence(store_exists, runner, config.store)

    with scoped_environment(kops_environment(config)):
        if binary.exists():
            results["Cluster"] = _presence(cluster_exists, runner, config)
        else:
            results["Cluster"] = "unknown (kops binary missing)"
        results["Context"] = _presence(_has_context, runner, config)
    return results


def _has_context(runner: CommandRunner, config: InstallConfig) -> bool:
    if not config.work_dir.kubeconfig_path.exists():
        return False
    return read_kubeconfig(runner).find(config.identity.name_base) is not None


def _presence(check: Callable[..., bool], *args: object) -> str:
    try:
        return "present" if check(*args) else "missing"
    except STEP_FAILURES as exc:
        return f"error: {exc}"


def _attempt(resource: str, delete: Callable[..., DeletionResult], *args: object) -> DeletionResult:
    try:
        return delete(*args)
    except STEP_FAILURES as exc:
        return DeletionResult(resource, DeletionOutcome.FAILED, str(exc))
