"""gcloud helpers for credentials and ambient defaults."""

import logging
from collections.abc import Callable

from kops_gce.core.deployments.gce_kops.models import InstallConfig
from kops_gce.core.deployments.gce_kops.runner import CommandRunner

logger = logging.getLogger(__name__)

UNSET_MARKER = "(unset)"


def configured_value(runner: CommandRunner, key: str) -> str | None:
    """Read a value from the active gcloud configuration.

    Args:
        runner: Command runner.
        key: Property name, for example ``project`` or ``compute/zone``.

    Returns:
        The configured value, or None when it is not set.
    """
    result = runner.run(["gcloud", "config", "get-value", key], capture=True, check=False)
    value = result.stdout.strip()
    if result.returncode != 0 or not value or value == UNSET_MARKER:
        return None
    return value


def ensure_credentials(
    runner: CommandRunner,
    config: InstallConfig,
    reporter: Callable[[str], None],
) -> None:
    """Request application default credentials unless told to skip."""
    if config.skip_credentials:
        logger.info("Skipping credential login")
        return
    reporter("Requesting application default credentials")
    runner.run(["gcloud", "auth", "application-default", "login"])


def active_account(runner: CommandRunner) -> str:
    """Return the account gcloud is authenticated as."""
    account = configured_value(runner, "account")
    if not account:
        raise RuntimeError("No active gcloud account. Run: gcloud auth login")
    return account
