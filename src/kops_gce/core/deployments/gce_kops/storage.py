"""Cloud Storage helpers for the kops state store."""

import logging

from kops_gce.core.deployments.gce_kops.models import (
    DeletionOutcome,
    DeletionResult,
    StoreLocation,
)
from kops_gce.core.deployments.gce_kops.runner import CommandError, CommandRunner

logger = logging.getLogger(__name__)

ALREADY_EXISTS_MARKERS = ("already exists", "409")
NOT_FOUND_MARKERS = ("bucketnotfound", "not found", "no urls matched", "404")


def ensure_store(runner: CommandRunner, location: StoreLocation) -> bool:
    """Ensure the state store bucket exists.

    Args:
        runner: Command runner.
        location: Bucket to create.

    Returns:
        True when the bucket was created, False when it already existed.
    """
    try:
        runner.run(["gsutil", "mb", "-p", location.project_id, location.uri], capture=True)
    except CommandError as exc:
        if _matches(exc.result.output, ALREADY_EXISTS_MARKERS):
            logger.info("State store %s already exists", location.uri)
            return False
        raise RuntimeError(f"Failed to create state store {location.uri}: {exc}") from exc
    return True


def store_exists(runner: CommandRunner, location: StoreLocation) -> bool:
    """Return True when the state store bucket exists."""
    result = runner.run(["gsutil", "ls", "-b", location.uri], capture=True, check=False)
    if result.returncode == 0:
        return True
    if _matches(result.output, NOT_FOUND_MARKERS):
        return False
    raise CommandError(result)


def delete_store(runner: CommandRunner, location: StoreLocation) -> DeletionResult:
    """Delete the state store bucket and everything in it."""
    resource = f"state store {location.uri}"
    result = runner.run(["gsutil", "-m", "rm", "-r", location.uri], capture=True, check=False)
    if result.returncode == 0:
        return DeletionResult(resource, DeletionOutcome.DELETED)
    if _matches(result.output, NOT_FOUND_MARKERS):
        logger.info("State store %s is already absent", location.uri)
        return DeletionResult(resource, DeletionOutcome.ALREADY_ABSENT)
    logger.warning("Deleting state store %s failed:\n%s", location.uri, result.output)
    return DeletionResult(resource, DeletionOutcome.FAILED, result.summary)


def _matches(output: str, markers: tuple[str, ...]) -> bool:
    lowered = output.lower()
    return any(marker in lowered for marker in markers)
