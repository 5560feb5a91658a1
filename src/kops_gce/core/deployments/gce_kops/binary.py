"""kops binary download helpers."""

import logging
import os
import shutil
import stat
import tempfile
from collections.abc import Callable
from pathlib import Path

import httpx

from kops_gce.core.deployments.gce_kops.models import InstallConfig, ToolBinary
from kops_gce.core.deployments.gce_kops.platform import artifact_name

logger = logging.getLogger(__name__)


def ensure_binary(
    client: httpx.Client,
    config: InstallConfig,
    reporter: Callable[[str], None],
) -> ToolBinary | None:
    """Ensure the kops binary is present in the working directory.

    An existing binary is used as-is without contacting the release endpoint.

    Args:
        client: HTTP client used for release metadata and the download.
        config: Run configuration.
        reporter: Progress callback.

    Returns:
        The downloaded binary, or None when one was already present.
    """
    target = config.work_dir.binary_path
    if target.exists():
        logger.info("kops binary already present at %s", target)
        return None

    version = latest_version(client, config.release_api_url)
    name = artifact_name(config.platform)
    reporter(f"Downloading kops {version} ({name})")
    url = f"{config.download_base_url}/{version}/{name}"
    _download(client, url, target)
    return ToolBinary(version=version, platform=config.platform, path=target)


def latest_version(client: httpx.Client, release_api_url: str) -> str:
    """Return the tag of the latest published kops release."""
    response = client.get(release_api_url)
    response.raise_for_status()
    try:
        metadata = response.json()
    except ValueError as exc:
        raise RuntimeError(f"Release metadata from {release_api_url} is not JSON") from exc
    tag = metadata.get("tag_name") if isinstance(metadata, dict) else None
    if not tag:
        raise RuntimeError(f"Release metadata from {release_api_url} has no tag_name")
    return str(tag)


def _download(client: httpx.Client, url: str, target: Path) -> None:
    """Stream a file to a temporary path, mark it executable, and move it in place."""
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=".kops-")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle, client.stream("GET", url) as response:
            response.raise_for_status()
            for chunk in response.iter_bytes():
                handle.write(chunk)
        mode = tmp_path.stat().st_mode
        tmp_path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        shutil.move(str(tmp_path), target)
    finally:
        tmp_path.unlink(missing_ok=True)


def create_http_client(config: InstallConfig) -> httpx.Client:
    """Create the HTTP client used for release downloads."""
    return httpx.Client(timeout=config.download_timeout_seconds, follow_redirects=True)
