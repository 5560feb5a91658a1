"""Shared filesystem paths for user configuration and working state."""

from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

APP_NAME = "kops-gce"
ENV_FILENAME = ".env"


def config_dir() -> Path:
    """Return the user configuration directory.

    Returns:
        The user configuration directory path.
    """
    return Path(user_config_dir(APP_NAME))


def env_path() -> Path:
    """Return the user env file path.

    Returns:
        The user env file path.
    """
    return config_dir() / ENV_FILENAME


def default_work_dir() -> Path:
    """Return the default working directory root.

    Returns:
        The directory holding downloaded binaries and the kubeconfig.
    """
    return Path(user_data_dir(APP_NAME))
