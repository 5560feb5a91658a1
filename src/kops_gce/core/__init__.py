"""kops-gce core modules."""

from kops_gce.core.settings import CliOptions, KopsSettings, build_install_config, get_settings

__all__ = [
    "CliOptions",
    "KopsSettings",
    "build_install_config",
    "get_settings",
]
