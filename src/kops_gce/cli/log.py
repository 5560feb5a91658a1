"""Logging setup for the CLI."""

import logging

from rich.logging import RichHandler

from kops_gce.cli.ui import console


def configure_logging(verbose: bool = False) -> None:
    """Route library logging through a Rich handler.

    Args:
        verbose: Log at DEBUG instead of INFO.
    """
    root = logging.getLogger("kops_gce")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = RichHandler(console=console, show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
