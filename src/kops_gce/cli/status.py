"""Cluster status table for the CLI."""

from rich.table import Table

from kops_gce.cli.ui import console
from kops_gce.core.deployments.gce_kops import InstallConfig


def resource_targets(config: InstallConfig) -> dict[str, str]:
    """Return display names for each checked resource."""
    return {
        "kops binary": str(config.work_dir.binary_path),
        "State store": config.store.uri,
        "Cluster": config.identity.fully_qualified_name,
        "Context": config.identity.name_base,
    }


def print_status_table(config: InstallConfig, results: dict[str, str]) -> None:
    """Print a cluster status table.

    Args:
        config: Run configuration.
        results: Status values keyed by resource name.
    """
    targets = resource_targets(config)
    table = Table(title="Cluster resources", show_header=True, header_style="bold cyan")
    table.add_column("Resource", style="white", no_wrap=True)
    table.add_column("Name", style="bright_white")
    table.add_column("Status", style="white", no_wrap=True)

    for name, status in results.items():
        table.add_row(name, targets.get(name, "-"), style_status(status))

    console.print(table)


def style_status(status: str) -> str:
    """Return colourised status text for terminal output."""
    if status.startswith("present"):
        return f"[green]{status}[/green]"
    if status.startswith("missing") or status.startswith("error"):
        return f"[red]{status}[/red]"
    return f"[yellow]{status}[/yellow]"
