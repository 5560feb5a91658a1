"""Fatal error rendering for the CLI."""

from collections.abc import Iterator

from rich.markup import escape

from kops_gce.cli.ui import console
from kops_gce.core.deployments.gce_kops import ProvisioningError
from kops_gce.core.deployments.gce_kops.runner import CommandTimeoutError, ExecutableNotFoundError

EXIT_FAILURE = 2


def report_fatal_error(command: str, exc: ProvisioningError) -> None:
    """Render a fatal error as a single line with actionable guidance.

    Args:
        command: CLI command that was running.
        exc: The failed provisioning step.
    """
    cause = escape(" ".join(str(exc).split()))
    console.print(
        f"[red]ERROR: {exc.step} failed while running '{command}': {cause}[/red]",
        soft_wrap=True,
    )
    failures = list(underlying_failures(exc))
    if any(isinstance(item, ExecutableNotFoundError) for item in failures):
        console.print("[dim]Install the missing tool and make sure it is on PATH.[/dim]")
    elif any(isinstance(item, CommandTimeoutError) for item in failures):
        console.print("[dim]Inspect the cluster with kops, or run destroy to clean up.[/dim]")


def underlying_failures(exc: BaseException) -> Iterator[BaseException]:
    """Yield a provisioning failure followed by the errors that led to it."""
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        yield current
        current = current.__cause__ or current.__context__
