"""Shared Rich console for the CLI."""

from rich.console import Console

console = Console()


def report_step(message: str) -> None:
    """Report provisioning progress to the user.

    Args:
        message: Progress message to display.
    """
    console.print(f"[bold cyan]•[/bold cyan] {message}")
