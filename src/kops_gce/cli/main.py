"""CLI entrypoint for kops-gce."""

import sys
from collections.abc import Callable

import click
import httpx
from pydantic import ValidationError

from kops_gce.cli.errors import EXIT_FAILURE, report_fatal_error
from kops_gce.cli.log import configure_logging
from kops_gce.cli.status import print_status_table
from kops_gce.cli.ui import console, report_step
from kops_gce.core.deployments.gce_kops import (
    CommandRunner,
    InstallConfig,
    ProvisioningError,
    cluster_status,
    create_http_client,
    destroy_cluster,
    install_cluster,
)
from kops_gce.core.settings import (
    DEFAULT_CLUSTER_NAME,
    CliOptions,
    build_install_config,
    get_settings,
)

Action = Callable[[InstallConfig, CommandRunner, httpx.Client, Callable[[str], None]], object]


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option(
    "-c",
    "--cluster-name",
    default=DEFAULT_CLUSTER_NAME,
    show_default=True,
    help="Cluster name base; the full name adds the .k8s.local suffix.",
)
@click.option("-z", "--zone", default=None, help="Compute zone (default: gcloud compute/zone).")
@click.option("-p", "--project-id", default=None, help="Project ID (default: gcloud project).")
@click.option(
    "-sc",
    "--skip-credentials",
    is_flag=True,
    help="Skip the application default credentials login.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log the commands being run.")
@click.pass_context
def cli(
    ctx: click.Context,
    cluster_name: str,
    zone: str | None,
    project_id: str | None,
    skip_credentials: bool,
    verbose: bool,
) -> None:
    """Provision and tear down a kops Kubernetes cluster on Google Compute Engine."""
    configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        console.print("[red]ERROR: command not supplied[/red]")
        console.print(ctx.get_usage())
        ctx.exit(EXIT_FAILURE)
    ctx.obj = CliOptions(
        cluster_name=cluster_name,
        zone=zone,
        project_id=project_id,
        skip_credentials=skip_credentials,
    )


@cli.command()
@click.pass_obj
def install(options: CliOptions) -> None:
    """Create the cluster and switch kubectl to it."""
    _run("install", options, install_cluster)


@cli.command()
@click.pass_obj
def destroy(options: CliOptions) -> None:
    """Delete the cluster, its state store and the working directory."""
    _run("destroy", options, destroy_cluster)


@cli.command()
@click.pass_obj
def status(options: CliOptions) -> None:
    """Show which cluster resources exist."""
    try:
        runner, config = _load_config(options)
    except ProvisioningError as exc:
        report_fatal_error("status", exc)
        sys.exit(EXIT_FAILURE)
    print_status_table(config, cluster_status(config, runner))


def _load_config(options: CliOptions) -> tuple[CommandRunner, InstallConfig]:
    """Build the runner and the immutable run configuration."""
    try:
        settings = get_settings()
        runner = CommandRunner(default_timeout=settings.command_timeout_seconds)
        return runner, build_install_config(settings, options, runner)
    except ProvisioningError:
        raise
    except (ValidationError, RuntimeError) as exc:
        raise ProvisioningError("configuration", str(exc)) from exc


def _run(command: str, options: CliOptions, action: Action) -> None:
    """Run an install or destroy action and exit with status 2 on failure."""
    try:
        runner, config = _load_config(options)
        with create_http_client(config) as client:
            action(config, runner, client, report_step)
    except ProvisioningError as exc:
        report_fatal_error(command, exc)
        sys.exit(EXIT_FAILURE)
    except KeyboardInterrupt:
        console.print(f"\n[red]ERROR: '{command}' interrupted[/red]")
        sys.exit(EXIT_FAILURE)
    console.print(f"[green]{command} completed[/green]")


def main() -> None:
    """Run the CLI."""
    cli()
