"""Deploy CLI command - build, tag and push sub-project images."""
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from shipyard.core.config import DeployConfig, is_mock
from shipyard.core.errors import ShipyardError
from shipyard.core.orchestrator import DeployOrchestrator
from shipyard.models.deploy import Action, RunConfig, SELECT_ALL, LATEST_TAG
from shipyard.services.container_engine import ContainerEngine

# Module-level console instance (will be set by register function)
console: Console = Console()

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def deploy(
    action: Action = typer.Option(Action.BUILD, "--action", "-a", case_sensitive=False,
                                  help="What to do: build, push or all"),
    target: str = typer.Option(SELECT_ALL, "--target", "-t",
                               help="Target to process, or 'all'"),
    version: str = typer.Option(LATEST_TAG, "--version", "-v",
                                help="Version label to tag images with (latest is always added)"),
    push: bool = typer.Option(False, "--push", "-p", help="Push images after building"),
    root: Optional[str] = typer.Option(None, "--root", help="Project root holding the target directories"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Log docker commands without running them"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Write logs to this file"),
):
    """Build and/or push container images for the sub-projects.

    Examples:
        shipyard deploy                              # Build every target as :latest
        shipyard deploy -t sqlserver -v v1.0.0       # Build one target
        shipyard deploy -a all -v v1.2.0             # Build, then push what built
        shipyard deploy -a push -t databricks        # Push existing images
    """
    from shipyard.cli_support import (
        build_summary_table,
        handle_cli_error,
        print_error,
        print_success,
        setup_logging,
    )

    setup_logging(log_file=log_file, verbose=verbose)

    try:
        config = DeployConfig.from_env()
        run_config = RunConfig(action=action, selector=target, version=version, push=push)
    except ShipyardError as e:
        handle_cli_error(e, console, verbose)

    project_root = Path(root) if root else Path.cwd()
    mock = dry_run or is_mock()
    orchestrator = DeployOrchestrator(
        config,
        engine=ContainerEngine(mock=mock),
        project_root=project_root,
    )

    console.print(f"[bold cyan]shipyard deploy[/bold cyan] action={action.value} "
                  f"target={target} version={version}")
    console.print(f"[dim]Registry: {config.registry}/{config.namespace}[/dim]\n")

    try:
        report = orchestrator.run(run_config)
    except ShipyardError as e:
        handle_cli_error(e, console, verbose)

    if report.aborted:
        print_error(console, report.message)
        raise typer.Exit(report.exit_code)

    if len(report.ledger):
        console.print()
        console.print(build_summary_table(report.ledger))

    if report.exit_code == 0:
        print_success(console, "Deploy finished")
    else:
        print_error(console, "Deploy finished with failures")
    raise typer.Exit(report.exit_code)


deploy_app = typer.Typer(
    name="shipyard-deploy",
    help="Build, tag and push sub-project container images",
    add_completion=False,
    context_settings=CONTEXT_SETTINGS,
)
deploy_app.command()(deploy)


def register_deploy_commands(app: typer.Typer, shared_console: Console):
    """Register the deploy command with the main Typer app.

    Args:
        app: Main Typer application
        shared_console: Shared Rich console instance
    """
    global console
    console = shared_console

    app.command("deploy", context_settings=CONTEXT_SETTINGS)(deploy)
