"""Bootstrap CLI command - one-time git repository and remote setup."""
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from shipyard.core.bootstrapper import (
    BRANCH_NAME,
    DEFAULT_REPO_NAME,
    REMOTE_NAME,
    RepositoryBootstrapper,
)
from shipyard.core.config import is_mock
from shipyard.core.errors import BootstrapAborted, ShipyardError
from shipyard.services.git_manager import GitManager

# Module-level console instance (will be set by register function)
console: Console = Console()

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def bootstrap(
    repo_name: str = typer.Option(DEFAULT_REPO_NAME, "--repo-name", "-r", help="Repository name on the hosting service"),
    username: str = typer.Option("", "--username", "-u", help="Hosting username (prompted if empty)"),
    path: Optional[str] = typer.Option(None, "--path", help="Directory to set up (default: current directory)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Log git commands without running them"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Write logs to this file"),
):
    """Initialize git, commit everything and point origin at the hosting service.

    Safe to run again: an existing repository is reused and an existing
    origin remote is updated in place.
    """
    from shipyard.cli_support import (
        confirm_action,
        handle_cli_error,
        print_info,
        print_success,
        print_warning,
        setup_logging,
    )

    setup_logging(log_file=log_file, verbose=verbose)

    target_dir = Path(path) if path else Path.cwd()
    mock = dry_run or is_mock()
    git = GitManager(target_dir, mock=mock)
    bootstrapper = RepositoryBootstrapper(
        git=git,
        prompt=lambda message: typer.prompt(message, default="", show_default=False),
        confirm=lambda message: confirm_action(message, yes_flag=yes, mock=mock),
    )

    console.print(f"[bold cyan]shipyard bootstrap[/bold cyan] {target_dir}\n")

    try:
        result = bootstrapper.run(repo_name=repo_name, username=username)
    except BootstrapAborted as e:
        print_warning(console, str(e))
        raise typer.Exit(0)
    except ShipyardError as e:
        handle_cli_error(e, console, verbose)

    if result.initialized:
        print_success(console, "Git repository initialized")
    else:
        print_info(console, "Git repository already exists")

    if result.committed:
        print_success(console, "Created initial commit")
    else:
        print_info(console, "Nothing new to commit")

    verb = "Updated" if result.remote_updated else "Added"
    print_success(console, f"{verb} remote {REMOTE_NAME}: {result.remote_url}")
    print_success(console, f"Branch set to {result.branch}")

    console.print("\n[bold]Next steps:[/bold]")
    console.print(f"  1. Create the repository [cyan]{result.username}/{result.repo_name}[/cyan] "
                  "on the hosting service (leave it empty)")
    console.print(f"  2. Push: [cyan]git push -u {REMOTE_NAME} {BRANCH_NAME}[/cyan]")
    console.print("  3. Set [cyan]DOCKER_USERNAME[/cyan] and run [cyan]shipyard deploy -a all[/cyan]")


bootstrap_app = typer.Typer(
    name="shipyard-bootstrap",
    help="One-time git repository and remote setup",
    add_completion=False,
    context_settings=CONTEXT_SETTINGS,
)
bootstrap_app.command()(bootstrap)


def register_bootstrap_commands(app: typer.Typer, shared_console: Console):
    """Register the bootstrap command with the main Typer app.

    Args:
        app: Main Typer application
        shared_console: Shared Rich console instance
    """
    global console
    console = shared_console

    app.command("bootstrap", context_settings=CONTEXT_SETTINGS)(bootstrap)
