"""Shared utilities for shipyard CLI modules."""
from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from shipyard.models.deploy import Outcome, ResultLedger

OUTCOME_STYLES = {
    Outcome.SUCCEEDED: "[green]✓ success[/green]",
    Outcome.FAILED: "[red]✗ failed[/red]",
    Outcome.NOT_ATTEMPTED: "[dim]-[/dim]",
}


def setup_logging(log_file: Optional[str] = None, verbose: bool = False) -> None:
    """Set up file logging and console verbosity for CLI commands.

    File logging is only enabled when a log file is given or --verbose is set.
    """
    from shipyard.core.logger import set_verbose, setup_file_logging

    if log_file or verbose:
        setup_file_logging(log_file=log_file, verbose=verbose)
    if verbose:
        set_verbose(True)


def confirm_action(message: str, yes_flag: bool = False, mock: bool = False) -> bool:
    """Prompt user for confirmation unless --yes or mock mode.

    Args:
        message: Confirmation message to display
        yes_flag: Skip prompt if True (from --yes flag)
        mock: Skip prompt if True (mock mode)

    Returns:
        True if confirmed, False otherwise
    """
    if yes_flag or mock:
        return True
    return typer.confirm(message)


def handle_cli_error(
    e: Exception,
    console: Console,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        e: Exception to handle
        console: Rich console for output
        verbose: Show exception traceback if True
        exit_code: Exit code to use
    """
    console.print(f"[red]Error:[/red] {e}")
    if verbose:
        console.print_exception()
    raise typer.Exit(exit_code)


def build_summary_table(ledger: ResultLedger) -> Table:
    """Render the per-target outcomes of a deploy run.

    Only targets with at least one attempted phase get a row.
    """
    attempted = ledger.attempted()
    show_build = any(r.build.attempted for r in attempted.values())
    show_push = any(r.push.attempted for r in attempted.values())

    table = Table(title="Deploy Summary", show_header=True, header_style="bold cyan")
    table.add_column("Target", style="bold")
    if show_build:
        table.add_column("Build")
    if show_push:
        table.add_column("Push")

    for name, result in attempted.items():
        row = [name]
        if show_build:
            row.append(OUTCOME_STYLES[result.build])
        if show_push:
            row.append(OUTCOME_STYLES[result.push])
        table.add_row(*row)

    return table


def print_success(console: Console, message: str, prefix: str = "✓") -> None:
    """Print success message with consistent formatting."""
    console.print(f"[green]{prefix}[/green] {message}")


def print_error(console: Console, message: str, prefix: str = "✗") -> None:
    """Print error message with consistent formatting."""
    console.print(f"[red]{prefix}[/red] {message}")


def print_warning(console: Console, message: str, prefix: str = "⚠") -> None:
    """Print warning message with consistent formatting."""
    console.print(f"[yellow]{prefix}[/yellow] {message}")


def print_info(console: Console, message: str, prefix: str = "ℹ") -> None:
    """Print info message with consistent formatting."""
    console.print(f"[cyan]{prefix}[/cyan] {message}")
