#!/usr/bin/env python3
"""shipyard CLI - Build and publish sub-project container images."""

import typer
from rich.console import Console

from shipyard.cli_bootstrap_commands import register_bootstrap_commands
from shipyard.cli_deploy_commands import register_deploy_commands

app = typer.Typer(
    name="shipyard",
    help="""shipyard - Build, tag and push container images for each sub-project

Quick start:
  shipyard bootstrap -u <username>      # One-time git + remote setup
  shipyard deploy                       # Build every target
  shipyard deploy -a all -v v1.0.0      # Build and push

More commands: shipyard --help
""",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()

# Attach modular subcommands
register_deploy_commands(app, console)
register_bootstrap_commands(app, console)

if __name__ == "__main__":
    app()
