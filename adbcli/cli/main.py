"""
CLI application.

Registers the command groups and global options.

Usage:
    adbcli --help

    # Jobs
    adbcli job create -n etl -npath /Shared/etl -nw 2 --wait
    adbcli job create -n spark -jmc com.acme.Main -jpath dbfs:/a.jar;dbfs:/b.jar -as 2-8
    adbcli job run 42 --wait
    adbcli job list

    # DBFS
    adbcli dbfs ls dbfs:/tmp
    adbcli dbfs upload ./data.csv dbfs:/tmp/data.csv --overwrite
    adbcli dbfs download dbfs:/tmp/data.csv ./data.csv

    # Workspace
    adbcli workspace ls /Users

    # System info
    adbcli system info
    adbcli system config

Options:
    --host            Workspace URL (overrides DATABRICKS_HOST)
    --token           Access token (overrides DATABRICKS_TOKEN)
    --verbose, -v     Enable verbose output
    --debug           Enable debug mode (detailed logging)
"""

from typing import Optional

import typer
from rich.console import Console

from adbcli.cli.client import configure_connection
from adbcli.cli.commands import dbfs_app, job_app, system_app, workspace_app
from adbcli.core.logging import setup_logging

app = typer.Typer(
    name="adbcli",
    help="Azure Databricks CLI - jobs, DBFS and workspace from the command line.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console(stderr=True)

app.add_typer(job_app, name="job")
app.add_typer(dbfs_app, name="dbfs")
app.add_typer(workspace_app, name="workspace")
app.add_typer(system_app, name="system")


@app.callback()
def main(
    host: Optional[str] = typer.Option(
        None,
        "--host",
        help="Workspace URL, e.g. https://westeurope.azuredatabricks.net",
    ),
    token: Optional[str] = typer.Option(
        None,
        "--token",
        help="Personal access token",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Azure Databricks CLI.

    Creates and runs jobs, transfers DBFS files and browses the workspace
    through the REST API.
    """
    configure_connection(host=host, token=token)

    if debug:
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging()
