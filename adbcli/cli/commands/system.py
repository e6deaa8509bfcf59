"""
System Commands.

Commands for application information and configuration.
"""

from typing import Optional

import typer
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from adbcli.cli.client import resolve_connection
from adbcli.cli.output import console, fail
from adbcli.core.config import get_app_config, get_settings
from adbcli.core.exceptions import ApplicationError

app = typer.Typer(help="System information commands")


def mask_secret(value: str | None) -> str:
    """Show only the last four characters of a secret."""
    if not value:
        return "(not set)"
    if len(value) <= 4:
        return "****"
    return f"****{value[-4:]}"


@app.command()
def info() -> None:
    """
    Display application information.

    Shows app name, version and the configured workspace.
    """
    try:
        app_config = get_app_config()
        application = app_config.application
        host = get_settings().databricks_host or application.api.host or "(not set)"

        console.print(Panel(
            f"[bold]{application.name}[/bold]\n"
            f"Version: {application.version}\n"
            f"Description: {application.description}\n"
            f"Workspace: {host}",
            title="Application Info",
        ))

    except (ApplicationError, OSError, RuntimeError) as e:
        fail(f"Error loading configuration: {e}")


@app.command()
def config(
    section: Optional[str] = typer.Argument(None, help="Config section to show (application, logging, secrets)"),
) -> None:
    """
    Display configuration settings.

    Shows all configuration or a specific section. Secrets are masked.
    """
    try:
        app_config = get_app_config()
        settings = get_settings()

        sections = {
            "application": app_config.application.model_dump(),
            "logging": app_config.logging.model_dump(),
            "secrets": {
                "databricks_host": settings.databricks_host or "(not set)",
                "databricks_token": mask_secret(settings.databricks_token),
            },
        }

    except (ApplicationError, OSError, RuntimeError) as e:
        fail(f"Error loading configuration: {e}")

    if section:
        if section not in sections:
            fail(f"Unknown section: {section}. Available sections: {', '.join(sections)}")
        _display_config_section(section, sections[section])
    else:
        for name, data in sections.items():
            _display_config_section(name, data)
            console.print()


def _display_config_section(name: str, data: dict) -> None:
    """Display a configuration section as a tree."""
    tree = Tree(f"[bold cyan]{name}[/bold cyan]")

    def add_items(parent: Tree, items: dict) -> None:
        for key, value in items.items():
            if isinstance(value, dict):
                branch = parent.add(f"[cyan]{key}[/cyan]")
                add_items(branch, value)
            else:
                parent.add(f"[cyan]{key}[/cyan]: {value}")

    add_items(tree, data)
    console.print(tree)


@app.command()
def version() -> None:
    """Display version information."""
    try:
        console.print(f"[bold]{get_app_config().application.version}[/bold]")
    except (ApplicationError, OSError, RuntimeError):
        console.print("[yellow]unknown[/yellow]")


@app.command()
def connection() -> None:
    """Display the resolved workspace host and masked token."""
    try:
        host, token = resolve_connection()
    except ApplicationError as e:
        fail(str(e))

    table = Table(title="Connection", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Host", host)
    table.add_row("Token", mask_secret(token))
    console.print(table)
