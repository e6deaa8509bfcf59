"""
Console output for CLI commands.

Results go to stdout, errors to stderr. fail() ends the command with the
CLI's failure exit code.
"""

from typing import NoReturn

import httpx
import pydantic
import typer
from rich.console import Console
from rich.markup import escape

from adbcli.core.exceptions import ApplicationError

EXIT_FAILURE = -1

COMMAND_ERRORS = (ApplicationError, httpx.HTTPError, pydantic.ValidationError)
"""Errors a command reports on stderr before exiting with EXIT_FAILURE."""

console = Console()
err_console = Console(stderr=True)


def info(message: str) -> None:
    console.print(escape(message), soft_wrap=True)


def error(message: str) -> None:
    err_console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)


def describe_error(exc: Exception) -> str:
    """User-facing text for an error raised while running a command."""
    if isinstance(exc, ApplicationError):
        return str(exc)
    if isinstance(exc, httpx.HTTPError):
        return f"Request failed: {exc}"
    if isinstance(exc, pydantic.ValidationError):
        return f"Unexpected API response: {exc}"
    return f"Error: {exc}"


def fail(message: str) -> NoReturn:
    """Print message on stderr and exit with EXIT_FAILURE."""
    error(message)
    raise typer.Exit(EXIT_FAILURE)
