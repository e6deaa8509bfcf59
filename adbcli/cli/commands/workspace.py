"""
Workspace Commands.

Browse and manage notebooks, directories and libraries in the workspace.
"""

import asyncio

import typer
from rich.table import Table

from adbcli.cli.client import close_databricks_client, get_databricks_client
from adbcli.cli.output import COMMAND_ERRORS, console, describe_error, fail, info
from adbcli.schemas.workspace import ObjectType

app = typer.Typer(help="Workspace commands")

_TYPE_COLORS = {
    ObjectType.DIRECTORY: "blue",
    ObjectType.NOTEBOOK: "green",
    ObjectType.LIBRARY: "magenta",
    ObjectType.FILE: "white",
    ObjectType.REPO: "yellow",
}


@app.command("ls")
def list_objects(path: str = typer.Argument("/", help="Workspace directory")) -> None:
    """Lists objects in a workspace directory."""
    asyncio.run(_list(path))


async def _list(path: str) -> None:
    try:
        objects = await get_databricks_client().workspace.list(path)

        table = Table(show_header=True)
        table.add_column("Type")
        table.add_column("Language")
        table.add_column("Path", style="cyan")
        for obj in objects:
            color = _TYPE_COLORS[obj.object_type]
            table.add_row(
                f"[{color}]{obj.object_type.value}[/{color}]",
                obj.language.value if obj.language else "-",
                obj.path,
            )
        console.print(table)

    except COMMAND_ERRORS as e:
        fail(describe_error(e))

    finally:
        await close_databricks_client()


@app.command()
def stat(path: str = typer.Argument(..., help="Workspace path")) -> None:
    """Shows the type and language of a workspace object."""
    asyncio.run(_stat(path))


async def _stat(path: str) -> None:
    try:
        obj = await get_databricks_client().workspace.get_status(path)
        console.print_json(data=obj.model_dump(mode="json", exclude_none=True))

    except COMMAND_ERRORS as e:
        fail(describe_error(e))

    finally:
        await close_databricks_client()


@app.command()
def mkdirs(path: str = typer.Argument(..., help="Workspace directory")) -> None:
    """Creates a workspace directory and any missing parents."""
    asyncio.run(_mkdirs(path))


async def _mkdirs(path: str) -> None:
    try:
        await get_databricks_client().workspace.mkdirs(path)
        info(f"Created {path}")

    except COMMAND_ERRORS as e:
        fail(describe_error(e))

    finally:
        await close_databricks_client()


@app.command("rm")
def remove(
    path: str = typer.Argument(..., help="Workspace path"),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Delete directory contents"),
) -> None:
    """Deletes a workspace object."""
    asyncio.run(_remove(path, recursive))


async def _remove(path: str, recursive: bool) -> None:
    try:
        await get_databricks_client().workspace.delete(path, recursive)
        info(f"Deleted {path}")

    except COMMAND_ERRORS as e:
        fail(describe_error(e))

    finally:
        await close_databricks_client()
