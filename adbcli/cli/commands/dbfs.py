"""
DBFS Commands.

List, inspect, move, delete, upload and download DBFS files.
Paths may be given with or without the dbfs: scheme.
"""

import asyncio
import tempfile
from pathlib import Path

import typer
from rich.filesize import decimal
from rich.table import Table

from adbcli.cli.client import close_databricks_client, get_databricks_client
from adbcli.cli.output import COMMAND_ERRORS, console, describe_error, fail, info
from adbcli.core.exceptions import ValidationError

app = typer.Typer(help="DBFS commands")


def normalize_dbfs_path(path: str) -> str:
    """Strip a leading dbfs: scheme. dbfs:/a/b -> /a/b"""
    if path.startswith("dbfs:"):
        path = path[len("dbfs:"):]
    if not path.startswith("/"):
        raise ValidationError(f"DBFS path must be absolute: {path}", details={"path": path})
    return path


def _dbfs_path(path: str) -> str:
    try:
        return normalize_dbfs_path(path)
    except ValidationError as e:
        fail(e.message)


@app.command("ls")
def list_files(path: str = typer.Argument("/", help="DBFS directory")) -> None:
    """Lists the contents of a DBFS directory."""
    asyncio.run(_list(_dbfs_path(path)))


async def _list(path: str) -> None:
    try:
        files = await get_databricks_client().dbfs.list(path)

        table = Table(show_header=True)
        table.add_column("Path", style="cyan")
        table.add_column("Type")
        table.add_column("Size", justify="right")
        for f in files:
            table.add_row(f.path, "dir" if f.is_dir else "file", "-" if f.is_dir else decimal(f.file_size))
        console.print(table)

    except COMMAND_ERRORS as e:
        fail(describe_error(e))

    finally:
        await close_databricks_client()


@app.command()
def stat(path: str = typer.Argument(..., help="DBFS path")) -> None:
    """Shows the status of a file or directory."""
    asyncio.run(_stat(_dbfs_path(path)))


async def _stat(path: str) -> None:
    try:
        status = await get_databricks_client().dbfs.get_status(path)
        console.print_json(data=status.model_dump(mode="json"))

    except COMMAND_ERRORS as e:
        fail(describe_error(e))

    finally:
        await close_databricks_client()


@app.command()
def mkdirs(path: str = typer.Argument(..., help="DBFS directory")) -> None:
    """Creates a directory and any missing parents."""
    asyncio.run(_mkdirs(_dbfs_path(path)))


async def _mkdirs(path: str) -> None:
    try:
        await get_databricks_client().dbfs.mkdirs(path)
        info(f"Created {path}")

    except COMMAND_ERRORS as e:
        fail(describe_error(e))

    finally:
        await close_databricks_client()


@app.command("rm")
def remove(
    path: str = typer.Argument(..., help="DBFS path"),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Delete directory contents"),
) -> None:
    """Deletes a file or directory."""
    asyncio.run(_remove(_dbfs_path(path), recursive))


async def _remove(path: str, recursive: bool) -> None:
    try:
        await get_databricks_client().dbfs.delete(path, recursive)
        info(f"Deleted {path}")

    except COMMAND_ERRORS as e:
        fail(describe_error(e))

    finally:
        await close_databricks_client()


@app.command("mv")
def move(
    source: str = typer.Argument(..., help="Source DBFS path"),
    destination: str = typer.Argument(..., help="Destination DBFS path"),
) -> None:
    """Moves a file or directory within DBFS."""
    asyncio.run(_move(_dbfs_path(source), _dbfs_path(destination)))


async def _move(source: str, destination: str) -> None:
    try:
        await get_databricks_client().dbfs.move(source, destination)
        info(f"Moved {source} to {destination}")

    except COMMAND_ERRORS as e:
        fail(describe_error(e))

    finally:
        await close_databricks_client()


@app.command()
def upload(
    local_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Local file"),
    path: str = typer.Argument(..., help="Destination DBFS path"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Overwrite an existing file"),
) -> None:
    """
    Uploads a local file in 1 MiB blocks.

    Examples:
        adbcli dbfs upload ./app.jar dbfs:/jars/app.jar --overwrite
    """
    asyncio.run(_upload(local_path, _dbfs_path(path), overwrite))


async def _upload(local_path: Path, path: str, overwrite: bool) -> None:
    try:
        client = get_databricks_client()
        with open(local_path, "rb") as stream:
            await client.dbfs.upload(path, overwrite, stream)
        info(f"Uploaded {local_path} to {path}")

    except COMMAND_ERRORS as e:
        fail(describe_error(e))

    finally:
        await close_databricks_client()


@app.command()
def download(
    path: str = typer.Argument(..., help="DBFS file"),
    local_path: Path = typer.Argument(..., dir_okay=False, help="Local destination file"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Overwrite an existing local file"),
) -> None:
    """
    Downloads a DBFS file in 1 MiB blocks.

    Examples:
        adbcli dbfs download dbfs:/tmp/out.csv ./out.csv
    """
    path = _dbfs_path(path)
    if local_path.exists() and not overwrite:
        fail(f"Local file already exists: {local_path} (use --overwrite)")
    asyncio.run(_download(path, local_path))


async def _download(path: str, local_path: Path) -> None:
    """
    Async implementation of download command.

    Blocks are written to a temporary file next to local_path, which replaces
    local_path only once the whole file has been read.
    """
    partial: Path | None = None
    try:
        client = get_databricks_client()
        with tempfile.NamedTemporaryFile(
            dir=local_path.parent, prefix=f".{local_path.name}.", suffix=".part", delete=False,
        ) as stream:
            partial = Path(stream.name)
            total = await client.dbfs.download(path, stream)
        partial.replace(local_path)
        partial = None
        info(f"Downloaded {path} to {local_path} ({decimal(total)})")

    except (*COMMAND_ERRORS, OSError) as e:
        fail(describe_error(e))

    finally:
        if partial is not None:
            partial.unlink(missing_ok=True)
        await close_databricks_client()


@app.command()
def put(
    local_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Local file"),
    path: str = typer.Argument(..., help="Destination DBFS path"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Overwrite an existing file"),
) -> None:
    """Uploads a small local file in a single request."""
    asyncio.run(_put(local_path, _dbfs_path(path), overwrite))


async def _put(local_path: Path, path: str, overwrite: bool) -> None:
    try:
        await get_databricks_client().dbfs.put(path, local_path.read_bytes(), overwrite)
        info(f"Uploaded {local_path} to {path}")

    except COMMAND_ERRORS as e:
        fail(describe_error(e))

    finally:
        await close_databricks_client()
