"""
Job Commands.

Create, run, inspect and delete jobs.
"""

import asyncio
from typing import List, Optional

import typer
from rich.table import Table

from adbcli.cli.client import close_databricks_client, get_api_service, get_databricks_client
from adbcli.cli.job_options import attach_cluster, build_job_settings, build_new_cluster
from adbcli.cli.output import COMMAND_ERRORS, EXIT_FAILURE, console, describe_error, error, fail, info
from adbcli.core.config import get_app_config
from adbcli.core.exceptions import ApplicationError
from adbcli.core.logging import get_logger, log_with_source
from adbcli.schemas.jobs import JobSettings, RunLifeCycleState, RunResultState, RunState

app = typer.Typer(help="Job commands")
logger = get_logger(__name__)


def report_run_state(state: RunState) -> int:
    """Print the outcome of a finished run. Returns the exit code."""
    info(f"Run finished with life cycle state {state.life_cycle_state.value}")

    if state.life_cycle_state in (RunLifeCycleState.INTERNAL_ERROR, RunLifeCycleState.SKIPPED):
        error(f"State message: {state.state_message}")
        return EXIT_FAILURE

    if state.result_state != RunResultState.SUCCESS:
        error(f"State message: {state.state_message}")
        error("Result of job run does not indicate success.")
        return EXIT_FAILURE

    info("Job run succeeded.")
    return 0


def _build_settings(
    args: Optional[List[str]],
    existing_cluster_id: Optional[str],
    auto_scale: Optional[str],
    num_workers: Optional[str],
    python3: bool,
    node_type: Optional[str],
    runtime_version: Optional[str],
    table_access_control: bool,
    job_name: Optional[str],
    jar_main_class: Optional[str],
    jar_path: Optional[List[str]],
    notebook_path: Optional[str],
) -> JobSettings:
    settings = build_job_settings(job_name, jar_main_class, jar_path, notebook_path, args)

    new_cluster = None
    if not existing_cluster_id:
        defaults = get_app_config().application.jobs
        new_cluster = build_new_cluster(
            auto_scale,
            num_workers,
            python3=python3,
            node_type=node_type,
            runtime_version=runtime_version,
            table_access_control=table_access_control,
            default_node_type=defaults.default_node_type,
            default_runtime_version=defaults.default_runtime_version,
        )
    return attach_cluster(settings, existing_cluster_id, new_cluster)


@app.command()
def create(
    args: Optional[List[str]] = typer.Argument(
        None, help="JAR parameters, or key=value notebook parameters"
    ),
    existing_cluster_id: Optional[str] = typer.Option(
        None, "-ecid", "--existing-cluster-id", help="Existing cluster id"
    ),
    auto_scale: Optional[str] = typer.Option(
        None, "-as", "--auto-scale", help="New cluster auto scale (min-max)"
    ),
    num_workers: Optional[str] = typer.Option(
        None, "-nw", "--num-workers", help="New cluster number of workers"
    ),
    python3: bool = typer.Option(False, "-p3", "--python3", help="Enables Python3"),
    node_type: Optional[str] = typer.Option(
        None,
        "-nt",
        "--node-type",
        help="Node type for driver and workers. Default value: Standard_D3_v2",
    ),
    runtime_version: Optional[str] = typer.Option(
        None,
        "-rv",
        "--runtime-version",
        help="Runtime version. Default value: 4.2.x-scala2.11",
    ),
    table_access_control: bool = typer.Option(
        False, "-tac", "--table-access-control", help="Enable table access control"
    ),
    job_name: Optional[str] = typer.Option(None, "-n", "--job-name", help="Job name"),
    jar_main_class: Optional[str] = typer.Option(
        None, "-jmc", "--jar-main-class", help="Main class full name"
    ),
    jar_path: Optional[List[str]] = typer.Option(
        None,
        "-jpath",
        "--jar-path",
        help="Path to jars (either use semicolon delimited list, or specify multiple option)",
    ),
    notebook_path: Optional[str] = typer.Option(
        None, "-npath", "--notebook-path", help="Path to notebook"
    ),
    wait: bool = typer.Option(False, "-w", "--wait", help="Wait for job to complete"),
) -> None:
    """
    Creates a job.

    Runs a JAR (--jar-main-class) or a notebook (--notebook-path) on an
    existing cluster or on a new cluster sized with --auto-scale or
    --num-workers.

    Examples:
        adbcli job create -n etl -npath /Shared/etl -nw 2 date=2018-07-01
        adbcli job create -n spark -jmc com.acme.Main -jpath dbfs:/a.jar -as 2-8 -w
    """
    try:
        settings = _build_settings(
            args, existing_cluster_id, auto_scale, num_workers, python3, node_type,
            runtime_version, table_access_control, job_name, jar_main_class, jar_path,
            notebook_path,
        )
    except ApplicationError as e:
        fail(e.message)

    exit_code = asyncio.run(_create(settings, wait))
    if exit_code:
        raise typer.Exit(exit_code)


async def _create(settings: JobSettings, wait: bool) -> int:
    """Async implementation of create command."""
    try:
        service = get_api_service()

        info(f"Submitting job {settings.name}")
        job_id = await service.create_job(settings)
        info(f"Job submitted with Id {job_id}")

        if not wait:
            return 0

        state = await service.run_now(job_id)
        return report_run_state(state)

    except COMMAND_ERRORS as e:
        log_with_source(logger, "cli", "error", "Job create failed", error=str(e))
        error(describe_error(e))
        return EXIT_FAILURE

    finally:
        await close_databricks_client()


@app.command()
def run(
    job_id: int = typer.Argument(..., help="Job id"),
    wait: bool = typer.Option(False, "-w", "--wait", help="Wait for the run to complete"),
) -> None:
    """
    Runs an existing job now.

    Examples:
        adbcli job run 42 --wait
    """
    exit_code = asyncio.run(_run(job_id, wait))
    if exit_code:
        raise typer.Exit(exit_code)


async def _run(job_id: int, wait: bool) -> int:
    """Async implementation of run command."""
    try:
        service = get_api_service()
        if wait:
            state = await service.run_now(job_id)
            return report_run_state(state)

        run = await get_databricks_client().jobs.run_now(job_id)
        info(f"Run started with Id {run.run_id}")
        return 0

    except COMMAND_ERRORS as e:
        error(describe_error(e))
        return EXIT_FAILURE

    finally:
        await close_databricks_client()


@app.command("list")
def list_jobs() -> None:
    """Lists jobs in the workspace."""
    asyncio.run(_list())


async def _list() -> None:
    try:
        jobs = await get_databricks_client().jobs.list()

        table = Table(title="Jobs", show_header=True)
        table.add_column("Job Id", style="cyan")
        table.add_column("Name")
        table.add_column("Creator")
        for job in jobs:
            name = job.settings.name if job.settings else None
            table.add_row(str(job.job_id), name or "-", job.creator_user_name or "-")
        console.print(table)

    except COMMAND_ERRORS as e:
        fail(describe_error(e))

    finally:
        await close_databricks_client()


@app.command()
def get(job_id: int = typer.Argument(..., help="Job id")) -> None:
    """Shows the settings of a job as JSON."""
    asyncio.run(_get(job_id))


async def _get(job_id: int) -> None:
    try:
        job = await get_databricks_client().jobs.get(job_id)
        console.print_json(data=job.model_dump(mode="json", exclude_none=True))

    except COMMAND_ERRORS as e:
        fail(describe_error(e))

    finally:
        await close_databricks_client()


@app.command()
def delete(job_id: int = typer.Argument(..., help="Job id")) -> None:
    """Deletes a job."""
    asyncio.run(_delete(job_id))


async def _delete(job_id: int) -> None:
    try:
        await get_databricks_client().jobs.delete(job_id)
        info(f"Job {job_id} deleted")

    except COMMAND_ERRORS as e:
        fail(describe_error(e))

    finally:
        await close_databricks_client()
