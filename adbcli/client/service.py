"""
Databricks Client Facade and Job Service.

DatabricksClient bundles the endpoint clients over one shared HTTP client.
DatabricksApiService implements the job flows used by the CLI:
create a job, then optionally run it and wait for a terminal state.
"""

import asyncio
from typing import Any

import httpx

from adbcli.client.base import ApiClient
from adbcli.client.dbfs import DBFS_BLOCK_SIZE, DbfsApiClient
from adbcli.client.jobs import JobsApiClient
from adbcli.client.workspace import WorkspaceApiClient
from adbcli.core.logging import get_logger, log_with_source
from adbcli.schemas.jobs import JobSettings, RunState

logger = get_logger(__name__)


class DatabricksClient:
    """
    Entry point to the REST API.

    Usage:
        async with DatabricksClient(base_url, token) as client:
            files = await client.dbfs.list("/")
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 60.0,
        user_agent: str = "adbcli",
        block_size: int = DBFS_BLOCK_SIZE,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api = ApiClient(
            base_url,
            token,
            timeout=timeout,
            user_agent=user_agent,
            transport=transport,
        )
        self.dbfs = DbfsApiClient(self.api, block_size=block_size)
        self.jobs = JobsApiClient(self.api)
        self.workspace = WorkspaceApiClient(self.api)

    async def close(self) -> None:
        await self.api.close()

    async def __aenter__(self) -> "DatabricksClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()


class DatabricksApiService:
    """Job submission and run tracking on top of DatabricksClient."""

    def __init__(self, client: DatabricksClient, poll_interval: float = 5.0):
        self._client = client
        self.poll_interval = poll_interval

    async def create_job(self, settings: JobSettings) -> int:
        job_id = await self._client.jobs.create(settings)
        log_with_source(logger, "api", "info", "Job created", job_id=job_id, name=settings.name)
        return job_id

    async def run_now(
        self,
        job_id: int,
        jar_params: list[str] | None = None,
        notebook_params: dict[str, str] | None = None,
    ) -> RunState:
        """
        Run a job now and wait until the run reaches a terminal state.

        Returns:
            The final RunState of the run.
        """
        run = await self._client.jobs.run_now(
            job_id, jar_params=jar_params, notebook_params=notebook_params,
        )
        log_with_source(logger, "api", "info", "Run started", job_id=job_id, run_id=run.run_id)
        return await self.wait_for_run(run.run_id)

    async def wait_for_run(self, run_id: int) -> RunState:
        """Poll jobs/runs/get until the run's life cycle state is terminal."""
        while True:
            run = await self._client.jobs.runs_get(run_id)
            state = run.state
            log_with_source(
                logger,
                "api",
                "debug",
                "Run state",
                run_id=run_id,
                life_cycle_state=state.life_cycle_state.value,
            )
            if state.is_terminal:
                return state
            await asyncio.sleep(self.poll_interval)
