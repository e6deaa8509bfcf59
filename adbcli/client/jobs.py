"""Jobs API Client."""

from adbcli.client.base import ApiClient
from adbcli.schemas.jobs import Job, JobSettings, Run, RunIdentifier


class JobsApiClient:
    """Client for the Jobs API (jobs/*)."""

    def __init__(self, api: ApiClient):
        self._api = api

    async def create(self, settings: JobSettings) -> int:
        """Create a job. Returns the new job id."""
        response = await self._api.post("jobs/create", json=settings.to_request())
        return int(response["job_id"])

    async def run_now(
        self,
        job_id: int,
        jar_params: list[str] | None = None,
        notebook_params: dict[str, str] | None = None,
    ) -> RunIdentifier:
        """Trigger a run of an existing job."""
        body: dict = {"job_id": job_id}
        if jar_params:
            body["jar_params"] = jar_params
        if notebook_params:
            body["notebook_params"] = notebook_params
        response = await self._api.post("jobs/run-now", json=body)
        return RunIdentifier.model_validate(response)

    async def runs_get(self, run_id: int) -> Run:
        response = await self._api.get("jobs/runs/get", params={"run_id": run_id})
        return Run.model_validate(response)

    async def get(self, job_id: int) -> Job:
        response = await self._api.get("jobs/get", params={"job_id": job_id})
        return Job.model_validate(response)

    async def list(self) -> list[Job]:
        response = await self._api.get("jobs/list")
        return [Job.model_validate(item) for item in response.get("jobs", [])]

    async def delete(self, job_id: int) -> None:
        await self._api.post("jobs/delete", json={"job_id": job_id})
