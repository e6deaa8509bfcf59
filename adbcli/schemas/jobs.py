"""
Job Schemas.

Job settings sent to jobs/create and run state returned by jobs/runs/get.
"""

from collections.abc import Iterable
from enum import Enum

from pydantic import Field

from adbcli.schemas.base import ApiModel
from adbcli.schemas.clusters import ClusterInfo


class SparkJarTask(ApiModel):
    main_class_name: str
    parameters: list[str] = Field(default_factory=list)


class NotebookTask(ApiModel):
    notebook_path: str
    base_parameters: dict[str, str] = Field(default_factory=dict)


class Library(ApiModel):
    """A library installed on the job cluster. Only JARs are built by the CLI."""

    jar: str | None = None
    egg: str | None = None
    whl: str | None = None


class JobSettings(ApiModel):
    """
    Settings of a job.

    Exactly one of spark_jar_task / notebook_task and one of
    existing_cluster_id / new_cluster is expected by the service.
    """

    name: str | None = None
    existing_cluster_id: str | None = None
    new_cluster: ClusterInfo | None = None
    spark_jar_task: SparkJarTask | None = None
    notebook_task: NotebookTask | None = None
    libraries: list[Library] = Field(default_factory=list)
    timeout_seconds: int | None = None
    max_retries: int | None = None
    max_concurrent_runs: int | None = None

    @classmethod
    def new_spark_jar_job(
        cls,
        name: str | None,
        main_class_name: str,
        parameters: Iterable[str],
        jar_paths: Iterable[str],
    ) -> "JobSettings":
        return cls(
            name=name,
            spark_jar_task=SparkJarTask(
                main_class_name=main_class_name,
                parameters=list(parameters),
            ),
            libraries=[Library(jar=path) for path in jar_paths],
        )

    @classmethod
    def new_notebook_job(
        cls,
        name: str | None,
        notebook_path: str,
        parameters: dict[str, str],
    ) -> "JobSettings":
        return cls(
            name=name,
            notebook_task=NotebookTask(
                notebook_path=notebook_path,
                base_parameters=dict(parameters),
            ),
        )


class Job(ApiModel):
    job_id: int
    settings: JobSettings | None = None
    creator_user_name: str | None = None
    created_time: int | None = None


class RunLifeCycleState(str, Enum):
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    TERMINATING = "TERMINATING"
    TERMINATED = "TERMINATED"
    SKIPPED = "SKIPPED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


TERMINAL_LIFE_CYCLE_STATES = frozenset({
    RunLifeCycleState.TERMINATED,
    RunLifeCycleState.SKIPPED,
    RunLifeCycleState.INTERNAL_ERROR,
})


class RunResultState(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    TIMEDOUT = "TIMEDOUT"
    CANCELED = "CANCELED"


class RunState(ApiModel):
    life_cycle_state: RunLifeCycleState
    result_state: RunResultState | None = None
    state_message: str = ""

    @property
    def is_terminal(self) -> bool:
        return self.life_cycle_state in TERMINAL_LIFE_CYCLE_STATES


class RunIdentifier(ApiModel):
    run_id: int
    number_in_job: int | None = None


class Run(ApiModel):
    run_id: int
    job_id: int | None = None
    number_in_job: int | None = None
    state: RunState
    run_page_url: str | None = None
