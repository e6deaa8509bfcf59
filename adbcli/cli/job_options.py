"""
Job Create Options.

Turns `job create` command-line values into JobSettings. Exactly one task
kind (JAR or notebook) and exactly one cluster source (existing cluster or
new-cluster sizing) must be given; anything else raises ValidationError.
"""

import re
from collections.abc import Iterable, Sequence

from adbcli.core.exceptions import ValidationError
from adbcli.schemas.clusters import ClusterInfo, NodeTypes, RuntimeVersions
from adbcli.schemas.jobs import JobSettings

TASK_REQUIRED_MESSAGE = "Must specify one of --jar-main-class and --notebook-path."
CLUSTER_SIZE_REQUIRED_MESSAGE = (
    "Must specify one of --auto-scale and --num-workers "
    "when --existing-cluster-id is not specified."
)

_AUTOSCALE_SEPARATORS = re.compile(r"[-~,]")


def parse_autoscale(value: str) -> tuple[int, int]:
    """
    Parse an autoscale range such as "2-8", "2~8" or "2,8".

    Returns:
        Tuple of (min_workers, max_workers).
    """
    parts = [part.strip() for part in _AUTOSCALE_SEPARATORS.split(value.strip())]
    if len(parts) != 2:
        raise ValidationError(f"Invalid --auto-scale value {value!r}, expected min-max.")
    try:
        min_workers, max_workers = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValidationError(
            f"Invalid --auto-scale value {value!r}, min and max must be integers."
        ) from None
    if min_workers < 0 or max_workers < min_workers:
        raise ValidationError(
            f"Invalid --auto-scale value {value!r}, expected 0 <= min <= max."
        )
    return min_workers, max_workers


def parse_num_workers(value: str) -> int:
    try:
        num_workers = int(value)
    except ValueError:
        raise ValidationError(f"Invalid --num-workers value {value!r}, expected an integer.") from None
    if num_workers < 0:
        raise ValidationError("--num-workers must not be negative.")
    return num_workers


def split_jar_paths(values: Iterable[str] | None) -> list[str]:
    """Flatten repeated --jar-path values, each of which may be ;-delimited."""
    paths: list[str] = []
    for value in values or ():
        paths.extend(path for path in value.split(";") if path)
    return paths


def parse_notebook_params(args: Iterable[str] | None) -> dict[str, str]:
    """Parse trailing key=value arguments. Values may contain '='."""
    params: dict[str, str] = {}
    for arg in args or ():
        key, sep, value = arg.partition("=")
        if not sep or not key:
            raise ValidationError(f"Invalid notebook parameter {arg!r}, expected key=value.")
        params[key] = value
    return params


def build_job_settings(
    job_name: str | None,
    jar_main_class: str | None,
    jar_paths: Iterable[str] | None,
    notebook_path: str | None,
    args: Sequence[str] | None,
) -> JobSettings:
    """
    Build job settings for a JAR or notebook task.

    The JAR task takes precedence when both are given. Trailing args become
    JAR parameters, or key=value notebook parameters.
    """
    if jar_main_class:
        return JobSettings.new_spark_jar_job(
            job_name,
            jar_main_class,
            list(args or ()),
            split_jar_paths(jar_paths),
        )
    if notebook_path:
        return JobSettings.new_notebook_job(
            job_name,
            notebook_path,
            parse_notebook_params(args),
        )
    raise ValidationError(TASK_REQUIRED_MESSAGE)


def build_new_cluster(
    auto_scale: str | None,
    num_workers: str | None,
    python3: bool = False,
    node_type: str | None = None,
    runtime_version: str | None = None,
    table_access_control: bool = False,
    default_node_type: str = NodeTypes.STANDARD_D3_V2,
    default_runtime_version: str = RuntimeVersions.RUNTIME_4_2_SCALA_2_11,
) -> ClusterInfo:
    """Build a new-cluster definition. Autoscale wins over a fixed worker count."""
    cluster = ClusterInfo.new_cluster_configuration()
    if auto_scale:
        cluster = cluster.with_autoscale(*parse_autoscale(auto_scale))
    elif num_workers:
        cluster = cluster.with_num_workers(parse_num_workers(num_workers))
    else:
        raise ValidationError(CLUSTER_SIZE_REQUIRED_MESSAGE)

    return (
        cluster
        .with_python3(python3)
        .with_node_type(node_type or default_node_type)
        .with_runtime_version(runtime_version or default_runtime_version)
        .with_table_access_control(table_access_control)
    )


def attach_cluster(
    settings: JobSettings,
    existing_cluster_id: str | None,
    new_cluster: ClusterInfo | None,
) -> JobSettings:
    """Point the job at an existing cluster, or at a new-cluster definition."""
    if existing_cluster_id:
        settings.existing_cluster_id = existing_cluster_id
        settings.new_cluster = None
    elif new_cluster is not None:
        settings.new_cluster = new_cluster
        settings.existing_cluster_id = None
    else:
        raise ValidationError(CLUSTER_SIZE_REQUIRED_MESSAGE)
    return settings
