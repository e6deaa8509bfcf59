"""
Cluster Schemas.

ClusterInfo describes a new job cluster. It is frozen: every with_* method
returns an updated copy, so a configuration can be built fluently:

    cluster = (
        ClusterInfo.new_cluster_configuration()
        .with_autoscale(2, 8)
        .with_python3(True)
        .with_node_type(NodeTypes.STANDARD_D3_V2)
    )
"""

from pydantic import ConfigDict, Field

from adbcli.schemas.base import ApiModel

PYSPARK_PYTHON = "PYSPARK_PYTHON"
PYTHON3_PATH = "/databricks/python3/bin/python3"

ACL_ENABLED_CONF = "spark.databricks.acl.dfAclsEnabled"
ALLOWED_LANGUAGES_CONF = "spark.databricks.repl.allowedLanguages"
TABLE_ACCESS_CONTROL_LANGUAGES = "python,sql"


class NodeTypes:
    """Common Azure VM sizes available as worker and driver nodes."""

    STANDARD_DS3_V2 = "Standard_DS3_v2"
    STANDARD_DS4_V2 = "Standard_DS4_v2"
    STANDARD_D3_V2 = "Standard_D3_v2"
    STANDARD_D4_V2 = "Standard_D4_v2"
    STANDARD_D12_V2 = "Standard_D12_v2"


class RuntimeVersions:
    """Databricks runtime (spark_version) keys."""

    RUNTIME_4_0_SCALA_2_11 = "4.0.x-scala2.11"
    RUNTIME_4_1_SCALA_2_11 = "4.1.x-scala2.11"
    RUNTIME_4_2_SCALA_2_11 = "4.2.x-scala2.11"


class AutoScale(ApiModel):
    """Autoscale range for a cluster."""

    model_config = ConfigDict(frozen=True)

    min_workers: int = Field(ge=0)
    max_workers: int = Field(ge=0)


class ClusterInfo(ApiModel):
    """Specification of a new cluster, sent as `new_cluster` in job settings."""

    model_config = ConfigDict(frozen=True)

    cluster_id: str | None = None
    cluster_name: str | None = None
    spark_version: str | None = None
    node_type_id: str | None = None
    driver_node_type_id: str | None = None
    num_workers: int | None = None
    autoscale: AutoScale | None = None
    spark_conf: dict[str, str] = Field(default_factory=dict)
    spark_env_vars: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def new_cluster_configuration(cls) -> "ClusterInfo":
        """Return an empty configuration to build on."""
        return cls()

    def with_autoscale(self, min_workers: int, max_workers: int) -> "ClusterInfo":
        """Scale between min_workers and max_workers. Clears num_workers."""
        return self.model_copy(update={
            "autoscale": AutoScale(min_workers=min_workers, max_workers=max_workers),
            "num_workers": None,
        })

    def with_num_workers(self, num_workers: int) -> "ClusterInfo":
        """Use a fixed number of workers. Clears autoscale."""
        return self.model_copy(update={"num_workers": num_workers, "autoscale": None})

    def with_python3(self, enabled: bool) -> "ClusterInfo":
        env_vars = dict(self.spark_env_vars)
        if enabled:
            env_vars[PYSPARK_PYTHON] = PYTHON3_PATH
        else:
            env_vars.pop(PYSPARK_PYTHON, None)
        return self.model_copy(update={"spark_env_vars": env_vars})

    def with_node_type(self, node_type: str) -> "ClusterInfo":
        """Use node_type for both workers and driver."""
        return self.model_copy(update={
            "node_type_id": node_type,
            "driver_node_type_id": node_type,
        })

    def with_runtime_version(self, runtime_version: str) -> "ClusterInfo":
        return self.model_copy(update={"spark_version": runtime_version})

    def with_table_access_control(self, enabled: bool) -> "ClusterInfo":
        """Toggle table ACLs, which restrict the cluster to Python and SQL."""
        conf = dict(self.spark_conf)
        if enabled:
            conf[ACL_ENABLED_CONF] = "true"
            conf[ALLOWED_LANGUAGES_CONF] = TABLE_ACCESS_CONTROL_LANGUAGES
        else:
            conf.pop(ACL_ENABLED_CONF, None)
            conf.pop(ALLOWED_LANGUAGES_CONF, None)
        return self.model_copy(update={"spark_conf": conf})

    @property
    def python3_enabled(self) -> bool:
        return self.spark_env_vars.get(PYSPARK_PYTHON) == PYTHON3_PATH

    @property
    def table_access_control_enabled(self) -> bool:
        return self.spark_conf.get(ACL_ENABLED_CONF) == "true"
