"""
REST API Schemas.

Pydantic models for request bodies and responses.
"""

from adbcli.schemas.clusters import AutoScale, ClusterInfo, NodeTypes, RuntimeVersions
from adbcli.schemas.dbfs import FileHandle, FileInfo, FileReadBlock
from adbcli.schemas.jobs import (
    Job,
    JobSettings,
    Library,
    NotebookTask,
    Run,
    RunIdentifier,
    RunLifeCycleState,
    RunResultState,
    RunState,
    SparkJarTask,
)
from adbcli.schemas.workspace import Language, ObjectInfo, ObjectType

__all__ = [
    "AutoScale",
    "ClusterInfo",
    "FileHandle",
    "FileInfo",
    "FileReadBlock",
    "Job",
    "JobSettings",
    "Language",
    "Library",
    "NodeTypes",
    "NotebookTask",
    "ObjectInfo",
    "ObjectType",
    "Run",
    "RunIdentifier",
    "RunLifeCycleState",
    "RunResultState",
    "RunState",
    "RuntimeVersions",
    "SparkJarTask",
]
