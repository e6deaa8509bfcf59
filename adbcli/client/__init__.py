"""
REST API Clients.

One client per API area, sharing a single async HTTP client:

    DatabricksClient.dbfs       -> DbfsApiClient
    DatabricksClient.jobs       -> JobsApiClient
    DatabricksClient.workspace  -> WorkspaceApiClient
"""

from adbcli.client.base import ApiClient
from adbcli.client.dbfs import DBFS_BLOCK_SIZE, DbfsApiClient
from adbcli.client.jobs import JobsApiClient
from adbcli.client.service import DatabricksApiService, DatabricksClient
from adbcli.client.workspace import WorkspaceApiClient

__all__ = [
    "DBFS_BLOCK_SIZE",
    "ApiClient",
    "DatabricksApiService",
    "DatabricksClient",
    "DbfsApiClient",
    "JobsApiClient",
    "WorkspaceApiClient",
]
