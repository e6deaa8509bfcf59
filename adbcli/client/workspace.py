"""Workspace API Client."""

from adbcli.client.base import ApiClient
from adbcli.schemas.workspace import ObjectInfo


class WorkspaceApiClient:
    """Client for the Workspace API (workspace/*)."""

    def __init__(self, api: ApiClient):
        self._api = api

    async def list(self, path: str) -> list[ObjectInfo]:
        """List notebooks, directories and libraries under path."""
        response = await self._api.get("workspace/list", params={"path": path})
        return [ObjectInfo.model_validate(item) for item in response.get("objects", [])]

    async def get_status(self, path: str) -> ObjectInfo:
        response = await self._api.get("workspace/get-status", params={"path": path})
        return ObjectInfo.model_validate(response)

    async def mkdirs(self, path: str) -> None:
        await self._api.post("workspace/mkdirs", json={"path": path})

    async def delete(self, path: str, recursive: bool) -> None:
        await self._api.post("workspace/delete", json={"path": path, "recursive": recursive})
