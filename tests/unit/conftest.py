"""
Unit Test Fixtures.

The remote service is replaced by FakeDatabricks, an httpx.MockTransport
handler that routes requests by method and endpoint path. DBFS endpoints
are backed by an in-memory file store so chunked transfers can be checked
end to end.
"""

import base64
import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from adbcli.client.service import DatabricksClient

BASE_URL = "https://adb-test.azuredatabricks.net/api/2.0/"

Handler = Callable[[httpx.Request], httpx.Response]


class FakeDatabricks:
    """Minimal stand-in for the REST API."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Handler] = {}
        self.requests: list[httpx.Request] = []
        self.files: dict[str, bytes] = {}
        self.blocks: list[bytes] = []
        self.closed_handles: list[int] = []
        self._uploads: dict[int, tuple[str, bytearray]] = {}
        self._next_handle = 1

        self.route("POST", "dbfs/create", self._dbfs_create)
        self.route("POST", "dbfs/add-block", self._dbfs_add_block)
        self.route("POST", "dbfs/close", self._dbfs_close)
        self.route("GET", "dbfs/read", self._dbfs_read)

    def route(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method, path)] = handler

    def respond(self, method: str, path: str, body: Any = None, status_code: int = 200) -> None:
        """Answer method/path with a fixed JSON body."""
        self.route(method, path, lambda request: httpx.Response(status_code, json=body if body is not None else {}))

    def calls(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if _endpoint(r) == path]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, _endpoint(request)))
        if handler is None:
            return httpx.Response(
                404,
                json={"error_code": "ENDPOINT_NOT_FOUND", "message": f"No API found for {request.url.path}"},
            )
        return handler(request)

    def _dbfs_create(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        handle = self._next_handle
        self._next_handle += 1
        self._uploads[handle] = (body["path"], bytearray())
        return httpx.Response(200, json={"handle": handle})

    def _dbfs_add_block(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        data = base64.b64decode(body["data"])
        self.blocks.append(data)
        self._uploads[body["handle"]][1].extend(data)
        return httpx.Response(200, json={})

    def _dbfs_close(self, request: httpx.Request) -> httpx.Response:
        handle = json.loads(request.content)["handle"]
        path, data = self._uploads.pop(handle)
        self.files[path] = bytes(data)
        self.closed_handles.append(handle)
        return httpx.Response(200, json={})

    def _dbfs_read(self, request: httpx.Request) -> httpx.Response:
        params = request.url.params
        path = params["path"]
        if path not in self.files:
            return httpx.Response(
                404,
                json={"error_code": "RESOURCE_DOES_NOT_EXIST", "message": f"No file or directory exists on path {path}."},
            )
        offset, length = int(params["offset"]), int(params["length"])
        chunk = self.files[path][offset:offset + length]
        return httpx.Response(
            200,
            json={"bytes_read": len(chunk), "data": base64.b64encode(chunk).decode("ascii")},
        )


def _endpoint(request: httpx.Request) -> str:
    return request.url.path.removeprefix("/api/2.0/")


@pytest.fixture
def fake_databricks() -> FakeDatabricks:
    return FakeDatabricks()


@pytest.fixture
def make_client(fake_databricks: FakeDatabricks) -> Callable[..., DatabricksClient]:
    """Factory for clients talking to fake_databricks."""

    def _make(**kwargs: Any) -> DatabricksClient:
        return DatabricksClient(
            BASE_URL,
            "dapi-test-token-1234",
            transport=httpx.MockTransport(fake_databricks),
            **kwargs,
        )

    return _make
