"""
DBFS API Client.

Wraps the dbfs/* endpoints. Large files are streamed sequentially in blocks
of at most DBFS_BLOCK_SIZE bytes: upload via create/add-block/close,
download via repeated read calls. A failure mid-transfer aborts the whole
operation; nothing is resumed or retried.
"""

import base64
from typing import BinaryIO

from adbcli.client.base import ApiClient
from adbcli.core.logging import get_logger, log_with_source
from adbcli.schemas.dbfs import FileHandle, FileInfo, FileReadBlock

logger = get_logger(__name__)

DBFS_BLOCK_SIZE = 1024 * 1024


def _bool_form_value(value: bool) -> str:
    return "true" if value else "false"


class DbfsApiClient:
    """Client for the DBFS API (dbfs/*)."""

    def __init__(self, api: ApiClient, block_size: int = DBFS_BLOCK_SIZE):
        self._api = api
        self.block_size = block_size

    async def create(self, path: str, overwrite: bool) -> int:
        """Open a stream for writing to path. Returns the upload handle."""
        response = await self._api.post("dbfs/create", json={"path": path, "overwrite": overwrite})
        return FileHandle.model_validate(response).handle

    async def add_block(self, handle: int, data: bytes) -> None:
        """Append a block (at most 1 MiB) to the stream identified by handle."""
        await self._api.post(
            "dbfs/add-block",
            json={"handle": handle, "data": base64.b64encode(data).decode("ascii")},
        )

    async def close(self, handle: int) -> None:
        """Close the stream identified by handle."""
        await self._api.post("dbfs/close", json=FileHandle(handle=handle).to_request())

    async def upload(self, path: str, overwrite: bool, stream: BinaryIO) -> None:
        """
        Upload the content of a binary stream to path.

        Seekable streams are read from the beginning and their position is
        restored afterwards. The upload handle is only closed on success.
        """
        handle = await self.create(path, overwrite)

        seekable = stream.seekable()
        original_position = 0
        if seekable:
            original_position = stream.tell()
            stream.seek(0)

        total = 0
        try:
            while True:
                block = stream.read(self.block_size)
                if not block:
                    break
                await self.add_block(handle, block)
                total += len(block)

            await self.close(handle)
        finally:
            if seekable:
                stream.seek(original_position)

        log_with_source(logger, "api", "info", "DBFS upload finished", path=path, bytes=total)

    async def delete(self, path: str, recursive: bool) -> None:
        await self._api.post("dbfs/delete", json={"path": path, "recursive": recursive})

    async def get_status(self, path: str) -> FileInfo:
        response = await self._api.get("dbfs/get-status", params={"path": path})
        return FileInfo.model_validate(response)

    async def list(self, path: str) -> list[FileInfo]:
        """List the contents of a directory, or the file itself."""
        response = await self._api.get("dbfs/list", params={"path": path})
        return [FileInfo.model_validate(item) for item in response.get("files", [])]

    async def mkdirs(self, path: str) -> None:
        """Create a directory and any missing parents."""
        await self._api.post("dbfs/mkdirs", json={"path": path})

    async def move(self, source_path: str, destination_path: str) -> None:
        await self._api.post(
            "dbfs/move",
            json={"source_path": source_path, "destination_path": destination_path},
        )

    async def put(self, path: str, contents: bytes, overwrite: bool) -> None:
        """Upload small contents in a single multipart request."""
        await self._api.post(
            "dbfs/put",
            data={"path": path, "overwrite": _bool_form_value(overwrite)},
            files={"contents": ("contents", contents, "application/octet-stream")},
        )

    async def read(self, path: str, offset: int, length: int) -> FileReadBlock:
        """Read up to length bytes starting at offset."""
        response = await self._api.get(
            "dbfs/read",
            params={"path": path, "offset": offset, "length": length},
        )
        return FileReadBlock.model_validate(response)

    async def download(self, path: str, stream: BinaryIO) -> int:
        """
        Download path into a binary stream.

        Returns:
            Total number of bytes written.
        """
        total_bytes_read = 0
        block = await self.read(path, total_bytes_read, self.block_size)

        while block.bytes_read > 0:
            total_bytes_read += block.bytes_read
            stream.write(block.data)
            block = await self.read(path, total_bytes_read, self.block_size)

        log_with_source(
            logger, "api", "info", "DBFS download finished", path=path, bytes=total_bytes_read,
        )
        return total_bytes_read
