"""DBFS Schemas."""

import base64
from typing import Any

from pydantic import Field, field_validator

from adbcli.schemas.base import ApiModel


class FileHandle(ApiModel):
    """Handle of an open streaming upload (create -> add-block* -> close)."""

    handle: int


class FileInfo(ApiModel):
    path: str
    is_dir: bool = False
    file_size: int = 0


class FileReadBlock(ApiModel):
    """One block returned by dbfs/read. `data` arrives base64-encoded."""

    bytes_read: int = Field(default=0, ge=0)
    data: bytes = b""

    @field_validator("data", mode="before")
    @classmethod
    def _decode_data(cls, value: Any) -> Any:
        if isinstance(value, str):
            return base64.b64decode(value)
        return value
