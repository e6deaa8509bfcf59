"""Workspace Schemas."""

from enum import Enum

from adbcli.schemas.base import ApiModel


class ObjectType(str, Enum):
    """The type of the object in workspace."""

    NOTEBOOK = "NOTEBOOK"
    DIRECTORY = "DIRECTORY"
    LIBRARY = "LIBRARY"
    FILE = "FILE"
    REPO = "REPO"


class Language(str, Enum):
    """Notebook language."""

    SCALA = "SCALA"
    PYTHON = "PYTHON"
    SQL = "SQL"
    R = "R"


class ObjectInfo(ApiModel):
    object_type: ObjectType
    path: str
    language: Language | None = None
