"""
Base Schemas.

Common base for request and response models exchanged with the REST API.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ApiModel(BaseModel):
    """
    Base for all REST API models.

    Unknown response fields are ignored so newer service versions do not
    break parsing. Request bodies omit unset (None) fields.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_request(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible request body without None values."""
        return self.model_dump(mode="json", exclude_none=True)
