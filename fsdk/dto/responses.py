from typing import Any, Dict, Optional

from pydantic import Field, ValidationError

from fsdk.dto.base import BaseInfo
from fsdk.errors import MappingError
from fsdk.io.url import parse_handle_from_url


class StoreResponse(BaseInfo):
    """Body returned by the store endpoints."""

    url: str = Field(..., description="CDN url of the stored file")
    handle: Optional[str] = Field(default=None, description="Handle of the stored file")
    size: Optional[int] = Field(default=None, description="Size of the stored file in bytes")
    type: Optional[str] = Field(default=None, description="Mimetype of the stored file")
    filename: Optional[str] = Field(default=None, description="Name of the stored file")
    container: Optional[str] = Field(default=None, description="Storage container")
    key: Optional[str] = Field(default=None, description="Key in the storage container")

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "StoreResponse":
        if not isinstance(data, dict):
            raise MappingError(f"Store response must be a JSON object, got {type(data).__name__}")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise MappingError(f"Malformed store response: {e}") from e

    def get_handle(self) -> str:
        """Handle of the new file, preferring the dedicated field over the url."""
        if self.handle:
            return self.handle
        return parse_handle_from_url(self.url)
