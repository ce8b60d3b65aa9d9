from typing import TYPE_CHECKING, Any

from pydantic import Field, PrivateAttr

from fsdk.dto.base import BaseInfo
from fsdk.io.url import join_path

if TYPE_CHECKING:
    from fsdk.api.api import Api
    from fsdk.transforms.image_transform import ImageTransform


class FileLink(BaseInfo):
    """Reference to a file stored on the backend."""

    handle: str = Field(..., min_length=1, description="Handle of the stored file")

    _api: Any = PrivateAttr(default=None)

    @classmethod
    def bind(cls, api: "Api", handle: str) -> "FileLink":
        link = cls(handle=handle)
        link._api = api
        return link

    @property
    def api(self) -> "Api":
        if self._api is None:
            raise RuntimeError(f"FileLink {self.handle!r} is not bound to a client")
        return self._api

    @property
    def cdn_url(self) -> str:
        return f"{self.api.cdn_address}/{join_path(self.handle)}"

    def image_transform(self) -> "ImageTransform":
        """Start a transform chain over this file."""
        from fsdk.transforms.image_transform import ImageTransform

        return ImageTransform.from_file(self)

    def get_content(self) -> bytes:
        """Download the stored file."""
        return self.api.get_httpx(join_path(self.handle)).content
