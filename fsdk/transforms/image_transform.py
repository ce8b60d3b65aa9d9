"""
Image transformations: debug a chain, or store its result as a new file.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

import httpx

from fsdk.dto.file import FileLink
from fsdk.dto.responses import StoreResponse
from fsdk.dto.storage import StorageOptions
from fsdk.errors import EmptyBodyError, InvalidArgumentError
from fsdk.transforms.source import HandleSource, UrlSource
from fsdk.transforms.task import TransformTask
from fsdk.transforms.transform import Transform

if TYPE_CHECKING:
    from fsdk.api.api import Api

logger = logging.getLogger(__name__)


def _json_body(response: httpx.Response) -> Any:
    if not response.content:
        raise EmptyBodyError(f"Empty body in response from {response.url}")
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise EmptyBodyError(f"Unreadable body in response from {response.url}") from e
    if body is None:
        raise EmptyBodyError(f"Empty body in response from {response.url}")
    return body


class ImageTransform(Transform):
    """Transform chain for image files."""

    @classmethod
    def from_file(cls, file: FileLink) -> "ImageTransform":
        return cls(file.api, HandleSource(file.handle))

    @classmethod
    def from_url(cls, api: "Api", url: str) -> "ImageTransform":
        return cls(api, UrlSource(url))

    def add_task(self, task: Optional[TransformTask]) -> "ImageTransform":
        """
        Add a new transformation to the chain. Tasks are executed in the order they are added.

        :param task: Task to append.
        :type task: TransformTask
        :return: This transform, so calls can be chained.
        :raises InvalidArgumentError: If ``task`` is None.
        """
        if task is None:
            raise InvalidArgumentError("Cannot add null task to image transform")
        self._append(task)
        return self

    def debug(self) -> Dict[str, Any]:
        """
        Debugs the transformation as built so far, returning the backend's report.

        :raises HttpError: On error response from backend.
        :raises NetworkError: On network failure or empty body.
        """
        tasks = self.tasks_string()
        cdn = self._api.cdn
        if isinstance(self._source, UrlSource):
            response = cdn.transform_debug_ext(self._api.api_key, tasks, self._source.url)
        else:
            response = cdn.transform_debug(tasks, self._source.handle)
        return _json_body(response)

    def store(self, options: Optional[StorageOptions] = None) -> FileLink:
        """
        Stores the result of the transformation into a new file.

        The storage task is appended to this chain, so a second call stores with
        both storage tasks in place.

        :param options: Where and how the file is stored. Defaults to :class:`StorageOptions`.
        :return: Link to the new file.
        :raises HttpError: On error response from backend.
        :raises NetworkError: On network failure or empty body.
        :raises MappingError: If the response does not identify the new file.
        """
        if options is None:
            options = StorageOptions()
        self._append(options.as_task())

        tasks = self.tasks_string()
        cdn = self._api.cdn
        if isinstance(self._source, UrlSource):
            response = cdn.transform_store_ext(self._api.api_key, tasks, self._source.url)
        else:
            response = cdn.transform_store(tasks, self._source.handle)

        body = StoreResponse.from_json(_json_body(response))
        handle = body.get_handle()
        logger.info(f"Stored transform result as {handle}")
        return FileLink.bind(self._api, handle)

    # --- Async ----------------------------------------------------
    async def debug_async(self) -> Dict[str, Any]:
        """Async version of :meth:`debug`, run on the client's worker executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._api.executor, self.debug)

    async def store_async(self, options: Optional[StorageOptions] = None) -> FileLink:
        """Async version of :meth:`store`, run on the client's worker executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._api.executor, self.store, options)
