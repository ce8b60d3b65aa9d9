"""
Base class for transform chains.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from fsdk.io.url import join_path, quote_segment
from fsdk.transforms.source import Source, UrlSource
from fsdk.transforms.task import TransformTask

if TYPE_CHECKING:
    from fsdk.api.api import Api

logger = logging.getLogger(__name__)

TASK_DELIMITER = "/"


class Transform:
    """
    Ordered chain of tasks applied server-side, left to right, to a single source.

    A chain belongs to one request and is not thread-safe.
    """

    def __init__(self, api: "Api", source: Source):
        self._api = api
        self._source = source
        self._tasks: List[TransformTask] = []

    @property
    def api(self) -> "Api":
        return self._api

    @property
    def source(self) -> Source:
        return self._source

    @property
    def tasks(self) -> List[TransformTask]:
        """Copy of the tasks added so far."""
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def _append(self, task: TransformTask) -> None:
        self._tasks.append(task)
        logger.debug(f"Added task {task.name!r} to transform ({len(self._tasks)} tasks)")

    def tasks_string(self) -> str:
        return TASK_DELIMITER.join(task.to_string() for task in self._tasks)

    def url(self) -> str:
        """CDN url rendering the transform as built so far."""
        return f"{self._api.cdn_address}/{self._source_path(self.tasks_string())}"

    def get_content(self) -> bytes:
        """Fetch the transformed asset."""
        return self._api.get_httpx(self._source_path(self.tasks_string())).content

    def _source_path(self, tasks: Optional[str]) -> str:
        if isinstance(self._source, UrlSource):
            return join_path(self._api.api_key, tasks, quote_segment(self._source.url))
        return join_path(tasks, self._source.handle)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(source={self._source!r}, tasks={self.tasks_string()!r})"
