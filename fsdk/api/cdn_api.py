from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from fsdk.io.url import join_path, quote_segment

if TYPE_CHECKING:
    from fsdk.api.api import Api


class CdnApi:
    """
    Transform endpoints of the CDN.

    Each endpoint has a variant for files stored on the backend (addressed by
    handle) and an "external" variant for remote urls (addressed by api key + url).
    Every call is made exactly once; failures surface as fsdk errors.
    """

    DEBUG_PREFIX = "debug"

    def __init__(self, api: "Api"):
        self._api = api

    def transform_debug(self, tasks: str, handle: str) -> httpx.Response:
        # the handle-based debug endpoint is not keyed
        method = join_path(self.DEBUG_PREFIX, tasks, handle)
        return self._api.get_httpx(method, retries=1, raise_error=True)

    def transform_debug_ext(self, api_key: str, tasks: str, url: str) -> httpx.Response:
        method = join_path(api_key, self.DEBUG_PREFIX, tasks, quote_segment(url))
        return self._api.get_httpx(method, retries=1, raise_error=True)

    def transform_store(self, tasks: str, handle: str) -> httpx.Response:
        method = join_path(tasks, handle)
        return self._api.post_httpx(method, retries=1, raise_error=True)

    def transform_store_ext(self, api_key: str, tasks: str, url: str) -> httpx.Response:
        method = join_path(api_key, tasks, quote_segment(url))
        return self._api.post_httpx(method, retries=1, raise_error=True)
