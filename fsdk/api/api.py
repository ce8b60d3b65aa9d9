from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import httpx

from fsdk.api._api import _Api
from fsdk.api.cdn_api import CdnApi
from fsdk.dto.file import FileLink
from fsdk.io.credentials import ClientConfig
from fsdk.io.env import load_env
from fsdk.transforms.image_transform import ImageTransform


class Api(_Api):

    def __init__(
        self,
        api_key: Optional[str] = None,
        cdn_address: Optional[str] = None,
        retry_count: Optional[int] = 10,
        retry_sleep_sec: Optional[float] = None,
        timeout: httpx._types.TimeoutTypes = 60,
        max_workers: Optional[int] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        super().__init__(
            cdn_address=cdn_address,
            retry_count=retry_count,
            retry_sleep_sec=retry_sleep_sec,
            timeout=timeout,
            transport=transport,
        )
        self._api_key = api_key
        self._max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self.cdn = CdnApi(self)

    @property
    def api_key(self) -> str:
        """Api key sent to endpoints that transform remote urls."""
        if not self._api_key:
            raise ValueError("An api key is required to transform external urls.")
        return self._api_key

    @property
    def executor(self) -> ThreadPoolExecutor:
        """Worker pool running the async variants of blocking calls."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers, thread_name_prefix="fsdk-worker"
            )
        return self._executor

    def file(self, handle: str) -> FileLink:
        """Reference a file already stored on the backend."""
        return FileLink.bind(self, handle)

    def image_transform(self, url: str) -> ImageTransform:
        """Start a transform chain over a remote url."""
        return ImageTransform.from_url(self, url)

    def close(self):
        super().close()
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "Api":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    @classmethod
    def from_env(cls, **kwargs) -> "Api":
        """Create API client from environment variables and ``~/fsdk.env``."""
        load_env()
        config = ClientConfig()
        return cls(
            api_key=config.get_api_key(),
            cdn_address=config.get_cdn_url(),
            retry_count=config.FSDK_RETRY_COUNT,
            retry_sleep_sec=config.FSDK_RETRY_SLEEP_SEC,
            timeout=config.FSDK_TIMEOUT,
            max_workers=config.FSDK_MAX_WORKERS,
            **kwargs,
        )
