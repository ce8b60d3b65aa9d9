import threading
from typing import List, Union

import httpx
import pytest

from fsdk.api.api import Api

API_KEY = "APIKEY"
CDN_ADDRESS = "https://cdn.test"


class FakeCdn:
    """Records requests and answers them from a queue of canned responses."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.threads: List[str] = []
        self._queue: List[Union[httpx.Response, Exception]] = []

    def respond(self, *items: Union[httpx.Response, Exception]) -> None:
        self._queue.extend(items)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.threads.append(threading.current_thread().name)
        item = self._queue.pop(0) if self._queue else httpx.Response(200, json={})
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture(autouse=True)
def no_proxy_env(monkeypatch):
    # proxy mounts would bypass the mock transport
    for name in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY"):
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(name.lower(), raising=False)


@pytest.fixture
def cdn():
    return FakeCdn()


@pytest.fixture
def api(cdn):
    client = Api(
        api_key=API_KEY,
        cdn_address=CDN_ADDRESS,
        retry_count=3,
        retry_sleep_sec=0,
        transport=httpx.MockTransport(cdn.handler),
    )
    yield client
    client.close()
