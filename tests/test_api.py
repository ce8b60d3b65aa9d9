"""
Tests for the client and its HTTP layer.
"""

import httpx
import pytest

from fsdk.api.api import Api
from fsdk.errors import HttpError, NetworkError
from fsdk.io.network_exceptions import extract_error_message


def test_file_link(api):
    link = api.file("HANDLE")
    assert link.handle == "HANDLE"
    assert link.api is api
    assert link.cdn_url == "https://cdn.test/HANDLE"


def test_get_content_retries_transient_errors(api, cdn):
    cdn.respond(
        httpx.Response(503),
        httpx.ConnectError("reset"),
        httpx.Response(200, content=b"image-bytes"),
    )

    assert api.file("HANDLE").get_content() == b"image-bytes"
    assert len(cdn.requests) == 3


def test_get_content_does_not_retry_client_errors(api, cdn):
    cdn.respond(httpx.Response(404, json={"error": "File not found"}))

    with pytest.raises(HttpError) as exc_info:
        api.file("HANDLE").get_content()

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "File not found"
    assert len(cdn.requests) == 1


def test_retry_limit(api, cdn):
    cdn.respond(*[httpx.ConnectError("down") for _ in range(3)])

    with pytest.raises(NetworkError):
        api.file("HANDLE").get_content()
    assert len(cdn.requests) == 3


def test_zero_retries_still_sends_one_request(cdn):
    with Api(retry_count=0, transport=httpx.MockTransport(cdn.handler)) as api:
        cdn.respond(httpx.Response(200, content=b"data"))
        assert api.file("HANDLE").get_content() == b"data"
    assert len(cdn.requests) == 1


def test_file_link_has_no_metadata(api):
    assert "metadata" not in type(api.file("HANDLE")).model_fields


def test_transform_get_content(api, cdn):
    cdn.respond(httpx.Response(200, content=b"png"))
    transform = api.image_transform("https://example.com/a.jpg")

    assert transform.get_content() == b"png"
    assert cdn.requests[0].url.path == "/APIKEY/https://example.com/a.jpg"


def test_close_releases_resources(cdn):
    with Api(api_key="k", transport=httpx.MockTransport(cdn.handler)) as api:
        executor = api.executor
        assert api.executor is executor
    assert api._executor is None
    assert api._httpx_client is None


def test_default_cdn_address():
    assert Api().cdn_address == "https://cdn.filestackcontent.com"
    assert Api(cdn_address="cdn.local/").cdn_address == "https://cdn.local"


def test_from_env(monkeypatch, tmp_path):
    env_file = tmp_path / "fsdk.env"
    env_file.write_text("FSDK_API_KEY=from-file\nFSDK_CDN_URL=https://cdn.env\n")
    monkeypatch.setenv("FSDK_ENV_FILE", str(env_file))
    for name in ("FSDK_API_KEY", "FSDK_CDN_URL"):
        # setenv first so the values loaded from the file are undone after the test
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setenv("FSDK_RETRY_COUNT", "2")

    api = Api.from_env()

    assert api.api_key == "from-file"
    assert api.cdn_address == "https://cdn.env"
    assert api._retry_count == 2


def test_from_env_requires_api_key(monkeypatch, tmp_path):
    monkeypatch.setenv("FSDK_ENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.setenv("FSDK_API_KEY", "")

    with pytest.raises(ValueError):
        Api.from_env()


@pytest.mark.parametrize(
    "response, expected",
    [
        (httpx.Response(400, json={"details": {"message": "bad width"}}), "bad width"),
        (httpx.Response(400, json={"message": "bad task", "error": "x"}), "bad task"),
        (httpx.Response(400, json={"error": "bad handle"}), "bad handle"),
        (httpx.Response(400, text="plain text"), "plain text"),
        (httpx.Response(404), "Not Found"),
    ],
)
def test_extract_error_message(response, expected):
    assert extract_error_message(response) == expected


if __name__ == "__main__":
    pytest.main()
