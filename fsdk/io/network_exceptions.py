"""
Helpers shared by the retry loops of the HTTP layer.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Optional

import httpx

from fsdk.errors import FsdkError, HttpError, NetworkError

RETRY_STATUS_CODES = {408, 429, 500, 502, 503, 504}


def extract_error_message(response: httpx.Response) -> str:
    """Best-effort extraction of the backend's error message."""
    try:
        data = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError, httpx.ResponseNotRead):
        data = None
    if isinstance(data, dict):
        details = data.get("details")
        if isinstance(details, dict) and details.get("message"):
            return str(details["message"])
        for field in ("message", "error"):
            if data.get(field):
                return str(data[field])
    try:
        text = response.text.strip()
    except httpx.ResponseNotRead:
        text = ""
    return text or response.reason_phrase


def translate_httpx_exception(exc: Exception) -> Exception:
    """Map an httpx exception onto the fsdk error taxonomy."""
    if isinstance(exc, FsdkError):
        return exc
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        return HttpError(response.status_code, extract_error_message(response), response)
    if isinstance(exc, httpx.RequestError):
        return NetworkError(f"{type(exc).__name__}: {exc}")
    return exc


def is_retryable(exc: Exception) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRY_STATUS_CODES
    return isinstance(exc, httpx.TransportError)


def process_requests_exception(
    external_logger: logging.Logger,
    exc: Exception,
    api_method_name: str,
    url: str,
    verbose: bool = True,
    swallow_exc: bool = False,
    sleep_sec: Optional[float] = None,
    response: Optional[httpx.Response] = None,
    retry_info: Optional[dict] = None,
) -> None:
    """
    Decide what to do with an exception caught inside a retry loop.

    Non-retryable errors are raised right away as fsdk errors. Retryable ones are
    logged and, if ``swallow_exc`` is set, the loop sleeps and tries again.
    """
    if not is_retryable(exc):
        raise translate_httpx_exception(exc) from exc

    if verbose:
        extra = {"method": api_method_name, "url": url}
        if response is not None:
            extra["status_code"] = response.status_code
        if retry_info is not None:
            extra.update(retry_info)
        external_logger.warning(
            "Retrying request %s %s after %s: %s",
            api_method_name,
            url,
            type(exc).__name__,
            exc,
            extra=extra,
        )

    if not swallow_exc:
        raise translate_httpx_exception(exc) from exc

    if sleep_sec:
        time.sleep(sleep_sec)


def process_unhandled_request(external_logger: logging.Logger, exc: Exception) -> None:
    external_logger.error("Request failed with unhandled exception", exc_info=exc)
    raise exc
