# coding: utf-8
"""Low level HTTP connection to the CDN."""

from __future__ import annotations

import logging
import os
import threading
from typing import Dict, Optional, Union

import httpx

from fsdk.errors import NetworkError
from fsdk.io.credentials import DEFAULT_CDN_URL, _normalize_url
from fsdk.io.network_exceptions import (
    extract_error_message,
    process_requests_exception,
    process_unhandled_request,
    translate_httpx_exception,
)

logger = logging.getLogger(__name__)


class _Api:
    """
    Connection to the CDN which allows the SDK to communicate with the backend.
    """

    def __init__(
        self,
        cdn_address: Optional[str] = None,
        retry_count: Optional[int] = 10,
        retry_sleep_sec: Optional[float] = None,
        timeout: httpx._types.TimeoutTypes = 60,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._cdn_address = _normalize_url(cdn_address or DEFAULT_CDN_URL)
        self._headers = {}
        self._additional_headers = {}

        # logger
        self.logger = logger

        # retry settings
        self._retry_count = retry_count
        if self._retry_count is None:
            self._retry_count = int(os.getenv("FSDK_RETRY_COUNT", 10))
        self._retry_sleep_sec = retry_sleep_sec
        if self._retry_sleep_sec is None:
            self._retry_sleep_sec = float(os.getenv("FSDK_RETRY_SLEEP_SEC", 1))

        # httpx client
        self._timeout = timeout
        self._transport = transport
        self._httpx_client: Optional[httpx.Client] = None
        self._client_lock = threading.Lock()

    @property
    def cdn_address(self) -> str:
        """
        Get CDN address.

        :return: CDN address without a trailing slash.
        :rtype: :class:`str`
        """
        return self._cdn_address

    def get_httpx(
        self,
        method: str,
        params: Optional[httpx._types.QueryParamTypes] = None,
        retries: Optional[int] = None,
        raise_error: Optional[bool] = False,
        timeout: Optional[httpx._types.TimeoutTypes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """
        Performs GET request to server with given parameters.

        :param method: Path relative to the CDN address.
        :type method: str
        :param params: URL query parameters.
        :type params: httpx._types.QueryParamTypes, optional
        :param retries: The number of attempts to connect to the server.
        :type retries: int, optional
        :param raise_error: Raise the first error instead of retrying.
        :type raise_error: bool, optional
        :param timeout: Overall timeout for the request.
        :type timeout: float, optional
        :return: Response object
        :rtype: :class:`httpx.Response`
        """
        return self._request_httpx(
            "GET",
            method,
            params=params,
            retries=retries,
            raise_error=raise_error,
            timeout=timeout,
            headers=headers,
        )

    def post_httpx(
        self,
        method: str,
        json: Optional[Dict] = None,
        content: Union[str, bytes, None] = None,
        params: Optional[httpx._types.QueryParamTypes] = None,
        retries: Optional[int] = None,
        raise_error: Optional[bool] = False,
        timeout: Optional[httpx._types.TimeoutTypes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """
        Performs POST request to server with given parameters.

        :param method: Path relative to the CDN address.
        :type method: str
        :param json: Dictionary to send in the body of request.
        :type json: dict, optional
        :param content: Raw body.
        :type content: str or bytes, optional
        :param params: URL query parameters.
        :type params: httpx._types.QueryParamTypes, optional
        :param retries: The number of attempts to connect to the server.
        :type retries: int, optional
        :param raise_error: Raise the first error instead of retrying.
        :type raise_error: bool, optional
        :param timeout: Overall timeout for the request.
        :type timeout: float, optional
        :return: Response object
        :rtype: :class:`httpx.Response`
        """
        return self._request_httpx(
            "POST",
            method,
            json=json,
            content=content,
            params=params,
            retries=retries,
            raise_error=raise_error,
            timeout=timeout,
            headers=headers,
        )

    def _request_httpx(
        self,
        verb: str,
        method: str,
        retries: Optional[int] = None,
        raise_error: Optional[bool] = False,
        timeout: Optional[httpx._types.TimeoutTypes] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ) -> httpx.Response:
        self._set_client()

        if retries is None:
            retries = self._retry_count
        retries = max(int(retries), 1)
        if timeout is None:
            timeout = self._timeout

        url = self._prepare_url(method)
        logger.info(f"{verb} {url}")

        if headers is None:
            headers = {**self._headers, **self._additional_headers}
        else:
            headers = {**self._headers, **self._additional_headers, **headers}

        response = None
        for retry_idx in range(retries):
            response = None
            try:
                response = self._httpx_client.request(
                    verb, url, headers=headers, timeout=timeout, **kwargs
                )
                if not response.is_success:
                    _Api._raise_for_status_httpx(response)
                return response
            except (httpx.RequestError, httpx.HTTPStatusError) as exc:
                if raise_error:
                    raise translate_httpx_exception(exc) from exc
                process_requests_exception(
                    self.logger,
                    exc,
                    verb,
                    url,
                    verbose=True,
                    swallow_exc=retry_idx + 1 < retries,
                    sleep_sec=min(self._retry_sleep_sec * (2**retry_idx), 60),
                    response=response,
                    retry_info={"retry_idx": retry_idx + 1, "retry_limit": retries},
                )
            except Exception as exc:
                process_unhandled_request(self.logger, exc)
        raise NetworkError(f"Retry limit exceeded ({url})")

    def _prepare_url(self, method: str) -> str:
        """
        Prepares the CDN endpoint URL.
        """
        return f"{self._cdn_address}/{method.lstrip('/')}"

    @staticmethod
    def _raise_for_status_httpx(response: httpx.Response):
        """
        Raise error and show message with error code if the response is not a success.
        :param response: Response class object
        """
        reason = getattr(response, "reason_phrase", None) or "Can't get reason"

        if 400 <= response.status_code < 500:
            kind = "Client Error"
        elif 500 <= response.status_code < 600:
            kind = "Server Error"
        else:
            kind = "Unexpected Status"

        http_error_msg = "%s %s: %s for url: %s (%s)" % (
            response.status_code,
            kind,
            reason,
            response.url,
            _Api.parse_error(response),
        )
        raise httpx.HTTPStatusError(
            message=http_error_msg, response=response, request=response.request
        )

    @staticmethod
    def parse_error(response: httpx.Response) -> str:
        """
        Processes error from response.

        :param response: Response object.
        :type response: httpx.Response
        :return: Message sent by the backend, or the reason phrase.
        :rtype: :class:`str`
        """
        return extract_error_message(response)

    def _set_client(self):
        """
        Set sync httpx client with HTTP/2 if it is not set yet.
        """
        if self._httpx_client is not None:
            return
        # executor threads may race here
        with self._client_lock:
            if self._httpx_client is None:
                self._httpx_client = httpx.Client(http2=True, transport=self._transport)

    def close(self):
        with self._client_lock:
            if self._httpx_client is not None:
                self._httpx_client.close()
                self._httpx_client = None
