"""
Exception taxonomy raised by the SDK.

Callers branch on the error kind:

* :class:`HttpError` - the backend rejected the request (carries status and message);
* :class:`NetworkError` - no usable response was received (transient, retry is up to the caller);
* :class:`InvalidArgumentError` / :class:`MappingError` - client misuse or a malformed backend payload.
"""

from __future__ import annotations

from typing import Optional

import httpx


class FsdkError(Exception):
    """Base class for every error raised by fsdk."""


class InvalidArgumentError(FsdkError, ValueError):
    """Raised when an SDK method receives an argument it cannot accept."""


class HttpError(FsdkError):
    """Raised on a non-success HTTP status from the backend."""

    def __init__(
        self,
        status_code: int,
        message: str,
        response: Optional[httpx.Response] = None,
    ):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.response = response


class NetworkError(FsdkError, IOError):
    """Raised when the request did not produce a usable response."""


class EmptyBodyError(NetworkError):
    """Raised when a successful response carries no body to map."""


class MappingError(FsdkError, ValueError):
    """Raised when a response body cannot be mapped to a domain object."""
