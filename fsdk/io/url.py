from typing import List, Optional
from urllib.parse import quote

from fsdk.errors import MappingError

MIN_STORE_URL_SEGMENTS = 4


def quote_segment(value: str) -> str:
    """Percent-escape a value so it can be embedded as a single URL path segment."""
    return quote(value, safe="")


def join_path(*parts: Optional[str]) -> str:
    """
    Join path parts with ``/``, skipping empty ones.

    ``join_path("debug", "", "abc")`` gives ``"debug/abc"``.
    """
    return "/".join(part.strip("/") for part in parts if part)


def split_url(url: str) -> List[str]:
    return url.split("/")


def parse_handle_from_url(url: Optional[str]) -> str:
    """
    Extracts the file handle from a CDN url returned by the store endpoint.
    Supports https://cdn.host/HANDLE and https://cdn.host/prefix/HANDLE.
    """
    if not url:
        raise MappingError("Store response has no url")
    segments = split_url(url.rstrip("/"))
    if len(segments) < MIN_STORE_URL_SEGMENTS:
        raise MappingError(f"Cannot extract handle from url {url!r}: too few path segments")
    handle = segments[-1]
    if not handle:
        raise MappingError(f"Cannot extract handle from url {url!r}: empty handle")
    return handle
