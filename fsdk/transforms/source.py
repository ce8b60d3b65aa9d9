"""
What a transform is applied to: a remote url or a file already stored on the backend.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from fsdk.errors import InvalidArgumentError


@dataclass(frozen=True)
class UrlSource:
    url: str

    def __post_init__(self):
        if not self.url:
            raise InvalidArgumentError("Source url must be a non-empty string")


@dataclass(frozen=True)
class HandleSource:
    handle: str

    def __post_init__(self):
        if not self.handle:
            raise InvalidArgumentError("Source handle must be a non-empty string")


Source = Union[UrlSource, HandleSource]
