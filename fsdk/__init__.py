"""
Public package interface for the fsdk SDK.

The client (`Api`) references stored files (`FileLink`) and builds image
transform chains (`ImageTransform`) out of `TransformTask` steps.
"""

from __future__ import annotations

from fsdk.api.api import Api
from fsdk.dto.file import FileLink
from fsdk.dto.responses import StoreResponse
from fsdk.dto.storage import StorageOptions
from fsdk.errors import (
    EmptyBodyError,
    FsdkError,
    HttpError,
    InvalidArgumentError,
    MappingError,
    NetworkError,
)
from fsdk.transforms.image_transform import ImageTransform
from fsdk.transforms.source import HandleSource, UrlSource
from fsdk.transforms.task import ImageTransformTask, TransformTask

__all__ = [
    "Api",
    "FileLink",
    "StoreResponse",
    "StorageOptions",
    "ImageTransform",
    "ImageTransformTask",
    "TransformTask",
    "HandleSource",
    "UrlSource",
    "FsdkError",
    "InvalidArgumentError",
    "HttpError",
    "NetworkError",
    "EmptyBodyError",
    "MappingError",
]
