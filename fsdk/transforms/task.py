"""
Transformation tasks.

A task is one named step of a transform chain, for example ``resize`` with
``width`` and ``height`` options. It renders itself as ``name:key=value,...``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from fsdk.errors import InvalidArgumentError
from fsdk.io.url import quote_segment


def _render_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return quote_segment(str(value))


def render_value(value: Any) -> str:
    """Render an option value in its escaped task-string form."""
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_render_scalar(item) for item in value) + "]"
    return _render_scalar(value)


@dataclass(frozen=True)
class TransformTask:
    """Immutable descriptor of a single transformation step."""

    name: str
    options: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        if not self.name:
            raise InvalidArgumentError("Task name must be a non-empty string")
        # copy so the caller's dict can't change the task afterwards
        frozen = MappingProxyType(dict(self.options or {}))
        object.__setattr__(self, "options", frozen)

    def get_option(self, key: str, default: Optional[Any] = None) -> Any:
        return self.options.get(key, default)

    def to_string(self) -> str:
        rendered = [
            f"{quote_segment(str(key))}={render_value(value)}"
            for key, value in self.options.items()
            if value is not None
        ]
        if not rendered:
            return self.name
        return f"{self.name}:{','.join(rendered)}"

    def __str__(self) -> str:
        return self.to_string()


class ImageTransformTask(TransformTask):
    """Task accepted by :class:`fsdk.transforms.image_transform.ImageTransform`."""
