from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from fsdk.transforms.task import TransformTask

STORE_TASK_NAME = "store"


class StorageOptions(BaseModel):
    """Where and how the result of a transformation is stored."""

    location: str = Field(default="s3", description="Storage provider")
    region: Optional[str] = None
    container: Optional[str] = None
    path: Optional[str] = None
    filename: Optional[str] = None
    access: Optional[str] = Field(default=None, description="'public' or 'private'")
    base64decode: Optional[bool] = None
    mimetype: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    def as_task(self) -> TransformTask:
        options: Dict[str, Any] = self.model_dump(exclude_none=True)
        return TransformTask(STORE_TASK_NAME, options)
