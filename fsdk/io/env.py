"""
Helpers for locating the fsdk environment file.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

FSDK_ENV_FILENAME = "fsdk.env"


def default_env_path() -> Path:
    """
    Path of the env file read by :meth:`fsdk.Api.from_env`.

    ``FSDK_ENV_FILE`` overrides the default ``~/fsdk.env``.
    """
    override = os.environ.get("FSDK_ENV_FILE")
    if override:
        return Path(override).expanduser()
    return Path.home() / FSDK_ENV_FILENAME


def load_env(path: Optional[Path] = None) -> bool:
    """Load variables from the env file into ``os.environ`` without overriding existing ones."""
    from dotenv import load_dotenv

    path = path or default_env_path()
    if not path.is_file():
        return False
    return load_dotenv(path, override=False)
