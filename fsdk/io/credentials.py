"""
Settings model for the client configuration.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CDN_URL = "https://cdn.filestackcontent.com"


def _normalize_url(url: Optional[str]) -> str:
    """_normalize_url"""
    if url is None:
        return ""
    parsed_url = urlparse(url)
    if not parsed_url.scheme:
        url = "https://" + url
    return url.rstrip("/")


class ClientConfig(BaseSettings):
    """
    Settings model for client configuration via environment variables
    or other settings sources supported by `pydantic-settings`.
    """

    FSDK_API_KEY: Optional[SecretStr] = None
    FSDK_CDN_URL: str = DEFAULT_CDN_URL
    FSDK_RETRY_COUNT: int = Field(default=10, ge=1)
    FSDK_RETRY_SLEEP_SEC: float = Field(default=1, ge=0)
    FSDK_MAX_WORKERS: Optional[int] = Field(default=None, ge=1)
    FSDK_TIMEOUT: float = Field(default=60, gt=0)

    model_config = SettingsConfigDict(
        env_file="~/fsdk.env",
        extra="ignore",
    )

    def get_api_key(self) -> str:
        """Return the api key or fail if it is not configured."""
        if self.FSDK_API_KEY is None or not self.FSDK_API_KEY.get_secret_value():
            raise ValueError("FSDK_API_KEY must be set in environment variables.")
        return self.FSDK_API_KEY.get_secret_value()

    def get_cdn_url(self) -> str:
        return _normalize_url(self.FSDK_CDN_URL)
