"""
HTTP config source.

GETs a JSON object from a URL and hands its flattened contents to a
polling config. The response ETag is kept as the checkpoint and sent back
as If-None-Match, so an unchanged document costs a 304 and a noop.
"""
import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, Field

from .domain import PollingResponse
from .flatten import flatten_mapping

logger = logging.getLogger(__name__)


class HttpSourceSettings(BaseModel):
    url: str = Field(..., description="URL returning a JSON object of properties")
    timeout: float = Field(default=10.0, description="Request timeout in seconds")
    headers: Dict[str, str] = Field(default_factory=dict, description="Extra request headers")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")


class HttpConfigSource:
    def __init__(self, settings: HttpSourceSettings, client: Optional[httpx.Client] = None):
        self.settings = settings
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=settings.timeout,
            verify=settings.verify_ssl
        )

    def poll(self, is_initial: bool, checkpoint: Optional[Any]) -> PollingResponse:
        headers = dict(self.settings.headers)
        if checkpoint and not is_initial:
            headers["If-None-Match"] = str(checkpoint)

        response = self._client.get(self.settings.url, headers=headers)
        if response.status_code == 304:
            logger.debug(f"{self.settings.url} not modified")
            return PollingResponse.noop(checkpoint)

        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, dict):
            raise ValueError(f"Expected a JSON object from {self.settings.url}, got {type(payload).__name__}")

        values = flatten_mapping(payload)
        logger.debug(f"Fetched {len(values)} properties from {self.settings.url}")
        return PollingResponse.for_snapshot(values, response.headers.get("ETag"))

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
