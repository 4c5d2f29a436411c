"""Client for the external chart rendering service.

Used only as the fallback when local rendering fails.  The service
receives the same chart options as the local renderer and answers with
the raw PNG bytes.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..errors import ConfigurationError, GenerationError
from ..rendering.images import to_data_uri
from ._http import describe, post

logger = logging.getLogger(__name__)

_REQUEST_TIMEOUT = 30.0


class RenderServiceClient:
    def __init__(self, url: str | None, client: httpx.AsyncClient | None = None) -> None:
        self.url = url
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self.url)

    async def render(self, options: dict[str, Any]) -> str:
        """Render *options* remotely and return a PNG data URI."""
        if not self.url:
            raise ConfigurationError("No external rendering service is configured.")

        try:
            resp = await post(
                self.url,
                client=self._client,
                timeout=_REQUEST_TIMEOUT,
                json=options,
                headers={"Accept": "image/png"},
            )
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise GenerationError(f"Rendering service failed: {describe(exc)}") from exc

        if not resp.content:
            raise GenerationError("Rendering service returned an empty image")
        logger.info("Rendered chart via %s (%d bytes)", self.url, len(resp.content))
        return to_data_uri(resp.content)
