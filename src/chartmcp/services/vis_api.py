"""Client for the remote visualization API (charts and maps).

Both endpoints answer with ``{success, errorMessage, resultObj}``:

- **Chart API**: ``{type, ...options, source}`` → ``resultObj`` is the
  chart image URL.
- **Map API**: ``{serviceId, tool, input, source}`` → ``resultObj`` is
  an already wire-shaped tool result ``{metadata, content, isError?}``.

Network errors without a response get a message of their own; HTTP
status errors propagate unchanged.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import SOURCE_TAG, ServerConfig
from ..errors import GenerationError
from ..models import ToolResult
from ._http import describe, json_object, post

logger = logging.getLogger(__name__)


class VisApiClient:
    """Thin async wrapper over the chart / map generation endpoints."""

    def __init__(self, config: ServerConfig, client: httpx.AsyncClient | None = None) -> None:
        self.config = config
        self._client = client

    async def generate_chart_url(self, chart_type: str, options: dict[str, Any]) -> str:
        """Render a chart remotely and return its URL."""
        payload = {"type": chart_type, **options, "source": SOURCE_TAG}
        try:
            resp = await post(
                self.config.vis_request_server,
                client=self._client,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
        except httpx.RequestError as exc:
            raise GenerationError(f"Failed to generate chart URL: {describe(exc)}") from exc
        resp.raise_for_status()

        body = json_object(resp, "Chart API")
        if not body.get("success"):
            raise GenerationError(body.get("errorMessage") or "Chart generation failed")

        url = body.get("resultObj")
        if not isinstance(url, str) or not url:
            raise GenerationError("Chart API returned no chart URL")
        logger.info("Generated %s chart: %s", chart_type, url)
        return url

    async def generate_map(self, tool: str, map_input: dict[str, Any]) -> ToolResult:
        """Render a map remotely and return the tool result it produced."""
        payload = {
            "serviceId": self.config.service_id,
            "tool": tool,
            "input": map_input,
            "source": SOURCE_TAG,
        }
        try:
            resp = await post(
                self.config.vis_request_server,
                client=self._client,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
        except httpx.RequestError as exc:
            raise GenerationError(f"Failed to generate map: {describe(exc)}") from exc
        resp.raise_for_status()

        body = json_object(resp, "Map API")
        if not body.get("success"):
            raise GenerationError(body.get("errorMessage") or "Map generation failed")

        result = body.get("resultObj")
        if not isinstance(result, dict):
            raise GenerationError("Map API returned no tool result")
        content = result.get("content")
        if not content:
            raise GenerationError("Map API returned no content")
        logger.info("Generated map via %s", tool)
        return ToolResult(
            content=content,
            is_error=result.get("isError"),
            metadata=result.get("metadata"),
        )
