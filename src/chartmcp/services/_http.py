"""Shared httpx plumbing for the service clients."""

from __future__ import annotations

from typing import Any

import httpx

from ..errors import GenerationError


async def post(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
    **kwargs: Any,
) -> httpx.Response:
    """POST to *url*, reusing *client* when one is given.

    ``timeout=None`` disables httpx's default deadline.
    """
    if client is not None:
        return await client.post(url, timeout=timeout, **kwargs)
    async with httpx.AsyncClient(timeout=timeout) as session:
        return await session.post(url, **kwargs)


def describe(exc: BaseException) -> str:
    """Exception message, falling back to the class name when empty."""
    return str(exc) or exc.__class__.__name__


def json_object(resp: httpx.Response, service: str) -> dict[str, Any]:
    """Decode a JSON object body or raise ``GenerationError``."""
    body = resp.json()
    if not isinstance(body, dict):
        raise GenerationError(f"{service} returned an unexpected response: {body!r}")
    return body
