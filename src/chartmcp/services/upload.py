"""Upload rendered images to the file service and get a public URL."""

from __future__ import annotations

import logging

import httpx

from ..errors import UploadError
from ..rendering.images import from_data_uri
from ._http import describe, post

logger = logging.getLogger(__name__)


class UploadClient:
    def __init__(self, upload_api: str, client: httpx.AsyncClient | None = None) -> None:
        self.upload_api = upload_api
        self._client = client

    async def upload_image(self, image: str, filename: str = "chart.png") -> str:
        """Upload a base64 image (with or without data-URI prefix).

        Returns the public URL from the service's ``{url}`` response.
        Every failure, including a response without a URL, is raised as
        ``UploadError`` carrying the underlying cause.
        """
        try:
            payload = from_data_uri(image)
            resp = await post(
                self.upload_api,
                client=self._client,
                files={"file": (filename, payload, "image/png")},
                headers={"Accept": "application/json"},
            )
            resp.raise_for_status()
            body = resp.json()
            url = body.get("url") if isinstance(body, dict) else None
            if not url:
                raise UploadError("Upload failed: No URL in response")
        except Exception as exc:
            raise UploadError(f"Failed to upload image: {describe(exc)}") from exc

        logger.info("Uploaded %s → %s", filename, url)
        return url
