"""Process-wide service configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_VIS_REQUEST_SERVER = "https://antv-studio.alipay.com/api/gpt-vis"
DEFAULT_UPLOAD_API = "http://localhost:3000/api/v1/file/upload"

# Origin tag sent with every Chart API / Map API request
SOURCE_TAG = "mcp-server-chart"

RENDER_SERVICE_ENV = "RENDER_SERVICE_URL"


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class ServerConfig:
    """Service endpoints and identifiers, read once at startup.

    Instances are immutable and shared by every request handled by the
    process.
    """

    vis_request_server: str = DEFAULT_VIS_REQUEST_SERVER
    service_id: str = ""
    render_service_url: str | None = None
    upload_api: str = DEFAULT_UPLOAD_API
    disabled_tools: tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_render_service(self) -> bool:
        return bool(self.render_service_url)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ServerConfig":
        """Build a config from environment variables (``os.environ`` by default)."""
        env = os.environ if environ is None else environ
        return cls(
            vis_request_server=env.get("VIS_REQUEST_SERVER") or DEFAULT_VIS_REQUEST_SERVER,
            service_id=env.get("SERVICE_ID", ""),
            render_service_url=env.get(RENDER_SERVICE_ENV) or None,
            upload_api=env.get("UPLOAD_API") or DEFAULT_UPLOAD_API,
            disabled_tools=_split_csv(env.get("DISABLED_TOOLS", "")),
        )
