"""PNG ↔ data-URI helpers."""

from __future__ import annotations

import base64
import re

_DATA_URI_PREFIX = re.compile(r"^data:image/\w+;base64,")


def to_data_uri(png: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")


def from_data_uri(image: str) -> bytes:
    """Decode a base64 image, with or without its ``data:`` prefix."""
    return base64.b64decode(_DATA_URI_PREFIX.sub("", image), validate=True)
