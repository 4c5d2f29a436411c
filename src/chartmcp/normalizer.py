"""Convert strategy output into the wire ``ResponseEnvelope``."""

from __future__ import annotations

from .errors import GenerationError
from .models import (
    ChartRequest,
    ResponseEnvelope,
    ResponseMeta,
    StrategyResult,
    ToolResult,
    UrlResult,
)

UNKNOWN_ERROR = "Unknown error."


def text_block(text: str) -> dict[str, str]:
    return {"type": "text", "text": text}


def error_envelope(message: str) -> ResponseEnvelope:
    return ResponseEnvelope(content=[text_block(message or UNKNOWN_ERROR)], is_error=True)


def normalize(request: ChartRequest, result: StrategyResult) -> ResponseEnvelope:
    """Wrap *result* for the caller.

    URLs become a single text block plus ``_meta.spec`` (the chart type
    and the arguments as the caller sent them).  Tool results are
    forwarded as-is minus their internal ``metadata``; one without any
    content is a ``GenerationError``.
    """
    if isinstance(result, ToolResult):
        if not result.content:
            raise GenerationError("Map API returned no content")
        return ResponseEnvelope(content=list(result.content), is_error=result.is_error)

    if isinstance(result, UrlResult):
        spec = {"type": request.chart_type.value}
        # resolved chart type wins over a caller-supplied ``type``
        spec.update({k: v for k, v in request.arguments.items() if k != "type"})
        return ResponseEnvelope(
            content=[text_block(result.url)],
            meta=ResponseMeta(description=result.description, spec=spec),
        )

    raise TypeError(f"Unsupported strategy result: {type(result).__name__}")
