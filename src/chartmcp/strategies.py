"""Chart generation strategies.

Every strategy turns a validated ``ChartRequest`` into a
``StrategyResult``:

- ``RemoteChartStrategy``: Chart API renders the chart, returns a URL.
- ``MapStrategy``: Map API renders a map, returns a tool result.
- ``LocalRenderStrategy``: candlestick charts are drawn in-process,
  falling back to an external rendering service, then uploaded.

The local strategy's fallback chain is an ordered list of attempts run
through ``first_success``: each attempt yields an ``AttemptResult``
instead of raising, and the chain stops at the first success.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Sequence

import httpx

from .charts.registry import map_tool_name
from .config import RENDER_SERVICE_ENV, ServerConfig
from .errors import ConfigurationError, GenerationError
from .models import ChartRequest, StrategyKind, StrategyResult, ToolResult, UrlResult
from .rendering.candlestick import build_render_options, render_candlestick
from .services import RenderServiceClient, UploadClient, VisApiClient

logger = logging.getLogger(__name__)

CHART_SPEC_DESCRIPTION = (
    "Charts spec configuration, you can use this config to generate the corresponding chart."
)
STOCK_CHART_DESCRIPTION = (
    "Stock chart (candlestick) rendered locally and uploaded to file service"
)


# ---------------------------------------------------------------------------
# Fallback combinator
# ---------------------------------------------------------------------------

@dataclass
class AttemptResult:
    """Outcome of one fallback attempt: a value or an error message."""

    name: str
    value: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class FallbackOutcome:
    result: Optional[AttemptResult] = None
    failures: list[AttemptResult] = field(default_factory=list)

    @property
    def value(self) -> Optional[str]:
        return self.result.value if self.result else None


Attempt = tuple[str, Callable[[], Awaitable[str]]]


async def run_attempt(name: str, produce: Callable[[], Awaitable[str]]) -> AttemptResult:
    try:
        return AttemptResult(name=name, value=await produce())
    except Exception as exc:
        message = str(exc) or exc.__class__.__name__
        logger.warning("%s attempt failed: %s", name, message)
        return AttemptResult(name=name, error=message)


async def first_success(attempts: Sequence[Attempt]) -> FallbackOutcome:
    """Run *attempts* in order and stop at the first one that succeeds."""
    outcome = FallbackOutcome()
    for name, produce in attempts:
        attempt = await run_attempt(name, produce)
        if attempt.ok:
            outcome.result = attempt
            break
        outcome.failures.append(attempt)
    return outcome


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

class ChartStrategy(ABC):
    """Common "produce a chart artifact" capability."""

    kind: StrategyKind

    @abstractmethod
    async def produce(self, request: ChartRequest) -> StrategyResult:
        ...


class RemoteChartStrategy(ChartStrategy):
    kind = StrategyKind.REMOTE_CHART

    def __init__(self, api: VisApiClient) -> None:
        self.api = api

    async def produce(self, request: ChartRequest) -> UrlResult:
        url = await self.api.generate_chart_url(request.chart_type.value, request.arguments)
        return UrlResult(url=url, description=CHART_SPEC_DESCRIPTION)


class MapStrategy(ChartStrategy):
    kind = StrategyKind.MAP

    def __init__(self, api: VisApiClient) -> None:
        self.api = api

    @staticmethod
    def tool_name_for(request: ChartRequest) -> str:
        """Map API tool name; unified calls are rewritten to the specific tool."""
        if request.is_unified:
            return map_tool_name(request.chart_type)
        return request.tool_name

    async def produce(self, request: ChartRequest) -> ToolResult:
        return await self.api.generate_map(self.tool_name_for(request), request.arguments)


class LocalRenderStrategy(ChartStrategy):
    """Render in-process, fall back to the rendering service, then upload.

    Parameters
    ----------
    render_service
        External renderer used when local rendering fails.  When it is
        not configured a local failure is terminal.
    uploader
        File service that turns the rendered image into a public URL.
    renderer
        Synchronous local renderer; runs in a worker thread.
    """

    kind = StrategyKind.LOCAL_RENDER

    def __init__(
        self,
        render_service: RenderServiceClient,
        uploader: UploadClient,
        renderer: Callable[[dict[str, Any]], str] = render_candlestick,
    ) -> None:
        self.render_service = render_service
        self.uploader = uploader
        self.renderer = renderer

    def attempts(self, options: dict[str, Any]) -> list[Attempt]:
        chain: list[Attempt] = [
            ("local render", lambda: asyncio.to_thread(self.renderer, options)),
        ]
        if self.render_service.configured:
            chain.append(("rendering service", lambda: self.render_service.render(options)))
        return chain

    def _exhausted(self, failures: list[AttemptResult]) -> Exception:
        reasons = "; ".join(f"{f.name} failed: {f.error}" for f in failures)
        if not self.render_service.configured:
            return ConfigurationError(
                f"{reasons}. No fallback rendering service is configured; "
                f"set {RENDER_SERVICE_ENV} to the address of an external chart "
                "rendering service to enable it."
            )
        return GenerationError(reasons)

    async def produce(self, request: ChartRequest) -> UrlResult:
        options = build_render_options(request.arguments)
        outcome = await first_success(self.attempts(options))
        if outcome.value is None:
            raise self._exhausted(outcome.failures)

        logger.info("Candlestick chart rendered by %s", outcome.result.name)
        url = await self.uploader.upload_image(outcome.value)
        return UrlResult(url=url, description=STOCK_CHART_DESCRIPTION)


def build_strategies(
    config: ServerConfig,
    client: httpx.AsyncClient | None = None,
) -> dict[StrategyKind, ChartStrategy]:
    """One strategy instance per ``StrategyKind``, wired to *config*."""
    api = VisApiClient(config, client)
    return {
        StrategyKind.REMOTE_CHART: RemoteChartStrategy(api),
        StrategyKind.MAP: MapStrategy(api),
        StrategyKind.LOCAL_RENDER: LocalRenderStrategy(
            RenderServiceClient(config.render_service_url, client),
            UploadClient(config.upload_api, client),
        ),
    }
