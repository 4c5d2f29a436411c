"""Tool-call dispatcher, the single entry point for chart generation.

A call moves through ``Resolving → Validating → SelectingStrategy →
Executing → Normalizing → Done``; any stage can end in ``Errored``.
All failures are caught here, once, and turned into an error envelope;
nothing is retried.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping

import httpx

from .charts.registry import get_spec
from .config import ServerConfig
from .errors import CallerError, ValidateError
from .models import ChartRequest, Invalid, ResponseEnvelope, StrategyKind
from .normalizer import UNKNOWN_ERROR, error_envelope, normalize
from .resolver import resolve
from .strategies import ChartStrategy, build_strategies
from .validation import validate_arguments

logger = logging.getLogger(__name__)

GENERATION_FAILED = "Failed to generate chart"


class DispatchStage(str, Enum):
    RESOLVING = "resolving"
    VALIDATING = "validating"
    SELECTING_STRATEGY = "selecting_strategy"
    EXECUTING = "executing"
    NORMALIZING = "normalizing"
    DONE = "done"
    ERRORED = "errored"


class Dispatcher:
    """Route chart tool calls to their generation strategy.

    Parameters
    ----------
    config
        Service endpoints; read from the environment when omitted.
    strategies
        Override the strategy bound to each ``StrategyKind`` (tests).
    client
        Shared ``httpx.AsyncClient`` for the default strategies.
    """

    def __init__(
        self,
        config: ServerConfig | None = None,
        *,
        strategies: Mapping[StrategyKind, ChartStrategy] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or ServerConfig.from_env()
        self.strategies: dict[StrategyKind, ChartStrategy] = {
            **build_strategies(self.config, client),
            **(strategies or {}),
        }

    def select_strategy(self, request: ChartRequest) -> ChartStrategy:
        return self.strategies[get_spec(request.chart_type).strategy]

    async def call_tool(
        self, tool_name: str, arguments: dict[str, Any] | None = None
    ) -> ResponseEnvelope:
        """Handle one tool call; never raises."""
        stage = DispatchStage.RESOLVING
        try:
            request = resolve(tool_name, arguments)

            stage = DispatchStage.VALIDATING
            outcome = validate_arguments(request.chart_type, request.arguments)
            if isinstance(outcome, Invalid):
                return self._errored(tool_name, stage, outcome.message)

            stage = DispatchStage.SELECTING_STRATEGY
            strategy = self.select_strategy(request)
            logger.debug("%s → %s via %s", tool_name, request.chart_type.value, strategy.kind.value)

            stage = DispatchStage.EXECUTING
            result = await strategy.produce(request.with_arguments(outcome.arguments))

            stage = DispatchStage.NORMALIZING
            envelope = normalize(request, result)
        except (CallerError, ValidateError) as exc:
            return self._errored(tool_name, stage, str(exc))
        except Exception as exc:
            message = f"{GENERATION_FAILED}: {exc}" if str(exc) else UNKNOWN_ERROR
            return self._errored(tool_name, stage, message)

        logger.debug("%s reached stage %s", tool_name, DispatchStage.DONE.value)
        return envelope

    @staticmethod
    def _errored(tool_name: str, stage: DispatchStage, message: str) -> ResponseEnvelope:
        logger.warning("%s failed while %s: %s", tool_name, stage.value, message)
        return error_envelope(message)


async def call_tool(
    tool_name: str,
    arguments: dict[str, Any] | None = None,
    config: ServerConfig | None = None,
) -> ResponseEnvelope:
    """Dispatch a single tool call with a one-off ``Dispatcher``."""
    return await Dispatcher(config).call_tool(tool_name, arguments)
