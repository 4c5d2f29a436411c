"""Resolve a tool invocation to a canonical chart type."""

from __future__ import annotations

from typing import Any

from .charts.registry import SUPPORTED_CHART_TYPES, TOOL_CHART_TYPES
from .errors import CallerError
from .models import UNIFIED_TOOL_NAME, ChartRequest, ChartType


def resolve(tool_name: str, arguments: dict[str, Any] | None = None) -> ChartRequest:
    """Build a ``ChartRequest`` for *tool_name*.

    The unified ``generate_chart`` tool takes its chart type from the
    ``type`` argument, which is removed from the arguments passed on.
    Every other tool is looked up in the static tool table.

    Raises ``CallerError`` for an unknown tool, a missing ``type``, or an
    unsupported ``type`` value.
    """
    args = dict(arguments or {})

    if tool_name == UNIFIED_TOOL_NAME:
        requested = args.pop("type", None)
        if not requested:
            raise CallerError(
                f"The 'type' parameter is required for {UNIFIED_TOOL_NAME} tool."
            )
        if requested not in SUPPORTED_CHART_TYPES:
            raise CallerError(
                f"Unsupported chart type: {requested}. "
                f"Supported types: {', '.join(SUPPORTED_CHART_TYPES)}"
            )
        return ChartRequest(
            tool_name=tool_name,
            chart_type=ChartType(requested),
            arguments=args,
        )

    chart_type = TOOL_CHART_TYPES.get(tool_name)
    if chart_type is None:
        raise CallerError(f"Unknown tool: {tool_name}.")
    return ChartRequest(tool_name=tool_name, chart_type=chart_type, arguments=args)
