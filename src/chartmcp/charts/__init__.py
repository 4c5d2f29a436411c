"""Chart-type registry, argument schemas and tool contracts.

registry: ChartType → ChartSpec (tool name, schema, strategy)
schemas: pydantic argument models per chart type
contracts: tool descriptors for ``tools/list``
"""

from .contracts import TOOL_REGISTRY, ToolContract, list_tools
from .registry import (
    CHART_REGISTRY,
    SUPPORTED_CHART_TYPES,
    TOOL_CHART_TYPES,
    ChartSpec,
    get_spec,
    map_tool_name,
)

__all__ = [
    "CHART_REGISTRY",
    "ChartSpec",
    "SUPPORTED_CHART_TYPES",
    "TOOL_CHART_TYPES",
    "TOOL_REGISTRY",
    "ToolContract",
    "get_spec",
    "list_tools",
    "map_tool_name",
]
