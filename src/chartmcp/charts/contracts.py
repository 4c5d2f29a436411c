"""MCP tool contract definitions and registry.

Each chart tool exposed to an agent is described by a ``ToolContract``
that specifies its name, description, and JSON input schema.  The
``TOOL_REGISTRY`` maps tool names → contracts so a transport layer can
answer ``tools/list`` without knowing about individual chart types.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from ..config import ServerConfig
from ..models import UNIFIED_TOOL_NAME, ChartType, StrategyKind
from .registry import CHART_REGISTRY, SUPPORTED_CHART_TYPES, ChartSpec
from .schemas import UnifiedChartArgs


# ---------------------------------------------------------------------------
# Contract model
# ---------------------------------------------------------------------------

class ToolContract(BaseModel):
    """JSON-schema-style contract for an MCP tool."""
    name: str                       # e.g. "generate_line_chart"
    description: str = ""
    chart_type: Optional[ChartType] = None      # None for the unified tool
    strategy: Optional[StrategyKind] = None
    input_schema: dict[str, Any] = Field(default_factory=dict)

    def to_wire(self) -> dict[str, Any]:
        """Descriptor in the shape ``tools/list`` returns."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


# ---------------------------------------------------------------------------
# Tool registry, built from the chart registry at import time
# ---------------------------------------------------------------------------

TOOL_REGISTRY: dict[str, ToolContract] = {}


def register_tool(contract: ToolContract) -> ToolContract:
    """Register a tool contract in the global registry."""
    TOOL_REGISTRY[contract.name] = contract
    return contract


def _input_schema(spec: ChartSpec) -> dict[str, Any]:
    if spec.schema is None:
        return {"type": "object", "properties": {}}
    return spec.schema.model_json_schema(by_alias=True)


for _spec in CHART_REGISTRY.values():
    register_tool(ToolContract(
        name=_spec.tool_name,
        description=_spec.description,
        chart_type=_spec.chart_type,
        strategy=_spec.strategy,
        input_schema=_input_schema(_spec),
    ))

UNIFIED_CHART = register_tool(ToolContract(
    name=UNIFIED_TOOL_NAME,
    description=(
        "Universal chart generation tool that can create any supported chart. "
        "Specify the 'type' parameter to choose the chart type, then provide "
        "the data and configuration that chart type expects. "
        f"Supported types: {', '.join(SUPPORTED_CHART_TYPES)}."
    ),
    input_schema=UnifiedChartArgs.model_json_schema(by_alias=True),
))


def list_tools(config: ServerConfig | None = None) -> list[ToolContract]:
    """Return every registered tool except those disabled in *config*."""
    disabled = set(config.disabled_tools) if config else set()
    return [c for name, c in sorted(TOOL_REGISTRY.items()) if name not in disabled]
