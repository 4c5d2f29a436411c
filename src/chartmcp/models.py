"""Pydantic models shared across the dispatch pipeline.

These models form the contract between the stages of a tool call:
the resolver produces a ``ChartRequest``, the validator a
``ValidationOutcome``, each strategy a ``StrategyResult``, and the
normalizer the ``ResponseEnvelope`` that goes back over the wire.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# Tool name of the "any chart" entry point
UNIFIED_TOOL_NAME = "generate_chart"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ChartType(str, Enum):
    """Canonical chart-type identifiers (closed set)."""
    AREA = "area"
    BAR = "bar"
    BOXPLOT = "boxplot"
    CANDLESTICK = "candlestick"
    COLUMN = "column"
    DISTRICT_MAP = "district-map"
    DUAL_AXES = "dual-axes"
    FISHBONE_DIAGRAM = "fishbone-diagram"
    FLOW_DIAGRAM = "flow-diagram"
    FUNNEL = "funnel"
    HISTOGRAM = "histogram"
    LINE = "line"
    LIQUID = "liquid"
    MIND_MAP = "mind-map"
    NETWORK_GRAPH = "network-graph"
    ORGANIZATION_CHART = "organization-chart"
    PATH_MAP = "path-map"
    PIE = "pie"
    PIN_MAP = "pin-map"
    RADAR = "radar"
    SANKEY = "sankey"
    SCATTER = "scatter"
    TREEMAP = "treemap"
    VENN = "venn"
    VIOLIN = "violin"
    WORD_CLOUD = "word-cloud"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class StrategyKind(str, Enum):
    """How a chart type is produced."""
    REMOTE_CHART = "remote_chart"
    LOCAL_RENDER = "local_render"
    MAP = "map"


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

class ChartRequest(BaseModel):
    """One inbound tool call, after the chart type has been resolved."""

    model_config = ConfigDict(frozen=True)

    tool_name: str                      # as invoked, e.g. "generate_chart"
    chart_type: ChartType
    arguments: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_unified(self) -> bool:
        return self.tool_name == UNIFIED_TOOL_NAME

    def with_arguments(self, arguments: dict[str, Any]) -> "ChartRequest":
        return self.model_copy(update={"arguments": arguments})


# ---------------------------------------------------------------------------
# Validation outcome
# ---------------------------------------------------------------------------

class Valid(BaseModel):
    """Arguments passed the chart type's schema (defaults applied)."""
    ok: Literal[True] = True
    arguments: dict[str, Any] = Field(default_factory=dict)


class Invalid(BaseModel):
    """Arguments were rejected; ``message`` lists every violation."""
    ok: Literal[False] = False
    message: str


ValidationOutcome = Union[Valid, Invalid]


# ---------------------------------------------------------------------------
# Strategy results
# ---------------------------------------------------------------------------

class UrlResult(BaseModel):
    """A strategy produced a public chart URL."""
    url: str
    description: str = ""


class ToolResult(BaseModel):
    """A strategy produced an already wire-shaped tool result (maps)."""
    content: list[dict[str, Any]] = Field(default_factory=list)
    is_error: Optional[bool] = None
    metadata: Any = None                # internal bookkeeping, never sent


StrategyResult = Union[UrlResult, ToolResult]


# ---------------------------------------------------------------------------
# Response envelope
# ---------------------------------------------------------------------------

class ResponseMeta(BaseModel):
    description: str = ""
    spec: dict[str, Any] = Field(default_factory=dict)


class ResponseEnvelope(BaseModel):
    """The externally observable result of a tool call.

    ``is_error`` is ``True`` if and only if some stage failed; ``content``
    always holds at least one block.
    """

    model_config = ConfigDict(populate_by_name=True)

    content: list[dict[str, Any]] = Field(default_factory=list)
    is_error: Optional[bool] = Field(default=None, alias="isError")
    meta: Optional[ResponseMeta] = Field(default=None, alias="_meta")

    @property
    def text(self) -> str:
        """Text of the first text block (empty if there is none)."""
        for block in self.content:
            if block.get("type") == "text":
                return str(block.get("text", ""))
        return ""

    def to_wire(self) -> dict[str, Any]:
        """Serialize with protocol field names, omitting unset optionals."""
        wire: dict[str, Any] = {"content": [dict(block) for block in self.content]}
        if self.is_error is not None:
            wire["isError"] = self.is_error
        if self.meta is not None:
            wire["_meta"] = self.meta.model_dump()
        return wire
