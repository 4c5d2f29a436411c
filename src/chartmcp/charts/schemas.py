"""Argument schemas for every chart type.

Each chart type that validates its arguments has one pydantic model
here.  Field names are snake_case in Python and camelCase on the wire
(``axis_x_title`` ↔ ``axisXTitle``) via the shared alias generator.
Unknown keys are dropped, defaults are filled in, and the validated
model is dumped back to a wire-shaped dict before it is forwarded.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from ..errors import ValidateError
from ..models import ChartType


# JSON numbers only: numeric strings and booleans are rejected
Number = Union[StrictInt, StrictFloat]
Theme = Literal["default", "academy", "dark"]


def _positive(value: Number) -> Number:
    if value <= 0:
        raise ValueError("must be greater than 0")
    return value


def _ratio(value: Number) -> Number:
    if not 0 <= value <= 1:
        raise ValueError("must be between 0 and 1")
    return value


PositiveNumber = Annotated[Number, AfterValidator(_positive)]
Ratio = Annotated[Number, AfterValidator(_ratio)]

# Deepest level allowed in hierarchical diagrams (root = level 1)
MAX_TREE_DEPTH = 3


# ---------------------------------------------------------------------------
# Base models
# ---------------------------------------------------------------------------

class ChartModel(BaseModel):
    """Base for all schemas: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ChartStyle(ChartModel):
    background_color: Optional[str] = Field(None, description="Background color, e.g. '#fff'.")
    palette: Optional[list[str]] = Field(None, description="Color palette.")
    texture: Literal["default", "rough"] = Field("default", description="'rough' gives a hand-drawn look.")
    line_width: Optional[PositiveNumber] = Field(None, description="Line width for line-based charts.")


class BaseChartArgs(ChartModel):
    """Fields every remotely rendered chart accepts."""

    style: Optional[ChartStyle] = None
    theme: Theme = "default"
    width: PositiveNumber = Field(600, description="Chart width in pixels.")
    height: PositiveNumber = Field(400, description="Chart height in pixels.")
    title: str = ""


class AxisChartArgs(BaseChartArgs):
    axis_x_title: str = ""
    axis_y_title: str = ""


# ---------------------------------------------------------------------------
# Data records
# ---------------------------------------------------------------------------

class TimeValue(ChartModel):
    time: str
    value: Number
    group: Optional[str] = None


class CategoryValue(ChartModel):
    category: str
    value: Number
    group: Optional[str] = None


class PointXY(ChartModel):
    x: Number
    y: Number
    group: Optional[str] = None


class NameValue(ChartModel):
    name: str
    value: Number
    group: Optional[str] = None


class TextValue(ChartModel):
    text: str
    value: Number


class TreemapNode(ChartModel):
    name: str
    value: Number
    children: Optional[list["TreemapNode"]] = None


class VennSet(ChartModel):
    label: Optional[str] = None
    value: Number
    sets: list[str] = Field(min_length=1)


class DualAxesSeries(ChartModel):
    type: Literal["column", "line"]
    data: list[Number] = Field(min_length=1)
    axis_y_title: str = ""


class SankeyLink(ChartModel):
    source: str
    target: str
    value: Number


class GraphNode(ChartModel):
    name: str


class GraphEdge(ChartModel):
    source: str
    target: str
    name: str = ""


class GraphData(ChartModel):
    nodes: list[GraphNode] = Field(min_length=1)
    edges: list[GraphEdge] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_nodes_and_edges(self) -> "GraphData":
        validate_nodes_and_edges(self)
        return self


class TreeNode(ChartModel):
    name: str
    children: Optional[list["TreeNode"]] = None


class OrgNode(ChartModel):
    name: str
    description: Optional[str] = None
    children: Optional[list["OrgNode"]] = None


class Candle(ChartModel):
    date: str = Field(description="Trading date, e.g. '2024-01-01'.")
    open: Number
    close: Number
    high: Number
    low: Number
    volume: Optional[Number] = None


# ---------------------------------------------------------------------------
# Semantic checks (reported verbatim, not as shape violations)
# ---------------------------------------------------------------------------

def validate_nodes_and_edges(graph: GraphData) -> None:
    """Node names must be unique and every edge must join known nodes."""
    names: set[str] = set()
    for node in graph.nodes:
        if node.name in names:
            raise ValidateError(
                f"Invalid parameters: node's name '{node.name}' should be unique."
            )
        names.add(node.name)

    seen: set[tuple[str, str]] = set()
    for edge in graph.edges:
        for endpoint in (edge.source, edge.target):
            if endpoint not in names:
                raise ValidateError(
                    f"Invalid parameters: edge refers to unknown node '{endpoint}'."
                )
        pair = (edge.source, edge.target)
        if pair in seen:
            raise ValidateError(
                f"Invalid parameters: edge '{edge.source}' -> '{edge.target}' "
                "is duplicated."
            )
        seen.add(pair)


def tree_depth(node: Any) -> int:
    children = getattr(node, "children", None) or []
    return 1 + max((tree_depth(child) for child in children), default=0)


def validate_tree_depth(root: Any, max_depth: int = MAX_TREE_DEPTH) -> None:
    depth = tree_depth(root)
    if depth > max_depth:
        raise ValidateError(
            f"Invalid parameters: tree depth {depth} exceeds the maximum of {max_depth}."
        )


# ---------------------------------------------------------------------------
# Chart argument schemas
# ---------------------------------------------------------------------------

class LineChartArgs(AxisChartArgs):
    data: list[TimeValue] = Field(min_length=1)


class AreaChartArgs(AxisChartArgs):
    data: list[TimeValue] = Field(min_length=1)
    stack: bool = False


class BarChartArgs(AxisChartArgs):
    data: list[CategoryValue] = Field(min_length=1)
    group: bool = False
    stack: bool = True


class ColumnChartArgs(AxisChartArgs):
    data: list[CategoryValue] = Field(min_length=1)
    group: bool = True
    stack: bool = False


class PieChartArgs(BaseChartArgs):
    data: list[CategoryValue] = Field(min_length=1)
    inner_radius: Ratio = 0


class ScatterChartArgs(AxisChartArgs):
    data: list[PointXY] = Field(min_length=1)


class HistogramChartArgs(AxisChartArgs):
    data: list[Number] = Field(min_length=1)
    bin_number: Optional[StrictInt] = Field(None, gt=0)


class BoxplotChartArgs(AxisChartArgs):
    data: list[CategoryValue] = Field(min_length=1)


class ViolinChartArgs(AxisChartArgs):
    data: list[CategoryValue] = Field(min_length=1)


class FunnelChartArgs(BaseChartArgs):
    data: list[CategoryValue] = Field(min_length=1)


class RadarChartArgs(BaseChartArgs):
    data: list[NameValue] = Field(min_length=1)


class LiquidChartArgs(BaseChartArgs):
    percent: Ratio = Field(description="Fill ratio between 0 and 1.")
    shape: Literal["circle", "rect", "pin", "triangle"] = "circle"


class WordCloudChartArgs(BaseChartArgs):
    data: list[TextValue] = Field(min_length=1)


class TreemapChartArgs(BaseChartArgs):
    data: list[TreemapNode] = Field(min_length=1)


class VennChartArgs(BaseChartArgs):
    data: list[VennSet] = Field(min_length=1)


class DualAxesChartArgs(BaseChartArgs):
    categories: list[str] = Field(min_length=1)
    series: list[DualAxesSeries] = Field(min_length=1)
    axis_x_title: str = ""


class SankeyChartArgs(BaseChartArgs):
    data: list[SankeyLink] = Field(min_length=1)
    node_align: Literal["left", "right", "justify", "center"] = "center"


class NetworkGraphArgs(BaseChartArgs):
    data: GraphData


class FlowDiagramArgs(BaseChartArgs):
    data: GraphData


class MindMapArgs(BaseChartArgs):
    data: TreeNode


class OrganizationChartArgs(BaseChartArgs):
    data: OrgNode
    orient: Literal["horizontal", "vertical"] = "vertical"


class FishboneDiagramArgs(BaseChartArgs):
    data: TreeNode

    @field_validator("data")
    @classmethod
    def _limit_depth(cls, value: TreeNode) -> TreeNode:
        validate_tree_depth(value)
        return value


# -- Stock chart (rendered locally) -------------------------------------------

class CandlestickStyle(ChartModel):
    background_color: Optional[str] = None
    palette: Optional[list[str]] = None
    show_volume: bool = True
    up_color: str = "#f04864"
    down_color: str = "#2fc25b"
    candle_width: Optional[PositiveNumber] = None


class CandlestickChartArgs(ChartModel):
    """OHLC records; size defaults are left to the local renderer."""

    data: list[Candle]
    style: Optional[CandlestickStyle] = None
    theme: Theme = "default"
    width: Optional[PositiveNumber] = None
    height: Optional[PositiveNumber] = None
    title: str = ""
    axis_x_title: str = ""
    axis_y_title: str = ""

    @field_validator("data")
    @classmethod
    def _non_empty(cls, value: list[Candle]) -> list[Candle]:
        if not value:
            raise ValueError("Candlestick chart data cannot be empty.")
        return value


# -- Maps ---------------------------------------------------------------------

class MapArgs(ChartModel):
    title: str
    width: PositiveNumber = 1600
    height: PositiveNumber = 1000


class MarkerPopup(ChartModel):
    type: Literal["image"] = "image"
    width: Number = 40
    height: Number = 40
    border_radius: Number = 8


class PinMapArgs(MapArgs):
    data: list[str] = Field(min_length=1, description="Names of the points of interest.")
    marker_popup: Optional[MarkerPopup] = None


class RouteStops(ChartModel):
    data: list[str] = Field(min_length=1)


class PathMapArgs(MapArgs):
    data: list[RouteStops] = Field(min_length=1)


class DistrictData(ChartModel):
    model_config = ConfigDict(extra="allow")

    name: str
    style: Optional[dict[str, Any]] = None
    colors: Optional[list[str]] = None
    data_type: Optional[Literal["number", "enum"]] = None
    data_label: Optional[str] = None
    data_value: Optional[Union[str, Number]] = None
    data_value_unit: Optional[str] = None
    show_all_subdistricts: bool = False
    subdistricts: Optional[list[dict[str, Any]]] = None


class DistrictMapArgs(MapArgs):
    data: DistrictData


# -- Unified entry point (tool catalog only) ----------------------------------

class UnifiedChartArgs(ChartModel):
    """Arguments of ``generate_chart``; ``data`` depends on ``type``."""

    type: ChartType = Field(description="The type of chart to generate.")
    data: Any = Field(None, description="Chart data; its structure depends on the chart type.")
    style: Optional[ChartStyle] = None
    theme: Optional[Theme] = None
    width: Optional[PositiveNumber] = None
    height: Optional[PositiveNumber] = None
    title: Optional[str] = None
    axis_x_title: Optional[str] = None
    axis_y_title: Optional[str] = None
