"""Chart-type registry.

Every ``ChartType`` is described by exactly one ``ChartSpec`` carrying
its tool name, its argument schema, and the strategy that produces it.
``CHART_REGISTRY`` maps chart type → spec; ``TOOL_CHART_TYPES`` maps
tool name → chart type.  Both are populated at import time and never
mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel

from ..models import UNIFIED_TOOL_NAME, ChartType, StrategyKind
from . import schemas


@dataclass(frozen=True)
class ChartSpec:
    """Static description of one chart type."""

    chart_type: ChartType
    tool_name: str                          # e.g. "generate_line_chart"
    description: str
    schema: Optional[type[BaseModel]] = None
    strategy: StrategyKind = StrategyKind.REMOTE_CHART


# ---------------------------------------------------------------------------
# Registry: one entry per chart type
# ---------------------------------------------------------------------------

CHART_REGISTRY: dict[ChartType, ChartSpec] = {}


def register_chart(spec: ChartSpec) -> ChartSpec:
    """Register a chart spec in the global registry."""
    CHART_REGISTRY[spec.chart_type] = spec
    return spec


# -- Statistical charts -----------------------------------------------------

register_chart(ChartSpec(
    ChartType.AREA, "generate_area_chart",
    "Generate an area chart to show data trends under a continuous independent variable.",
    schemas.AreaChartArgs,
))
register_chart(ChartSpec(
    ChartType.BAR, "generate_bar_chart",
    "Generate a horizontal bar chart to compare values across categories.",
    schemas.BarChartArgs,
))
register_chart(ChartSpec(
    ChartType.BOXPLOT, "generate_boxplot_chart",
    "Generate a boxplot to show the distribution of data by quartiles and outliers.",
    schemas.BoxplotChartArgs,
))
register_chart(ChartSpec(
    ChartType.COLUMN, "generate_column_chart",
    "Generate a vertical column chart to compare values across categories.",
    schemas.ColumnChartArgs,
))
register_chart(ChartSpec(
    ChartType.DUAL_AXES, "generate_dual_axes_chart",
    "Generate a dual-axes chart combining columns and lines over shared categories.",
    schemas.DualAxesChartArgs,
))
register_chart(ChartSpec(
    ChartType.FUNNEL, "generate_funnel_chart",
    "Generate a funnel chart to show data loss across the stages of a process.",
    schemas.FunnelChartArgs,
))
register_chart(ChartSpec(
    ChartType.HISTOGRAM, "generate_histogram_chart",
    "Generate a histogram to show the frequency distribution of numeric data.",
    schemas.HistogramChartArgs,
))
register_chart(ChartSpec(
    ChartType.LINE, "generate_line_chart",
    "Generate a line chart to show trends over time.",
    schemas.LineChartArgs,
))
register_chart(ChartSpec(
    ChartType.LIQUID, "generate_liquid_chart",
    "Generate a liquid chart to visualize a single ratio or progress value.",
    schemas.LiquidChartArgs,
))
register_chart(ChartSpec(
    ChartType.PIE, "generate_pie_chart",
    "Generate a pie or donut chart to show the proportion of parts to a whole.",
    schemas.PieChartArgs,
))
register_chart(ChartSpec(
    ChartType.RADAR, "generate_radar_chart",
    "Generate a radar chart to compare multi-dimensional data.",
    schemas.RadarChartArgs,
))
register_chart(ChartSpec(
    ChartType.SANKEY, "generate_sankey_chart",
    "Generate a sankey diagram to show flows between nodes.",
    schemas.SankeyChartArgs,
))
register_chart(ChartSpec(
    ChartType.SCATTER, "generate_scatter_chart",
    "Generate a scatter plot to show the relationship between two variables.",
    schemas.ScatterChartArgs,
))
register_chart(ChartSpec(
    ChartType.TREEMAP, "generate_treemap_chart",
    "Generate a treemap to show hierarchical data as nested rectangles.",
    schemas.TreemapChartArgs,
))
register_chart(ChartSpec(
    ChartType.VENN, "generate_venn_chart",
    "Generate a venn diagram to show overlaps between sets.",
    schemas.VennChartArgs,
))
register_chart(ChartSpec(
    ChartType.VIOLIN, "generate_violin_chart",
    "Generate a violin plot to show the distribution density of data.",
    schemas.ViolinChartArgs,
))
register_chart(ChartSpec(
    ChartType.WORD_CLOUD, "generate_word_cloud_chart",
    "Generate a word cloud to show word frequency or weight.",
    schemas.WordCloudChartArgs,
))

# -- Diagrams ---------------------------------------------------------------

register_chart(ChartSpec(
    ChartType.FISHBONE_DIAGRAM, "generate_fishbone_diagram",
    "Generate a fishbone (Ishikawa) diagram to analyse the causes of a problem.",
    schemas.FishboneDiagramArgs,
))
register_chart(ChartSpec(
    ChartType.FLOW_DIAGRAM, "generate_flow_diagram",
    "Generate a flow diagram to show the steps and decisions of a process.",
    schemas.FlowDiagramArgs,
))
register_chart(ChartSpec(
    ChartType.MIND_MAP, "generate_mind_map",
    "Generate a mind map to organise ideas around a central topic.",
    schemas.MindMapArgs,
))
register_chart(ChartSpec(
    ChartType.NETWORK_GRAPH, "generate_network_graph",
    "Generate a network graph to show relationships between entities.",
    schemas.NetworkGraphArgs,
))
register_chart(ChartSpec(
    ChartType.ORGANIZATION_CHART, "generate_organization_chart",
    "Generate an organization chart to show reporting structure.",
    schemas.OrganizationChartArgs,
))

# -- Stock charts (local render + upload) -------------------------------------

register_chart(ChartSpec(
    ChartType.CANDLESTICK, "generate_candlestick_chart",
    "Generate a candlestick chart (K-line chart) to display price movements: "
    "open, close, high and low. Used for stocks, cryptocurrencies, futures, "
    "forex and other financial instruments.",
    schemas.CandlestickChartArgs,
    StrategyKind.LOCAL_RENDER,
))

# -- Maps (geo API) -----------------------------------------------------------

register_chart(ChartSpec(
    ChartType.DISTRICT_MAP, "generate_district_map",
    "Generate an administrative district map, optionally colored by data.",
    schemas.DistrictMapArgs,
    StrategyKind.MAP,
))
register_chart(ChartSpec(
    ChartType.PATH_MAP, "generate_path_map",
    "Generate a route map connecting points of interest in order.",
    schemas.PathMapArgs,
    StrategyKind.MAP,
))
register_chart(ChartSpec(
    ChartType.PIN_MAP, "generate_pin_map",
    "Generate a pin map showing the distribution of points of interest.",
    schemas.PinMapArgs,
    StrategyKind.MAP,
))


# ---------------------------------------------------------------------------
# Derived lookups
# ---------------------------------------------------------------------------

def _check_registry() -> None:
    missing = [t.value for t in ChartType if t not in CHART_REGISTRY]
    if missing:
        raise RuntimeError(f"Chart types without a registry entry: {', '.join(missing)}")


_check_registry()

TOOL_CHART_TYPES: dict[str, ChartType] = {
    spec.tool_name: spec.chart_type for spec in CHART_REGISTRY.values()
}

SUPPORTED_CHART_TYPES: tuple[str, ...] = tuple(sorted(t.value for t in CHART_REGISTRY))


def get_spec(chart_type: ChartType) -> ChartSpec:
    return CHART_REGISTRY[chart_type]


def map_tool_name(chart_type: ChartType) -> str:
    """Tool name the Map API expects for a map chart type.

    ``pin-map`` → ``generate_pin_map``.
    """
    return "generate_" + chart_type.value.replace("-", "_")


__all__ = [
    "CHART_REGISTRY",
    "ChartSpec",
    "SUPPORTED_CHART_TYPES",
    "TOOL_CHART_TYPES",
    "UNIFIED_TOOL_NAME",
    "get_spec",
    "map_tool_name",
    "register_chart",
]
