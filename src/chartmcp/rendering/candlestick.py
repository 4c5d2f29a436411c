"""Local candlestick rendering with matplotlib.

Draws OHLC records (plus an optional volume panel) on an offscreen Agg
canvas and returns the PNG as a ``data:image/png;base64,…`` URI.  No
network access; malformed records raise whatever error matplotlib or
the record lookup produces, and the caller decides how to recover.
"""

from __future__ import annotations

import io
import logging
from typing import Any

import matplotlib

matplotlib.use("Agg")

from matplotlib.backends.backend_agg import FigureCanvasAgg  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402
from matplotlib.patches import Rectangle  # noqa: E402

from .images import to_data_uri  # noqa: E402

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
_DPI = 100

_UP_COLOR = "#ef232a"
_DOWN_COLOR = "#14b143"
_FONT_FAMILY = ["Arial", "DejaVu Sans", "sans-serif"]

# Candle body width in x-axis units (one unit per trading day)
_BODY_WIDTH = 0.6
_MAX_TICKS = 10


def build_render_options(arguments: dict[str, Any]) -> dict[str, Any]:
    """Renderer options with literal defaults for every optional field."""
    return {
        **arguments,
        "data": arguments.get("data"),
        "width": arguments.get("width") or DEFAULT_WIDTH,
        "height": arguments.get("height") or DEFAULT_HEIGHT,
        "title": arguments.get("title") or "",
        "style": arguments.get("style") or {},
        "theme": arguments.get("theme") or "default",
    }


def _palette(theme: str, style: dict[str, Any]) -> dict[str, str]:
    dark = theme == "dark"
    return {
        "background": style.get("backgroundColor") or ("#1e1e1e" if dark else "#ffffff"),
        "text": "#ffffff" if dark else "#333333",
        "up": style.get("upColor") or _UP_COLOR,
        "down": style.get("downColor") or _DOWN_COLOR,
    }


def _body_width(style: dict[str, Any], plot_px: float, count: int) -> float:
    """Convert an optional ``candleWidth`` in pixels to x-axis units."""
    candle_px = style.get("candleWidth")
    if not candle_px:
        return _BODY_WIDTH
    return min(float(candle_px) / (plot_px / max(count, 1)), 0.95)


def render_candlestick(options: dict[str, Any]) -> str:
    """Render a candlestick chart and return it as a PNG data URI."""
    data: list[dict[str, Any]] = options["data"]
    if not data:
        raise ValueError("Candlestick chart data cannot be empty.")

    width = float(options.get("width") or DEFAULT_WIDTH)
    height = float(options.get("height") or DEFAULT_HEIGHT)
    style: dict[str, Any] = options.get("style") or {}
    colors = _palette(options.get("theme") or "default", style)

    volumes = [record.get("volume") for record in data]
    show_volume = style.get("showVolume", True) and any(v is not None for v in volumes)

    fig = Figure(figsize=(width / _DPI, height / _DPI), dpi=_DPI, facecolor=colors["background"])
    FigureCanvasAgg(fig)
    if show_volume:
        grid = fig.add_gridspec(2, 1, height_ratios=[3, 1], hspace=0.05)
        ax = fig.add_subplot(grid[0])
        volume_ax = fig.add_subplot(grid[1], sharex=ax)
    else:
        ax = fig.add_subplot(1, 1, 1)
        volume_ax = None
    fig.subplots_adjust(left=0.1, right=0.9, bottom=0.15)

    body = _body_width(style, width * 0.8, len(data))
    candle_colors: list[str] = []
    for i, record in enumerate(data):
        open_, close = float(record["open"]), float(record["close"])
        high, low = float(record["high"]), float(record["low"])
        color = colors["up"] if close >= open_ else colors["down"]
        candle_colors.append(color)

        ax.vlines(i, low, high, color=color, linewidth=1)
        body_height = abs(close - open_) or max((high - low) * 0.002, 1e-9)
        ax.add_patch(Rectangle(
            (i - body / 2, min(open_, close)), body, body_height,
            facecolor=color, edgecolor=color,
        ))

    ax.set_xlim(-1, len(data))
    ax.autoscale_view(scalex=False)

    step = max(1, len(data) // _MAX_TICKS)
    ticks = list(range(0, len(data), step))
    label_ax = volume_ax if volume_ax is not None else ax
    label_ax.set_xticks(ticks)
    label_ax.set_xticklabels([str(data[i]["date"]) for i in ticks], rotation=30, ha="right")

    if volume_ax is not None:
        volume_ax.bar(
            range(len(data)),
            [float(v or 0) for v in volumes],
            width=body,
            color=candle_colors,
        )
        ax.tick_params(axis="x", labelbottom=False)

    for axis in filter(None, (ax, volume_ax)):
        axis.set_facecolor(colors["background"])
        axis.tick_params(colors=colors["text"])
        for spine in axis.spines.values():
            spine.set_color(colors["text"])

    text_kw = {"color": colors["text"], "fontfamily": _FONT_FAMILY}
    if options.get("title"):
        ax.set_title(options["title"], loc="center", **text_kw)
    if options.get("axisXTitle"):
        label_ax.set_xlabel(options["axisXTitle"], **text_kw)
    if options.get("axisYTitle"):
        ax.set_ylabel(options["axisYTitle"], **text_kw)

    buf = io.BytesIO()
    fig.savefig(buf, format="png", facecolor=colors["background"])
    png = buf.getvalue()
    logger.debug("Rendered candlestick chart locally (%d candles, %d bytes)", len(data), len(png))
    return to_data_uri(png)
