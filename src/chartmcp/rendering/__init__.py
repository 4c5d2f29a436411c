"""In-process chart rendering."""

from .candlestick import build_render_options, render_candlestick
from .images import from_data_uri, to_data_uri

__all__ = ["build_render_options", "from_data_uri", "render_candlestick", "to_data_uri"]
