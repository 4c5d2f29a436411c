"""Tests for local candlestick rendering and data-URI helpers."""

from __future__ import annotations

import pytest

from chartmcp.rendering import build_render_options, from_data_uri, render_candlestick, to_data_uri

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

CANDLES = [
    {"date": "2024-01-01", "open": 10, "close": 12, "high": 13, "low": 9, "volume": 1000},
    {"date": "2024-01-02", "open": 12, "close": 11, "high": 12.5, "low": 10.5, "volume": 800},
    {"date": "2024-01-03", "open": 11, "close": 11, "high": 11.5, "low": 10.8, "volume": 500},
]


class TestDataUri:
    def test_round_trip(self):
        uri = to_data_uri(PNG_SIGNATURE)
        assert uri.startswith("data:image/png;base64,")
        assert from_data_uri(uri) == PNG_SIGNATURE

    def test_other_image_prefix_stripped(self):
        uri = to_data_uri(PNG_SIGNATURE).replace("image/png", "image/jpeg")
        assert from_data_uri(uri) == PNG_SIGNATURE

    def test_invalid_base64(self):
        with pytest.raises(ValueError):
            from_data_uri("data:image/png;base64,***")


class TestRenderOptions:
    def test_literal_defaults(self):
        options = build_render_options({"data": CANDLES})
        assert options["width"] == 800
        assert options["height"] == 600
        assert options["title"] == ""
        assert options["style"] == {}
        assert options["theme"] == "default"

    def test_caller_values_kept(self):
        options = build_render_options({
            "data": CANDLES, "width": 1024, "theme": "dark", "axisXTitle": "Date",
        })
        assert options["width"] == 1024
        assert options["height"] == 600
        assert options["theme"] == "dark"
        assert options["axisXTitle"] == "Date"


class TestRenderCandlestick:
    def test_renders_png(self):
        uri = render_candlestick(build_render_options({"data": CANDLES, "title": "ACME"}))
        assert from_data_uri(uri).startswith(PNG_SIGNATURE)

    def test_dark_theme_without_volume(self):
        records = [{k: v for k, v in c.items() if k != "volume"} for c in CANDLES]
        options = build_render_options({
            "data": records,
            "theme": "dark",
            "style": {"upColor": "#00ff00", "downColor": "#ff0000", "candleWidth": 20},
            "axisXTitle": "Date",
            "axisYTitle": "Price",
        })
        assert from_data_uri(render_candlestick(options)).startswith(PNG_SIGNATURE)

    def test_volume_panel_can_be_hidden(self):
        options = build_render_options({"data": CANDLES, "style": {"showVolume": False}})
        assert from_data_uri(render_candlestick(options)).startswith(PNG_SIGNATURE)

    def test_empty_data_raises(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            render_candlestick(build_render_options({"data": []}))

    def test_malformed_record_raises(self):
        with pytest.raises(KeyError):
            render_candlestick(build_render_options({"data": [{"date": "2024-01-01", "open": 1}]}))

    def test_missing_data_raises(self):
        with pytest.raises(ValueError):
            render_candlestick(build_render_options({}))
