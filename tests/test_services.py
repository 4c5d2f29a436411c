"""Tests for the HTTP service clients (mocked with httpx.MockTransport)."""

from __future__ import annotations

import json

import httpx
import pytest

from chartmcp.config import SOURCE_TAG, ServerConfig
from chartmcp.errors import ConfigurationError, GenerationError, UploadError
from chartmcp.rendering.images import from_data_uri, to_data_uri
from chartmcp.services import RenderServiceClient, UploadClient, VisApiClient


FAKE_PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 200
CONFIG = ServerConfig(
    vis_request_server="http://vis.test/api",
    service_id="svc-42",
    upload_api="http://files.test/upload",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def json_handler(body, captured: list | None = None, status: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        if captured is not None:
            captured.append(request)
        return httpx.Response(status, json=body)
    return handler


def refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Connection refused", request=request)


# ===================================================================
# 1. Chart API
# ===================================================================

class TestChartApi:
    @pytest.mark.asyncio
    async def test_success_returns_url(self):
        captured: list[httpx.Request] = []
        handler = json_handler({"success": True, "resultObj": "http://x/y.png"}, captured)
        async with mock_client(handler) as client:
            url = await VisApiClient(CONFIG, client).generate_chart_url("line", {"data": [1]})

        assert url == "http://x/y.png"
        sent = json.loads(captured[0].content)
        assert sent == {"type": "line", "data": [1], "source": SOURCE_TAG}
        assert str(captured[0].url) == "http://vis.test/api"

    @pytest.mark.asyncio
    async def test_failure_uses_error_message(self):
        handler = json_handler({"success": False, "errorMessage": "quota exceeded"})
        async with mock_client(handler) as client:
            with pytest.raises(GenerationError, match="quota exceeded"):
                await VisApiClient(CONFIG, client).generate_chart_url("line", {})

    @pytest.mark.asyncio
    async def test_failure_without_message(self):
        handler = json_handler({"success": False})
        async with mock_client(handler) as client:
            with pytest.raises(GenerationError, match="Chart generation failed"):
                await VisApiClient(CONFIG, client).generate_chart_url("line", {})

    @pytest.mark.asyncio
    async def test_network_error_has_own_message(self):
        async with mock_client(refuse) as client:
            with pytest.raises(GenerationError, match="Failed to generate chart URL: Connection refused"):
                await VisApiClient(CONFIG, client).generate_chart_url("line", {})

    @pytest.mark.asyncio
    async def test_http_status_error_propagates(self):
        handler = json_handler({"oops": True}, status=502)
        async with mock_client(handler) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await VisApiClient(CONFIG, client).generate_chart_url("line", {})

    @pytest.mark.asyncio
    async def test_missing_url(self):
        handler = json_handler({"success": True, "resultObj": None})
        async with mock_client(handler) as client:
            with pytest.raises(GenerationError, match="no chart URL"):
                await VisApiClient(CONFIG, client).generate_chart_url("line", {})


# ===================================================================
# 2. Map API
# ===================================================================

class TestMapApi:
    @pytest.mark.asyncio
    async def test_success_returns_tool_result(self):
        captured: list[httpx.Request] = []
        body = {
            "success": True,
            "resultObj": {
                "metadata": {"trace": "abc"},
                "content": [{"type": "text", "text": "http://maps/1.png"}],
            },
        }
        async with mock_client(json_handler(body, captured)) as client:
            result = await VisApiClient(CONFIG, client).generate_map(
                "generate_pin_map", {"title": "POI", "data": ["A"]}
            )

        assert result.content == [{"type": "text", "text": "http://maps/1.png"}]
        assert result.is_error is None
        assert result.metadata == {"trace": "abc"}
        sent = json.loads(captured[0].content)
        assert sent == {
            "serviceId": "svc-42",
            "tool": "generate_pin_map",
            "input": {"title": "POI", "data": ["A"]},
            "source": SOURCE_TAG,
        }

    @pytest.mark.asyncio
    async def test_failure_default_message(self):
        async with mock_client(json_handler({"success": False})) as client:
            with pytest.raises(GenerationError, match="Map generation failed"):
                await VisApiClient(CONFIG, client).generate_map("generate_pin_map", {})

    @pytest.mark.asyncio
    async def test_empty_content(self):
        body = {"success": True, "resultObj": {"metadata": {"trace": "abc"}, "content": []}}
        async with mock_client(json_handler(body)) as client:
            with pytest.raises(GenerationError, match="Map API returned no content"):
                await VisApiClient(CONFIG, client).generate_map("generate_pin_map", {})

    @pytest.mark.asyncio
    async def test_missing_content(self):
        body = {"success": True, "resultObj": {"metadata": {}}}
        async with mock_client(json_handler(body)) as client:
            with pytest.raises(GenerationError, match="no content"):
                await VisApiClient(CONFIG, client).generate_map("generate_pin_map", {})

    @pytest.mark.asyncio
    async def test_network_error(self):
        async with mock_client(refuse) as client:
            with pytest.raises(GenerationError, match="Failed to generate map"):
                await VisApiClient(CONFIG, client).generate_map("generate_pin_map", {})


# ===================================================================
# 3. Rendering service
# ===================================================================

class TestRenderService:
    @pytest.mark.asyncio
    async def test_returns_data_uri(self):
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, content=FAKE_PNG, headers={"content-type": "image/png"})

        async with mock_client(handler) as client:
            image = await RenderServiceClient("http://render.test", client).render({"data": [1]})

        assert image.startswith("data:image/png;base64,")
        assert from_data_uri(image) == FAKE_PNG
        assert json.loads(captured[0].content) == {"data": [1]}

    @pytest.mark.asyncio
    async def test_not_configured(self):
        service = RenderServiceClient(None)
        assert service.configured is False
        with pytest.raises(ConfigurationError):
            await service.render({})

    @pytest.mark.asyncio
    async def test_http_error_wrapped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, content=b"boom")

        async with mock_client(handler) as client:
            with pytest.raises(GenerationError, match="Rendering service failed"):
                await RenderServiceClient("http://render.test", client).render({})

    @pytest.mark.asyncio
    async def test_empty_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"")

        async with mock_client(handler) as client:
            with pytest.raises(GenerationError, match="empty image"):
                await RenderServiceClient("http://render.test", client).render({})


# ===================================================================
# 4. Upload service
# ===================================================================

class TestUpload:
    @pytest.mark.asyncio
    async def test_upload_returns_url(self):
        captured: list[httpx.Request] = []
        handler = json_handler({"url": "http://files.test/chart.png"}, captured)
        async with mock_client(handler) as client:
            url = await UploadClient(CONFIG.upload_api, client).upload_image(to_data_uri(FAKE_PNG))

        assert url == "http://files.test/chart.png"
        body = captured[0].content
        assert b'filename="chart.png"' in body
        assert FAKE_PNG in body
        assert captured[0].headers["content-type"].startswith("multipart/form-data")

    @pytest.mark.asyncio
    async def test_accepts_bare_base64(self):
        handler = json_handler({"url": "http://files.test/a.png"})
        bare = to_data_uri(FAKE_PNG).split(",", 1)[1]
        async with mock_client(handler) as client:
            assert await UploadClient(CONFIG.upload_api, client).upload_image(bare) == "http://files.test/a.png"

    @pytest.mark.asyncio
    async def test_missing_url(self):
        async with mock_client(json_handler({"id": 1})) as client:
            with pytest.raises(UploadError, match="Failed to upload image: Upload failed: No URL in response"):
                await UploadClient(CONFIG.upload_api, client).upload_image(to_data_uri(FAKE_PNG))

    @pytest.mark.asyncio
    async def test_network_error_includes_cause(self):
        async with mock_client(refuse) as client:
            with pytest.raises(UploadError, match="Connection refused"):
                await UploadClient(CONFIG.upload_api, client).upload_image(to_data_uri(FAKE_PNG))
