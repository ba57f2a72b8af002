import asyncio
from unittest.mock import patch

import pytest
import requests
from mcp.types import CallToolRequest, CallToolRequestParams, TextContent

from applovin_max_mcp import server
from applovin_max_mcp.server import TOOL_HANDLERS, ToolInvocationError, call_tool, list_tools

REPORT_ARGS = {
    "start": "2024-01-01",
    "end": "2024-01-31",
    "format": "json",
    "columns": ["day"],
}


class TestServer:
    """Tests for tool listing and dispatch."""

    def test_list_tools(self):
        tools = asyncio.run(list_tools())
        assert [tool.name for tool in tools] == ["revenue_report", "cohort_request"]

    def test_registry(self):
        assert set(TOOL_HANDLERS) == {"revenue_report", "cohort_request"}
        assert server.app.name == "applovin-max"

    def test_success_returns_text_content(self, monkeypatch, make_response):
        monkeypatch.setenv("APPLOVIN_API_KEY", "env-key")
        with patch.object(requests.Session, "send", return_value=make_response(200, "day\n2024-01-01\n")) as send:
            content = asyncio.run(call_tool("revenue_report", REPORT_ARGS))

        assert content == [TextContent(type="text", text="day\n2024-01-01\n")]
        send.assert_called_once()

    def test_base_url_from_environment(self, monkeypatch, make_response, sent_url):
        monkeypatch.setenv("APPLOVIN_API_KEY", "env-key")
        monkeypatch.setenv("APPLOVIN_MAX_BASE_URL", "http://localhost:8080")
        with patch.object(requests.Session, "send", return_value=make_response()) as send:
            asyncio.run(call_tool("cohort_request", dict(REPORT_ARGS, cohort_type="session")))

        assert sent_url(send).startswith("http://localhost:8080/maxCohort/session?")

    def test_error_result_raises(self, monkeypatch):
        monkeypatch.setenv("APPLOVIN_API_KEY", "env-key")
        with patch.object(requests.Session, "send") as send:
            with pytest.raises(ToolInvocationError, match="format required"):
                asyncio.run(call_tool("revenue_report", {"start": "2024-01-01", "end": "2024-01-31"}))

        send.assert_not_called()

    def test_status_error_raises(self, monkeypatch, make_response):
        monkeypatch.setenv("APPLOVIN_API_KEY", "env-key")
        with patch.object(requests.Session, "send", return_value=make_response(400, '{"error":"bad date"}')):
            with pytest.raises(ToolInvocationError) as excinfo:
                asyncio.run(call_tool("revenue_report", REPORT_ARGS))

        assert "400" in str(excinfo.value)
        assert '{"error":"bad date"}' in str(excinfo.value)

    def test_missing_arguments_object(self, monkeypatch):
        monkeypatch.setenv("APPLOVIN_API_KEY", "env-key")
        with pytest.raises(ToolInvocationError, match="start required"):
            asyncio.run(call_tool("cohort_request", None))

    def test_unknown_tool(self):
        with pytest.raises(ToolInvocationError, match="Unknown tool: max_ad_units"):
            asyncio.run(call_tool("max_ad_units", {}))

    def test_unexpected_exception_wrapped(self, monkeypatch):
        def explode(arguments):
            raise RuntimeError("boom")

        monkeypatch.setattr(TOOL_HANDLERS["revenue_report"], "run_tool", explode)
        with pytest.raises(ToolInvocationError, match="RuntimeError: boom"):
            asyncio.run(call_tool("revenue_report", REPORT_ARGS))


def _dispatch(name, arguments):
    """Send a tools/call request through the MCP request handler."""
    handler = server.app.request_handlers[CallToolRequest]
    request = CallToolRequest(
        method="tools/call",
        params=CallToolRequestParams(name=name, arguments=arguments),
    )
    return asyncio.run(handler(request)).root


class TestCallToolDispatch:
    """Tests for tools/call as routed by the MCP server."""

    def test_success(self, monkeypatch, make_response):
        monkeypatch.setenv("APPLOVIN_API_KEY", "env-key")
        with patch.object(requests.Session, "send", return_value=make_response(200, '{"results": [1]}')):
            result = _dispatch("revenue_report", REPORT_ARGS)

        assert result.isError is False
        assert result.content[0].text == '{"results": [1]}'

    def test_missing_start(self, monkeypatch):
        monkeypatch.setenv("APPLOVIN_API_KEY", "env-key")
        arguments = {k: v for k, v in REPORT_ARGS.items() if k != "start"}
        with patch.object(requests.Session, "send") as send:
            result = _dispatch("revenue_report", arguments)

        assert result.isError is True
        assert "start" in result.content[0].text
        send.assert_not_called()

    def test_interval_outside_allow_list(self, monkeypatch):
        monkeypatch.setenv("APPLOVIN_API_KEY", "env-key")
        arguments = dict(REPORT_ARGS, columns=["ads_rpi"], cohort_interval="9")
        with patch.object(requests.Session, "send") as send:
            result = _dispatch("cohort_request", arguments)

        assert result.isError is True
        assert "invalid cohort_interval: 9" in result.content[0].text
        send.assert_not_called()

    def test_numeric_interval_and_uppercase_columns(self, monkeypatch, make_response, sent_query):
        monkeypatch.setenv("APPLOVIN_API_KEY", "env-key")
        arguments = dict(REPORT_ARGS, columns=["DAY", "ADS_RPI"], cohort_interval=2)
        with patch.object(requests.Session, "send", return_value=make_response()) as send:
            result = _dispatch("cohort_request", arguments)

        assert result.isError is False
        assert sent_query(send)["columns"] == ["day,ads_rpi_0,ads_rpi_1,ads_rpi_2"]

    def test_session_closed_after_call(self, monkeypatch, make_response):
        monkeypatch.setenv("APPLOVIN_API_KEY", "env-key")
        with patch.object(requests.Session, "send", return_value=make_response()), \
                patch.object(requests.Session, "close") as close:
            _dispatch("revenue_report", REPORT_ARGS)

        close.assert_called_once()

    def test_unknown_tool(self):
        result = _dispatch("max_ad_units", {})

        assert result.isError is True
        assert "Unknown tool: max_ad_units" in result.content[0].text
