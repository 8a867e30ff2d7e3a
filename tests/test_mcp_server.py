"""Tests for the MCP server wiring."""

import asyncio
import os
from unittest.mock import Mock, patch

import pytest
from fastmcp import Client, FastMCP
from fastmcp.exceptions import ToolError

from feedbucket_mcp.handlers import mcp_server
from feedbucket_mcp.services.tool_service import ToolResult


class TestCallTool:
    def test_returns_text(self):
        tools = Mock()
        tools.execute_tool.return_value = ToolResult(text='{"status": "connected"}')

        assert mcp_server.call_tool(tools, "api_status", {}) == '{"status": "connected"}'
        tools.execute_tool.assert_called_once_with("api_status", {})

    def test_error_result_raises_tool_error(self):
        tools = Mock()
        tools.execute_tool.return_value = ToolResult(
            text='{"error": "API Error (500): boom"}', is_error=True
        )

        with pytest.raises(ToolError) as exc_info:
            mcp_server.call_tool(tools, "feedback_stats", {})

        assert "API Error (500)" in str(exc_info.value)


def test_create_server():
    server = mcp_server.create_server(Mock())

    assert isinstance(server, FastMCP)
    assert server.name == mcp_server.SERVER_NAME


class TestRegisteredTools:
    """Tools called through an in-memory MCP client."""

    def _call(self, tools, name, arguments):
        async def run():
            async with Client(mcp_server.create_server(tools)) as client:
                return await client.call_tool(name, arguments)

        return asyncio.run(run())

    def test_feedback_list_forwards_every_argument(self):
        tools = Mock()
        tools.execute_tool.return_value = ToolResult(text="{}")

        self._call(
            tools,
            "feedback_list",
            {"page_filter": "/pricing", "feedback_type": "video", "limit": 5},
        )

        tools.execute_tool.assert_called_once_with(
            "feedback_list",
            {
                "resolved": None,
                "limit": 5,
                "offset": None,
                "summary": None,
                "page_filter": "/pricing",
                "reporter_filter": None,
                "feedback_type": "video",
                "created_after": None,
                "created_before": None,
            },
        )

    def test_feedback_comment_forwards_arguments(self):
        tools = Mock()
        tools.execute_tool.return_value = ToolResult(text="{}")

        self._call(
            tools, "feedback_comment", {"feedback_id": 12, "comment": "Thanks!"}
        )

        tools.execute_tool.assert_called_once_with(
            "feedback_comment",
            {
                "feedback_id": 12,
                "comment": "Thanks!",
                "reporter_name": None,
                "reporter_email": None,
                "resolve": False,
            },
        )


class TestMain:
    """Tests for the console entry point."""

    @patch.dict(os.environ, {}, clear=True)
    def test_exits_when_credentials_missing(self):
        with pytest.raises(SystemExit) as exc_info:
            mcp_server.main()

        assert exc_info.value.code == 1

    @patch.dict(
        os.environ,
        {
            "FEEDBUCKET_PROJECT_ID": "S3q9juJHLaa1f7U3kBAx",
            "FEEDBUCKET_PRIVATE_KEY": "priv-key-123456",
            "FEEDBUCKET_LOG_LEVEL": "VERBOSE",
        },
        clear=True,
    )
    @patch("feedbucket_mcp.handlers.mcp_server.create_server")
    def test_exits_on_unknown_log_level(self, mock_create_server):
        with pytest.raises(SystemExit) as exc_info:
            mcp_server.main()

        assert exc_info.value.code == 1
        mock_create_server.assert_not_called()

    @patch.dict(
        os.environ,
        {
            "FEEDBUCKET_PROJECT_ID": "S3q9juJHLaa1f7U3kBAx",
            "FEEDBUCKET_PRIVATE_KEY": "priv-key-123456",
            "FEEDBUCKET_LOG_LEVEL": "warning",
        },
        clear=True,
    )
    @patch("feedbucket_mcp.handlers.mcp_server.create_server")
    def test_runs_stdio_server(self, mock_create_server):
        mcp_server.main()

        tools = mock_create_server.call_args.args[0]
        assert tools.feedback_service.config.project_id == "S3q9juJHLaa1f7U3kBAx"
        mock_create_server.return_value.run.assert_called_once_with(transport="stdio")
