"""MCP stdio server exposing Feedbucket feedback tools."""

import logging
import sys
from typing import Annotated, Any, Literal

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from feedbucket_mcp import __version__
from feedbucket_mcp.models.config import ConfigurationError, FeedbucketConfig
from feedbucket_mcp.services.feedback_service import FeedbackService
from feedbucket_mcp.services.tool_service import FeedbackTools

logger = logging.getLogger(__name__)

SERVER_NAME = "feedbucket-collector"


def call_tool(tools: FeedbackTools, name: str, arguments: dict[str, Any]) -> str:
    """Run a tool and hand the host either its text or an error result."""
    result = tools.execute_tool(name, arguments)
    if result.is_error:
        raise ToolError(result.text)
    return result.text


def create_server(tools: FeedbackTools) -> FastMCP:
    """Register every feedback tool on a new FastMCP server."""
    mcp = FastMCP(SERVER_NAME)

    @mcp.tool(
        name="feedback_list",
        description=(
            "Fetch feedback items from the Feedbucket project with filtering "
            "for AI consumption. Responses are summarized and paginated to "
            "stay small."
        ),
    )
    def feedback_list(
        resolved: Annotated[
            bool | None,
            Field(description="True for resolved items, False for unresolved"),
        ] = None,
        limit: Annotated[
            int | None,
            Field(
                ge=1,
                description="Number of items to retrieve (default 10, capped at 50)",
            ),
        ] = None,
        offset: Annotated[
            int | None,
            Field(ge=0, description="Number of items to skip (default 0)"),
        ] = None,
        summary: Annotated[
            bool | None,
            Field(description="Return condensed summaries (default true)"),
        ] = None,
        page_filter: Annotated[
            str | None, Field(description="Partial match on the page URL")
        ] = None,
        reporter_filter: Annotated[
            str | None, Field(description="Partial match on the reporter name")
        ] = None,
        feedback_type: Annotated[
            Literal["screenshot", "video", "text"] | None,
            Field(description="Filter by feedback type"),
        ] = None,
        created_after: Annotated[
            str | None,
            Field(
                description=(
                    "Created at or after this ISO date, "
                    "e.g. 2025-01-01T00:00:00Z"
                )
            ),
        ] = None,
        created_before: Annotated[
            str | None,
            Field(description="Created at or before this ISO date"),
        ] = None,
    ) -> str:
        return call_tool(
            tools,
            "feedback_list",
            {
                "resolved": resolved,
                "limit": limit,
                "offset": offset,
                "summary": summary,
                "page_filter": page_filter,
                "reporter_filter": reporter_filter,
                "feedback_type": feedback_type,
                "created_after": created_after,
                "created_before": created_before,
            },
        )

    @mcp.tool(
        name="feedback_get",
        description=(
            "Get full details of a feedback item including comments, "
            "attachments and session data"
        ),
    )
    def feedback_get(
        feedback_id: Annotated[int, Field(description="The feedback ID to retrieve")],
    ) -> str:
        return call_tool(tools, "feedback_get", {"feedback_id": feedback_id})

    @mcp.tool(
        name="feedback_stats",
        description=(
            "Project feedback statistics: totals, resolved/unresolved, counts "
            "by type, recent activity and top pages"
        ),
    )
    def feedback_stats() -> str:
        return call_tool(tools, "feedback_stats", {})

    @mcp.tool(
        name="feedback_comment",
        description=(
            "Add a comment to a feedback item to ask for clarification "
            "or give updates"
        ),
    )
    def feedback_comment(
        feedback_id: Annotated[int, Field(description="The feedback ID to comment on")],
        comment: Annotated[str, Field(description="The comment text")],
        reporter_name: Annotated[
            str | None,
            Field(description='Commenter name (defaults to "Claude AI Assistant")'),
        ] = None,
        reporter_email: Annotated[
            str | None, Field(description="Commenter email")
        ] = None,
        resolve: Annotated[
            bool, Field(description="Also resolve the feedback (default false)")
        ] = False,
    ) -> str:
        return call_tool(
            tools,
            "feedback_comment",
            {
                "feedback_id": feedback_id,
                "comment": comment,
                "reporter_name": reporter_name,
                "reporter_email": reporter_email,
                "resolve": resolve,
            },
        )

    @mcp.tool(
        name="feedback_resolve",
        description="Mark a feedback item as resolved after actioning it",
    )
    def feedback_resolve(
        feedback_id: Annotated[int, Field(description="The feedback ID to resolve")],
    ) -> str:
        return call_tool(tools, "feedback_resolve", {"feedback_id": feedback_id})

    @mcp.tool(
        name="api_status",
        description="Check Feedbucket API connection status and configuration",
    )
    def api_status() -> str:
        return call_tool(tools, "api_status", {})

    return mcp


def main() -> None:
    """Entry point for the ``feedbucket-mcp`` console script."""
    # stdout carries the protocol, so logs go to stderr
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    try:
        config = FeedbucketConfig.from_env()
    except ConfigurationError as e:
        logger.error(f"Failed to initialize Feedbucket API: {e}")
        sys.exit(1)

    logging.getLogger().setLevel(config.log_level)
    logger.info(
        f"Starting {SERVER_NAME} {__version__} for project {config.project_id}"
    )

    tools = FeedbackTools(FeedbackService(config))
    create_server(tools).run(transport="stdio")


if __name__ == "__main__":
    main()
