"""Tool dispatch for the AI assistant surface.

This is the only place that catches every failure: each call yields a
``ToolResult``, flagged as an error when anything went wrong.
"""

import json
import logging
from typing import Any

from pydantic import BaseModel

from feedbucket_mcp.models.query import FeedbackFilter, ListQuery
from feedbucket_mcp.services.feedback_service import FeedbackService
from feedbucket_mcp.services.feedbucket_client import FeedbucketApiError

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
MAX_LIMIT = 50

TOOL_NAMES = (
    "feedback_list",
    "feedback_get",
    "feedback_stats",
    "feedback_comment",
    "feedback_resolve",
    "api_status",
)

# Tool argument name -> FeedbackFilter field
FILTER_ARGUMENTS = {
    "resolved": "resolved",
    "page_filter": "page",
    "reporter_filter": "reporter",
    "feedback_type": "type",
    "created_after": "created_after",
    "created_before": "created_before",
}


class ToolResult(BaseModel):
    """Text payload of a tool call."""

    text: str
    is_error: bool = False


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _require(arguments: dict[str, Any], name: str) -> Any:
    value = arguments.get(name)
    if value is None or value == "":
        raise ValueError(f"{name} parameter is required")
    return value


class FeedbackTools:
    """Executes named tools against a ``FeedbackService``."""

    def __init__(self, feedback_service: FeedbackService):
        self.feedback_service = feedback_service

    def execute_tool(
        self, tool_name: str, arguments: dict[str, Any] | None = None
    ) -> ToolResult:
        """Run a tool and render its result, or the failure, as JSON text."""
        arguments = arguments or {}
        try:
            data = self._dispatch(tool_name, arguments)
        except FeedbucketApiError as e:
            logger.error(f"Tool {tool_name} failed with API error {e.status}: {e}")
            return ToolResult(
                text=_to_json({"error": f"API Error ({e.status}): {e.message}"}),
                is_error=True,
            )
        except Exception as e:
            logger.error(f"Tool {tool_name} failed: {e}")
            return ToolResult(text=_to_json({"error": str(e)}), is_error=True)
        return ToolResult(text=_to_json(data))

    def _dispatch(self, tool_name: str, arguments: dict[str, Any]) -> dict:
        if tool_name == "feedback_list":
            return self._tool_feedback_list(arguments)
        elif tool_name == "feedback_get":
            return self._tool_feedback_get(int(_require(arguments, "feedback_id")))
        elif tool_name == "feedback_stats":
            return self.feedback_service.get_stats()
        elif tool_name == "feedback_comment":
            return self._tool_feedback_comment(arguments)
        elif tool_name == "feedback_resolve":
            return self._tool_feedback_resolve(
                int(_require(arguments, "feedback_id"))
            )
        elif tool_name == "api_status":
            return self.feedback_service.get_status()
        else:
            raise ValueError(f"Unknown tool: {tool_name}")

    def _tool_feedback_list(self, arguments: dict[str, Any]) -> dict:
        """List feedback with the limit ceiling applied."""
        requested_limit = arguments.get("limit") or DEFAULT_LIMIT
        limit = min(requested_limit, MAX_LIMIT)
        offset = arguments.get("offset") or 0
        summary = arguments.get("summary") is not False

        criteria = {
            field: arguments[name]
            for name, field in FILTER_ARGUMENTS.items()
            if arguments.get(name) is not None and arguments.get(name) != ""
        }
        feedback_filter = FeedbackFilter(**criteria) if criteria else None

        query = ListQuery(limit=limit, offset=offset, summary=summary)
        result = self.feedback_service.list_feedback(query, feedback_filter)
        returned = result.data_optimization.returned_count

        return {
            "project": result.project.name,
            "data_stats": result.data_optimization.model_dump(),
            "feedback": [
                item.model_dump(mode="json", by_alias=True) for item in result.feedback
            ],
            "pagination": {
                "showing": returned,
                "total_available": result.total_count,
                "offset": offset,
                "limit": limit,
                "has_more": offset + returned < result.total_count,
            },
            "ai_optimization": {
                "summary_mode": summary,
                "limit_applied": requested_limit != limit,
                "original_limit_requested": requested_limit,
                "ai_optimized_limit": limit,
                "filter_applied": feedback_filter is not None,
            },
        }

    def _tool_feedback_get(self, feedback_id: int) -> dict:
        """Full details of one item, flattened for reading."""
        feedback = self.feedback_service.get_feedback_by_id(feedback_id)
        session = feedback.session_data
        console_logs = (
            session.dev_data_overview.model_dump()
            if session.dev_data_overview is not None
            else None
        )
        return {
            "id": feedback.id,
            "type": feedback.type,
            "title": feedback.title,
            "text": feedback.text,
            "reporter": {
                "name": feedback.reporter.name,
                "email": feedback.reporter.email,
            },
            "page": session.page,
            "device": session.device,
            "browser": session.browser,
            "system": session.system,
            "screen": {
                "width": session.screen_width,
                "height": session.screen_height,
                "viewport_width": session.viewport_width,
                "viewport_height": session.viewport_height,
            },
            "resource": feedback.resource,
            "attachments": feedback.attachments,
            "tags": feedback.tags,
            "created_at": feedback.created_at,
            "resolved_at": feedback.resolved_at,
            "comments": [
                {
                    "id": c.id,
                    "body": c.body,
                    "name": c.name,
                    "created_at": c.created_at,
                }
                for c in feedback.comments
            ],
            "console_logs": console_logs,
        }

    def _tool_feedback_comment(self, arguments: dict[str, Any]) -> dict:
        feedback_id = int(_require(arguments, "feedback_id"))
        comment_text = _require(arguments, "comment")

        result = self.feedback_service.add_comment(
            feedback_id,
            comment_text,
            reporter_name=arguments.get("reporter_name"),
            reporter_email=arguments.get("reporter_email"),
            resolve=bool(arguments.get("resolve", False)),
        )
        return {
            "message": result.message,
            "comment": {
                "id": result.comment.id,
                "body": result.comment.body,
                "name": result.comment.name,
                "created_at": result.comment.created_at,
            },
            "feedback_id": feedback_id,
        }

    def _tool_feedback_resolve(self, feedback_id: int) -> dict:
        result = self.feedback_service.resolve_feedback(feedback_id)
        return {
            "message": result.message,
            "feedback_id": result.feedback.id,
            "title": result.feedback.title,
            "resolved_at": result.feedback.resolved_at,
            "reporter": result.feedback.reporter.name,
        }
