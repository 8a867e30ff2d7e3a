"""Feedback query pipeline and write operations against one project."""

import logging
from collections import Counter
from datetime import UTC, datetime, timedelta
from typing import Any

from feedbucket_mcp.models.config import FeedbucketConfig
from feedbucket_mcp.models.feedback import (
    CommentResponse,
    FeedbackRecord,
    FeedbackType,
    ProjectRecord,
    ProjectResponse,
    ResolveResponse,
)
from feedbucket_mcp.models.query import (
    DataOptimization,
    FeedbackFilter,
    FeedbackListResult,
    ListQuery,
)
from feedbucket_mcp.services.feedback_filter import filter_feedback, paginate
from feedbucket_mcp.services.feedback_summarizer import (
    optimize_feedback,
    summarize_feedback,
)
from feedbucket_mcp.services.feedbucket_client import (
    FeedbackNotFoundError,
    FeedbucketApiError,
    FeedbucketClient,
)

logger = logging.getLogger(__name__)

DEFAULT_REPORTER_NAME = "Claude AI Assistant"
DEFAULT_REPORTER_EMAIL = "claude@anthropic.com"
TOP_PAGES_LIMIT = 5


def _parse_timestamp(value: str) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _timestamp(now: datetime | None) -> str:
    return (now or datetime.now(UTC)).isoformat().replace("+00:00", "Z")


class FeedbackService:
    """Service for reading and acting on Feedbucket feedback.

    Every read fetches the whole project, since the API embeds all feedback
    in the project record and offers no server-side filtering.
    """

    def __init__(
        self, config: FeedbucketConfig, client: FeedbucketClient | None = None
    ):
        self.config = config
        self.client = client or FeedbucketClient(
            base_url=config.base_url, timeout=config.timeout
        )

    def _project_path(self) -> str:
        path = f"/projects/{self.config.project_id}"
        if self.config.api_key:
            path += f"?feedbucketKey={self.config.api_key}"
        return path

    def fetch_project(self) -> ProjectRecord:
        """Fetch the project record including every feedback item."""
        data = self.client.request(self._project_path())
        return ProjectResponse.model_validate(data).project

    def list_feedback(
        self,
        query: ListQuery | None = None,
        feedback_filter: FeedbackFilter | None = None,
    ) -> FeedbackListResult:
        """Filter, paginate and project the project's feedback.

        Filtering always runs on the full collection so ``filtered_count``
        does not depend on ``offset`` or ``limit``. Projection runs on the
        paginated subset only.
        """
        query = query or ListQuery()
        project = self.fetch_project()

        records = project.feedback
        original_count = len(records)

        if feedback_filter is not None and not feedback_filter.is_empty():
            records = filter_feedback(records, feedback_filter)
        filtered_count = len(records)

        records = paginate(records, offset=query.offset, limit=query.limit)
        returned_count = len(records)

        feedback = (
            summarize_feedback(records) if query.summary else optimize_feedback(records)
        )

        logger.info(
            f"Listed feedback for project {self.config.project_id}: "
            f"original={original_count} filtered={filtered_count} "
            f"returned={returned_count}"
        )

        return FeedbackListResult(
            project=project.info(),
            feedback=feedback,
            total_count=filtered_count,
            data_optimization=DataOptimization(
                original_count=original_count,
                filtered_count=filtered_count,
                returned_count=returned_count,
                truncated_session_data=True,
                summarized=query.summary,
            ),
        )

    def get_feedback_by_id(self, feedback_id: int) -> FeedbackRecord:
        """Look up one feedback item by id.

        Raises:
            FeedbackNotFoundError: If the project has no item with that id.
        """
        result = self.list_feedback(ListQuery(summary=False))
        for item in result.feedback:
            if item.id == feedback_id:
                return item
        raise FeedbackNotFoundError(feedback_id)

    def add_comment(
        self,
        feedback_id: int,
        body: str,
        reporter_name: str | None = None,
        reporter_email: str | None = None,
        resolve: bool = False,
    ) -> CommentResponse:
        """Post a comment, optionally resolving the item at the same time."""
        path = f"/feedback/{feedback_id}/comments?key={self.config.private_key}"
        payload = {
            "body": body,
            "resolve": resolve,
            "reporter": {
                "name": reporter_name or DEFAULT_REPORTER_NAME,
                "email": reporter_email or DEFAULT_REPORTER_EMAIL,
            },
            "mentions": None,
            "attachments": None,
        }
        data = self.client.request(path, method="POST", body=payload)
        logger.info(f"Added comment to feedback {feedback_id} (resolve={resolve})")
        return CommentResponse.model_validate(data)

    def resolve_feedback(self, feedback_id: int) -> ResolveResponse:
        """Mark a feedback item as resolved."""
        path = f"/feedback/{feedback_id}/resolve?key={self.config.private_key}"
        data = self.client.request(path, method="PUT", body={})
        logger.info(f"Resolved feedback {feedback_id}")
        return ResolveResponse.model_validate(data)

    def get_stats(self, now: datetime | None = None) -> dict[str, Any]:
        """Aggregate counts over the whole project from a single fetch."""
        now = now or datetime.now(UTC)
        project = self.fetch_project()
        records = project.feedback

        week_ago = now - timedelta(days=7)
        month_ago = now - timedelta(days=30)
        created = [_parse_timestamp(item.created_at) for item in records]

        by_type = {feedback_type.value: 0 for feedback_type in FeedbackType}
        by_type.update(Counter(item.type for item in records if item.type))

        page_counts = Counter(item.session_data.page for item in records)

        resolved = sum(1 for item in records if item.is_resolved)
        return {
            "project": project.name,
            "total_feedback": len(records),
            "resolved": resolved,
            "unresolved": len(records) - resolved,
            "by_type": by_type,
            "recent_activity": {
                "last_7_days": sum(1 for ts in created if ts and ts > week_ago),
                "last_30_days": sum(1 for ts in created if ts and ts > month_ago),
            },
            "top_pages": [
                {"page": page, "count": count}
                for page, count in page_counts.most_common(TOP_PAGES_LIMIT)
            ],
        }

    def get_status(self, now: datetime | None = None) -> dict[str, str]:
        """Check that the project endpoint is reachable with this config."""
        try:
            self.client.request(self._project_path())
        except FeedbucketApiError as e:
            logger.warning(f"Feedbucket status check failed: {e.message}")
            return {"status": f"error: {e.message}", "timestamp": _timestamp(now)}
        return {"status": "connected", "timestamp": _timestamp(now)}
