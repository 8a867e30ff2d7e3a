"""Local filtering and pagination of the project feedback collection.

Feedbucket has no server-side query parameters, so every list request scans
the full collection here.
"""

from collections.abc import Sequence

from feedbucket_mcp.models.feedback import FeedbackRecord
from feedbucket_mcp.models.query import FeedbackFilter


def _matches(record: FeedbackRecord, criteria: FeedbackFilter) -> bool:
    if criteria.resolved is not None and record.is_resolved != criteria.resolved:
        return False

    if criteria.page and criteria.page not in record.session_data.page:
        return False

    if (
        criteria.reporter
        and criteria.reporter.lower() not in record.reporter.name.lower()
    ):
        return False

    if criteria.type and record.type != criteria.type:
        return False

    # ISO-8601 strings compared lexicographically
    if criteria.created_after and record.created_at < criteria.created_after:
        return False

    if criteria.created_before and record.created_at > criteria.created_before:
        return False

    return True


def filter_feedback(
    records: Sequence[FeedbackRecord], criteria: FeedbackFilter
) -> list[FeedbackRecord]:
    """Keep the records that satisfy every criterion that is set.

    Order is preserved. An empty filter keeps everything.
    """
    return [record for record in records if _matches(record, criteria)]


def paginate(
    records: Sequence[FeedbackRecord], offset: int = 0, limit: int | None = None
) -> list[FeedbackRecord]:
    """Slice ``records`` from ``offset``, taking at most ``limit`` items.

    An offset past the end returns an empty list.
    """
    end = offset + limit if limit is not None else None
    return list(records[offset:end])
