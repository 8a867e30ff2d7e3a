"""Query and result models for listing feedback."""

from pydantic import BaseModel, ConfigDict, Field

from feedbucket_mcp.models.feedback import (
    FeedbackRecord,
    FeedbackSummary,
    FeedbackType,
    ProjectInfo,
)


class FeedbackFilter(BaseModel):
    """Optional criteria applied to the full feedback collection.

    ``created_after`` / ``created_before`` are compared to ``created_at`` as
    plain strings. This is only correct while upstream emits a single
    fixed-width UTC ISO-8601 format; no timezone normalization happens.
    """

    resolved: bool | None = Field(
        None, description="True for resolved only, False for unresolved only"
    )
    page: str | None = Field(None, description="Substring of the page URL")
    reporter: str | None = Field(
        None, description="Case-insensitive substring of the reporter name"
    )
    type: FeedbackType | None = Field(None, description="Exact feedback type")
    created_after: str | None = Field(
        None, description="Inclusive lower bound on created_at (ISO-8601)"
    )
    created_before: str | None = Field(
        None, description="Inclusive upper bound on created_at (ISO-8601)"
    )

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    def is_empty(self) -> bool:
        """Return True when no criterion is set."""
        return not any(
            [
                self.resolved is not None,
                self.page,
                self.reporter,
                self.type,
                self.created_after,
                self.created_before,
            ]
        )


class ListQuery(BaseModel):
    """Pagination and projection options for a list request."""

    limit: int | None = Field(None, gt=0, description="Maximum items returned")
    offset: int = Field(0, ge=0, description="Items skipped after filtering")
    summary: bool = Field(
        True, description="Return compact summaries instead of full records"
    )

    model_config = ConfigDict(frozen=True)


class DataOptimization(BaseModel):
    """Counts at each pipeline stage of a list request."""

    original_count: int
    filtered_count: int
    returned_count: int
    truncated_session_data: bool = True
    summarized: bool


class FeedbackListResult(BaseModel):
    """Result of a list request."""

    project: ProjectInfo
    feedback: list[FeedbackSummary] | list[FeedbackRecord]
    total_count: int
    data_optimization: DataOptimization
