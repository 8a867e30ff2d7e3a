"""Data models for the Feedbucket MCP server."""

from .config import DEFAULT_BASE_URL, ConfigurationError, FeedbucketConfig
from .feedback import (
    Comment,
    CommentResponse,
    FeedbackRecord,
    FeedbackSummary,
    FeedbackType,
    ProjectInfo,
    ProjectRecord,
    ProjectResponse,
    Reporter,
    ResolveResponse,
    SessionData,
)
from .query import DataOptimization, FeedbackFilter, FeedbackListResult, ListQuery

__all__ = [
    "DEFAULT_BASE_URL",
    "ConfigurationError",
    "FeedbucketConfig",
    "Comment",
    "CommentResponse",
    "FeedbackRecord",
    "FeedbackSummary",
    "FeedbackType",
    "ProjectInfo",
    "ProjectRecord",
    "ProjectResponse",
    "Reporter",
    "ResolveResponse",
    "SessionData",
    "DataOptimization",
    "FeedbackFilter",
    "FeedbackListResult",
    "ListQuery",
]
