"""Pytest configuration and shared fixtures."""

from typing import Any
from unittest.mock import Mock

import pytest

from feedbucket_mcp.models.config import FeedbucketConfig
from feedbucket_mcp.services.feedback_service import FeedbackService


def make_feedback(
    feedback_id: int,
    *,
    feedback_type: str = "screenshot",
    title: str | None = None,
    text: str | None = "Button is misaligned",
    reporter_name: str = "Jane Tester",
    page: str = "https://example.com/",
    created_at: str = "2025-01-10T12:00:00Z",
    resolved_at: str | None = None,
    comments: list[dict[str, Any]] | None = None,
    attachments: list[str] | None = None,
    **session_extra: Any,
) -> dict[str, Any]:
    """Build a raw feedback item shaped like the Feedbucket payload."""
    session_data = {
        "page": page,
        "device": "desktop",
        "system": "macOS 14",
        "browser": "Chrome 120",
        "selector": {
            "path": "body > div.header > button",
            "offset": {"x": 12, "y": 4},
            "pathWithClass": "body > div.header > button.cta",
            "scrollableSelector": None,
        },
        "userAgent": "Mozilla/5.0",
        "screenWidth": 1920,
        "screenHeight": 1080,
        "viewportWidth": 1440,
        "viewportHeight": 900,
        "widgetVersion": "2.4.1",
        "devDataOverview": {"console": {"log": 3, "info": 1, "warn": 0, "error": 2}},
        "devicePixelRatio": 2,
    }
    session_data.update(session_extra)
    return {
        "id": feedback_id,
        "type": feedback_type,
        "reporter": {
            "id": 501,
            "name": reporter_name,
            "email": "jane@example.com",
            "token": None,
            "notifications": True,
            "created_at": "2024-12-01T09:00:00Z",
            "updated_at": "2024-12-01T09:00:00Z",
        },
        "resource": None,
        "title": title if title is not None else f"Feedback {feedback_id}",
        "text": text,
        "tags": [],
        "attachments": attachments if attachments is not None else [],
        "resolved_at": resolved_at,
        "session_data": session_data,
        "created_at": created_at,
        "comments": comments if comments is not None else [],
    }


def make_project_payload(feedback: list[dict[str, Any]]) -> dict[str, Any]:
    """Wrap feedback items in a ``GET /projects/{id}`` response."""
    return {
        "message": "Project retrieved",
        "project": {
            "id": 4242,
            "name": "Acme Website",
            "url": "https://example.com",
            "translations": {},
            "feedback": feedback,
        },
    }


@pytest.fixture
def config():
    """Config for a public project."""
    return FeedbucketConfig(
        project_id="S3q9juJHLaa1f7U3kBAx",
        private_key="priv-key-123456",
        base_url="https://dashboard.feedbucket.app/api/v1",
    )


@pytest.fixture
def mock_client():
    """A FeedbucketClient stand-in."""
    return Mock()


@pytest.fixture
def feedback_service(config, mock_client):
    """FeedbackService wired to the mock client."""
    return FeedbackService(config, client=mock_client)


@pytest.fixture
def sample_feedback():
    """Three items with mixed resolution, types, pages and reporters."""
    return [
        make_feedback(
            1,
            feedback_type="screenshot",
            reporter_name="Jane Tester",
            page="https://example.com/pricing",
            created_at="2025-01-05T10:00:00Z",
        ),
        make_feedback(
            2,
            feedback_type="video",
            reporter_name="Bob Builder",
            page="https://example.com/about",
            created_at="2025-01-10T10:00:00Z",
            resolved_at="2025-01-11T08:00:00Z",
            comments=[
                {
                    "id": 90,
                    "body": "Fixed in release 3",
                    "name": "Dev",
                    "created_at": "2025-01-11T08:00:00Z",
                    "attachments": [],
                }
            ],
            attachments=["https://cdn.example.com/shot.png"],
        ),
        make_feedback(
            3,
            feedback_type="text",
            reporter_name="jane doe",
            page="https://example.com/pricing#faq",
            created_at="2025-01-20T10:00:00Z",
            text=None,
        ),
    ]
