"""HTTP transport for the Feedbucket REST API."""

import logging
from typing import Any

import requests

from feedbucket_mcp.models.config import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
    # Feedbucket only answers JSON to requests flagged as XHR
    "X-Requested-With": "XMLHttpRequest",
}

UNREADABLE_BODY = "Unknown error"


class FeedbucketApiError(Exception):
    """Request to Feedbucket failed.

    ``status`` is the HTTP status code, or 0 when no response was received.
    """

    def __init__(self, message: str, status: int, response: str | None = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.response = response


class FeedbackNotFoundError(FeedbucketApiError):
    """No feedback item with the requested id exists in the project."""

    def __init__(self, feedback_id: int):
        super().__init__(f"Feedback with ID {feedback_id} not found", 404)
        self.feedback_id = feedback_id


class FeedbucketClient:
    """Thin JSON client bound to one Feedbucket base URL.

    Query-string authentication (``feedbucketKey`` or ``key``) is part of the
    path the caller passes in.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)

    def request(
        self,
        path: str,
        method: str = "GET",
        body: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Args:
            path: Path appended to the base URL, including any query string.
            method: HTTP method.
            body: JSON-serializable payload, sent only when not None.

        Raises:
            FeedbucketApiError: On a non-2xx status, or with status 0 when the
                request could not be completed or the body is not JSON.
        """
        url = f"{self.base_url}{path}"

        try:
            response = self.session.request(
                method, url, json=body, timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise FeedbucketApiError(f"Network request failed: {e}", 0) from e

        if not response.ok:
            try:
                error_text = response.text
            except Exception:
                error_text = UNREADABLE_BODY
            logger.error(
                f"API Error Details: Status {response.status_code}, "
                f"Response: {error_text}"
            )
            raise FeedbucketApiError(
                f"API request failed: {response.status_code} {response.reason}. "
                f"Response: {error_text}",
                response.status_code,
                error_text,
            )

        try:
            return response.json()
        except ValueError as e:
            raise FeedbucketApiError(f"Network request failed: {e}", 0) from e
