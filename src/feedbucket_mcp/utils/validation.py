"""Field-level validation of untrusted Feedbucket payloads and tool input.

Nothing on the default request path calls these. They are for callers that
want readable error lists before building models from untrusted data.
"""

from typing import Any

from pydantic import BaseModel, Field

FEEDBACK_TYPES = ("screenshot", "video", "text")
MIN_LIST_LIMIT = 1
MAX_LIST_LIMIT = 100


class ValidationFailure(Exception):
    """Raised with the collected error strings of a failed validation."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


class ValidationResult(BaseModel):
    """Outcome of a validation: success flag plus readable errors."""

    success: bool
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: list[str]) -> "ValidationResult":
        return cls(success=not errors, errors=errors)

    def raise_for_errors(self) -> None:
        """Raise ``ValidationFailure`` if any error was collected."""
        if not self.success:
            raise ValidationFailure(self.errors)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid number here
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return value == value
    return isinstance(value, int)


def validate_number(value: Any, field_name: str) -> ValidationResult:
    errors = []
    if not _is_number(value):
        errors.append(f"{field_name} must be a valid number")
    return ValidationResult.from_errors(errors)


def validate_string(
    value: Any, field_name: str, required: bool = True
) -> ValidationResult:
    """Check a string field; ``required`` also rejects blank strings."""
    errors = []
    if required and (not isinstance(value, str) or not value.strip()):
        errors.append(f"{field_name} is required and must be a non-empty string")
    elif value is not None and not isinstance(value, str):
        errors.append(f"{field_name} must be a string")
    return ValidationResult.from_errors(errors)


def validate_boolean(value: Any, field_name: str) -> ValidationResult:
    errors = []
    if value is not None and not isinstance(value, bool):
        errors.append(f"{field_name} must be a boolean")
    return ValidationResult.from_errors(errors)


def validate_reporter(data: Any) -> ValidationResult:
    if not isinstance(data, dict):
        return ValidationResult.from_errors(["Reporter data must be an object"])

    errors = []
    errors += validate_number(data.get("id"), "reporter.id").errors
    errors += validate_string(data.get("name"), "reporter.name").errors
    errors += validate_string(data.get("email"), "reporter.email").errors
    errors += validate_boolean(
        data.get("notifications"), "reporter.notifications"
    ).errors
    return ValidationResult.from_errors(errors)


def validate_session_data(data: Any) -> ValidationResult:
    if not isinstance(data, dict):
        return ValidationResult.from_errors(["Session data must be an object"])

    errors = []
    for key in ("page", "device", "system", "browser"):
        errors += validate_string(data.get(key), f"session_data.{key}").errors

    selector = data.get("selector")
    if isinstance(selector, dict):
        errors += validate_string(
            selector.get("path"), "session_data.selector.path"
        ).errors
    return ValidationResult.from_errors(errors)


def validate_comment(data: Any) -> ValidationResult:
    if not isinstance(data, dict):
        return ValidationResult.from_errors(["Comment data must be an object"])

    errors = []
    errors += validate_number(data.get("id"), "comment.id").errors
    errors += validate_string(data.get("body"), "comment.body").errors
    errors += validate_string(data.get("name"), "comment.name").errors
    errors += validate_string(data.get("created_at"), "comment.created_at").errors
    if not isinstance(data.get("attachments"), list):
        errors.append("comment.attachments must be an array")
    return ValidationResult.from_errors(errors)


def validate_feedback(data: Any) -> ValidationResult:
    """Validate a raw feedback item, including its reporter and comments.

    Also checks that ``resolved_at`` does not precede ``created_at``.
    """
    if not isinstance(data, dict):
        return ValidationResult.from_errors(["Feedback data must be an object"])

    errors = []
    errors += validate_number(data.get("id"), "feedback.id").errors
    errors += validate_string(data.get("title"), "feedback.title").errors
    errors += validate_string(data.get("created_at"), "feedback.created_at").errors

    feedback_type = data.get("type")
    if feedback_type and feedback_type not in FEEDBACK_TYPES:
        errors.append('feedback.type must be "screenshot", "video", or "text"')

    if data.get("reporter"):
        errors += validate_reporter(data["reporter"]).errors

    if data.get("session_data"):
        errors += validate_session_data(data["session_data"]).errors

    comments = data.get("comments")
    if isinstance(comments, list):
        for index, comment in enumerate(comments):
            errors += [
                f"comments[{index}].{error}"
                for error in validate_comment(comment).errors
            ]

    created_at = data.get("created_at")
    resolved_at = data.get("resolved_at")
    if (
        isinstance(created_at, str)
        and isinstance(resolved_at, str)
        and resolved_at < created_at
    ):
        errors.append("feedback.resolved_at must not be earlier than created_at")

    return ValidationResult.from_errors(errors)


def validate_list_options(data: Any) -> ValidationResult:
    """Validate ``limit`` / ``offset`` / ``summary`` options."""
    errors = []
    if not isinstance(data, dict):
        return ValidationResult.from_errors(errors)

    limit = data.get("limit")
    if limit is not None:
        errors += validate_number(limit, "limit").errors
        if _is_number(limit) and not MIN_LIST_LIMIT <= limit <= MAX_LIST_LIMIT:
            errors.append(
                f"limit must be between {MIN_LIST_LIMIT} and {MAX_LIST_LIMIT}"
            )

    offset = data.get("offset")
    if offset is not None:
        errors += validate_number(offset, "offset").errors
        if _is_number(offset) and offset < 0:
            errors.append("offset must be non-negative")

    errors += validate_boolean(data.get("summary"), "summary").errors
    return ValidationResult.from_errors(errors)


def validate_feedback_filter(data: Any) -> ValidationResult:
    errors = []
    if not isinstance(data, dict):
        return ValidationResult.from_errors(errors)

    errors += validate_boolean(data.get("resolved"), "filter.resolved").errors
    for key in ("page", "reporter", "created_after", "created_before"):
        errors += validate_string(data.get(key), f"filter.{key}", required=False).errors

    feedback_type = data.get("type")
    if feedback_type is not None and feedback_type not in FEEDBACK_TYPES:
        errors.append('filter.type must be "screenshot", "video", or "text"')
    return ValidationResult.from_errors(errors)
