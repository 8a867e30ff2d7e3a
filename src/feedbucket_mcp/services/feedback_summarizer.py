"""Projections that keep feedback payloads small for AI consumption."""

from collections.abc import Sequence

from feedbucket_mcp.models.feedback import (
    FeedbackRecord,
    FeedbackSummary,
    Selector,
    SessionData,
)

TEXT_PREVIEW_LENGTH = 200
TRUNCATION_MARKER = "..."


def truncate_text(text: str | None, length: int = TEXT_PREVIEW_LENGTH) -> str | None:
    """Cut ``text`` to ``length`` characters, marking the cut."""
    if text is None:
        return None
    if len(text) > length:
        return f"{text[:length]}{TRUNCATION_MARKER}"
    return text


def summarize(record: FeedbackRecord) -> FeedbackSummary:
    """Project a record down to its summary fields."""
    return FeedbackSummary(
        id=record.id,
        type=record.type,
        title=record.title,
        text=truncate_text(record.text),
        reporter_name=record.reporter.name,
        page=record.session_data.page,
        created_at=record.created_at,
        resolved_at=record.resolved_at,
        comment_count=len(record.comments),
        has_attachments=len(record.attachments) > 0,
    )


def summarize_feedback(records: Sequence[FeedbackRecord]) -> list[FeedbackSummary]:
    """Summary projection of each record."""
    return [summarize(record) for record in records]


def optimize_session_data(session: SessionData) -> SessionData:
    """Rebuild session data from the allow-listed fields only.

    Anything upstream adds beyond these fields is dropped, which keeps the
    response shape stable.
    """
    selector = None
    if session.selector is not None:
        selector = Selector(
            path=session.selector.path,
            path_with_class=session.selector.path_with_class,
            offset=session.selector.offset,
            scrollable_selector=session.selector.scrollable_selector,
        )

    return SessionData(
        page=session.page,
        device=session.device,
        system=session.system,
        browser=session.browser,
        selector=selector,
        user_agent=session.user_agent,
        screen_width=session.screen_width,
        screen_height=session.screen_height,
        viewport_width=session.viewport_width,
        viewport_height=session.viewport_height,
        widget_version=session.widget_version,
        dev_data_overview=session.dev_data_overview,
        device_pixel_ratio=session.device_pixel_ratio,
    )


def optimize_feedback(records: Sequence[FeedbackRecord]) -> list[FeedbackRecord]:
    """Full records with session data reduced to the allow-list."""
    return [
        record.model_copy(
            update={"session_data": optimize_session_data(record.session_data)}
        )
        for record in records
    ]
