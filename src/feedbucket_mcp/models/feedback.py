"""Feedback data models mirroring the Feedbucket project payload.

Upstream records are parsed leniently: nulls become empty values and
unknown keys are kept, so one odd record never fails a whole project read.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FeedbackType(str, Enum):
    """Kinds of feedback captured by the widget."""

    SCREENSHOT = "screenshot"
    VIDEO = "video"
    TEXT = "text"


def _empty_string(v: Any) -> Any:
    return "" if v is None else v


def _empty_list(v: Any) -> Any:
    return [] if v is None else v


class Reporter(BaseModel):
    """Person who submitted a feedback item."""

    id: int | None = None
    name: str = ""
    email: str = ""
    token: str | None = None
    notifications: bool | None = None
    created_at: str | None = None
    updated_at: str | None = None

    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator("name", "email", mode="before")
    @classmethod
    def null_to_empty(cls, v: Any) -> Any:
        return _empty_string(v)


class SelectorOffset(BaseModel):
    """Click offset inside the selected element."""

    x: float | None = None
    y: float | None = None

    model_config = ConfigDict(frozen=True)


class Selector(BaseModel):
    """DOM selector for the element the feedback was pinned to."""

    path: str | None = None
    path_with_class: str | None = Field(None, alias="pathWithClass")
    offset: SelectorOffset | None = None
    scrollable_selector: str | None = Field(None, alias="scrollableSelector")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")


class ConsoleCounts(BaseModel):
    """Browser console message counts at capture time."""

    log: int | float = 0
    info: int | float = 0
    warn: int | float = 0
    error: int | float = 0

    model_config = ConfigDict(frozen=True)

    @field_validator("log", "info", "warn", "error", mode="before")
    @classmethod
    def null_to_zero(cls, v: Any) -> Any:
        return 0 if v is None else v


class DevDataOverview(BaseModel):
    """Developer data breakdown recorded by the widget."""

    console: ConsoleCounts = Field(default_factory=ConsoleCounts)

    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator("console", mode="before")
    @classmethod
    def null_console(cls, v: Any) -> Any:
        return {} if v is None else v


class SessionData(BaseModel):
    """Browser session captured alongside a feedback item.

    Upstream adds fields to this object over time; unknown keys are kept on
    the parsed model so they can be dropped explicitly by the optimized
    projection rather than silently.
    """

    page: str = ""
    device: str | None = None
    system: str | None = None
    browser: str | None = None
    selector: Selector | None = None
    user_agent: str | None = Field(None, alias="userAgent")
    screen_width: int | float | None = Field(None, alias="screenWidth")
    screen_height: int | float | None = Field(None, alias="screenHeight")
    viewport_width: int | float | None = Field(None, alias="viewportWidth")
    viewport_height: int | float | None = Field(None, alias="viewportHeight")
    widget_version: str | None = Field(None, alias="widgetVersion")
    dev_data_overview: DevDataOverview | None = Field(None, alias="devDataOverview")
    device_pixel_ratio: float | None = Field(None, alias="devicePixelRatio")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    @field_validator("page", mode="before")
    @classmethod
    def null_page(cls, v: Any) -> Any:
        return _empty_string(v)


class Comment(BaseModel):
    """A single comment on a feedback thread."""

    id: int
    body: str = ""
    name: str = ""
    created_at: str | None = None
    attachments: list[Any] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator("body", "name", mode="before")
    @classmethod
    def null_to_empty(cls, v: Any) -> Any:
        return _empty_string(v)

    @field_validator("attachments", mode="before")
    @classmethod
    def null_attachments(cls, v: Any) -> Any:
        return _empty_list(v)


class FeedbackRecord(BaseModel):
    """A feedback item as returned by the project endpoint.

    ``resolved_at`` is the only resolution signal: ``None`` means unresolved.
    ``type`` is normally a ``FeedbackType`` value but other strings are kept
    as sent.
    """

    id: int
    type: str = ""
    reporter: Reporter = Field(default_factory=Reporter)
    resource: Any = None
    title: str = ""
    text: str | None = None
    tags: list[Any] = Field(default_factory=list)
    attachments: list[Any] = Field(default_factory=list)
    resolved_at: str | None = None
    session_data: SessionData = Field(default_factory=SessionData)
    created_at: str = ""
    comments: list[Comment] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator("type", "title", "created_at", mode="before")
    @classmethod
    def null_to_empty(cls, v: Any) -> Any:
        return _empty_string(v)

    @field_validator("tags", "attachments", "comments", mode="before")
    @classmethod
    def null_to_empty_list(cls, v: Any) -> Any:
        return _empty_list(v)

    @field_validator("reporter", "session_data", mode="before")
    @classmethod
    def null_to_empty_object(cls, v: Any) -> Any:
        return {} if v is None else v

    @property
    def is_resolved(self) -> bool:
        """Whether the item has been resolved."""
        return self.resolved_at is not None


class ProjectInfo(BaseModel):
    """Project metadata without the feedback collection."""

    id: int | str
    name: str = ""
    url: str = ""

    model_config = ConfigDict(frozen=True)

    @field_validator("name", "url", mode="before")
    @classmethod
    def null_to_empty(cls, v: Any) -> Any:
        return _empty_string(v)


class ProjectRecord(ProjectInfo):
    """Project container holding every feedback item for the project."""

    translations: dict[str, Any] = Field(default_factory=dict)
    feedback: list[FeedbackRecord] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator("translations", mode="before")
    @classmethod
    def null_translations(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("feedback", mode="before")
    @classmethod
    def null_feedback(cls, v: Any) -> Any:
        return _empty_list(v)

    def info(self) -> ProjectInfo:
        """Return the project metadata only."""
        return ProjectInfo(id=self.id, name=self.name, url=self.url)


class ProjectResponse(BaseModel):
    """Envelope of ``GET /projects/{id}``."""

    message: str | None = None
    project: ProjectRecord


class CommentResponse(BaseModel):
    """Envelope of ``POST /feedback/{id}/comments``."""

    message: str | None = None
    comment: Comment


class ResolveResponse(BaseModel):
    """Envelope of ``PUT /feedback/{id}/resolve``."""

    message: str | None = None
    feedback: FeedbackRecord


class FeedbackSummary(BaseModel):
    """Compact read-only projection of a feedback item."""

    id: int
    type: str
    title: str
    text: str | None = None
    reporter_name: str
    page: str
    created_at: str
    resolved_at: str | None = None
    comment_count: int = 0
    has_attachments: bool = False

    model_config = ConfigDict(frozen=True)
