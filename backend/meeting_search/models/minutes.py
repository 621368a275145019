from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field

from meeting_search.models.base import RecordModel

Priority = Literal["high", "medium", "low"]
ActionItemStatus = Literal["pending", "in_progress", "completed"]
IsoDate = Annotated[str, Field(pattern=r"^\d{4}-\d{2}-\d{2}$")]


class Speaker(RecordModel):
    id: str
    name: str
    lark_user_id: str | None = None


class TopicSegment(RecordModel):
    id: str
    title: str
    start_time: int = 0
    end_time: int = 0
    summary: str = ""
    key_points: list[str] = Field(default_factory=list)
    speakers: list[Speaker] = Field(default_factory=list)


class DecisionItem(RecordModel):
    id: str
    content: str
    context: str = ""
    decided_at: int = 0
    related_topic_id: str | None = None


class ActionItem(RecordModel):
    id: str
    content: str
    assignee: Speaker | None = None
    due_date: IsoDate | None = None
    priority: Priority
    status: ActionItemStatus
    related_topic_id: str | None = None


class MinutesMetadata(RecordModel):
    generated_at: str
    model: str
    processing_time_ms: int = 0
    confidence: float = Field(default=0.0, ge=0, le=1)


class Minutes(RecordModel):
    id: str
    meeting_id: str
    title: str
    date: IsoDate
    duration: int = 0
    summary: str = ""
    topics: list[TopicSegment] = Field(default_factory=list)
    decisions: list[DecisionItem] = Field(default_factory=list)
    action_items: list[ActionItem] = Field(default_factory=list)
    attendees: list[Speaker] = Field(default_factory=list)
    metadata: MinutesMetadata | None = None
