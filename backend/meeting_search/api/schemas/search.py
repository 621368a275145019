from datetime import datetime
from typing import Annotated, Literal

from pydantic import AliasChoices, Field

from meeting_search.models.base import CamelModel
from meeting_search.models.meeting import MeetingStatus
from meeting_search.models.minutes import ActionItemStatus, Priority

SearchTarget = Literal["meetings", "minutes", "transcripts", "action_items", "all"]
ResultType = Literal["meeting", "minutes", "transcript", "action_item"]


class DateRange(CamelModel):
    from_: datetime | None = Field(
        default=None, validation_alias=AliasChoices("from", "from_"), serialization_alias="from"
    )
    to: datetime | None = None


class ParticipantFilter(CamelModel):
    id: str = Field(min_length=1)
    name: str = ""


class SearchFilters(CamelModel):
    date_range: DateRange | None = None
    priority: Priority | None = None
    status: list[ActionItemStatus] | None = Field(
        default=None,
        validation_alias=AliasChoices("status", "actionItemStatus", "action_item_status"),
    )
    assignee_id: str | None = None
    participants: list[ParticipantFilter] | None = None
    meeting_status: MeetingStatus | None = None


class SearchQuery(CamelModel):
    query: str = Field(default="", max_length=500)
    targets: list[SearchTarget] = Field(default_factory=lambda: ["all"], min_length=1)
    filters: SearchFilters | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)
    sort_by: Literal["relevance", "date"] = "relevance"
    sort_order: Literal["asc", "desc"] = "desc"


class MatchContext(CamelModel):
    field: str
    match: str


class SearchResultBase(CamelModel):
    id: str
    score: float = Field(ge=0)
    contexts: list[MatchContext]
    date: str


class MeetingSearchResult(SearchResultBase):
    type: Literal["meeting"] = "meeting"
    title: str
    host_name: str
    participant_count: int
    has_minutes: bool


class MinutesSearchResult(SearchResultBase):
    type: Literal["minutes"] = "minutes"
    meeting_id: str
    title: str
    summary_snippet: str


class TranscriptSearchResult(SearchResultBase):
    type: Literal["transcript"] = "transcript"
    meeting_id: str
    meeting_title: str
    language: str
    segment_ids: list[str]
    speaker_names: list[str]
    timestamp: int


class ActionItemSearchResult(SearchResultBase):
    type: Literal["action_item"] = "action_item"
    meeting_id: str
    meeting_title: str
    content: str
    assignee_name: str | None = None
    assignee_id: str | None = None
    due_date: str | None = None
    priority: Priority
    status: ActionItemStatus


SearchResult = Annotated[
    MeetingSearchResult | MinutesSearchResult | TranscriptSearchResult | ActionItemSearchResult,
    Field(discriminator="type"),
]


class FacetCount(CamelModel):
    type: ResultType
    count: int = Field(ge=0)
    label: str


class SearchFacets(CamelModel):
    by_type: list[FacetCount] = Field(default_factory=list)


class SearchResponse(CamelModel):
    query: str
    results: list[SearchResult]
    total: int = Field(ge=0)
    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    total_pages: int = Field(ge=0)
    has_more: bool
    facets: SearchFacets = Field(default_factory=SearchFacets)
    execution_time_ms: float = Field(ge=0)
