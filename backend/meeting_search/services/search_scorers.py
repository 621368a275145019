from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

from meeting_search.api.schemas.search import (
    ActionItemSearchResult,
    MatchContext,
    MeetingSearchResult,
    MinutesSearchResult,
    SearchResult,
    TranscriptSearchResult,
)
from meeting_search.models.base import CamelModel
from meeting_search.models.meeting import Meeting
from meeting_search.models.minutes import ActionItem, Minutes, Speaker
from meeting_search.models.transcript import Transcript
from meeting_search.services.text_matching import extract_context, match_field

logger = logging.getLogger(__name__)

MAX_CONTEXTS = {
    "meeting": 3,
    "minutes": 5,
    "transcript": 5,
    "action_item": 2,
}
SUMMARY_SNIPPET_LENGTH = 150


class FieldWeights(CamelModel):
    """Multipliers per field class. Title > summary > content > speaker."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    title: float = Field(default=1.5, ge=0)
    summary: float = Field(default=1.2, ge=0)
    content: float = Field(default=1.0, ge=0)
    speaker: float = Field(default=0.8, ge=0)


class ActionItemRecord(BaseModel):
    """An action item flattened out of its minutes, carrying the parent context."""

    model_config = ConfigDict(frozen=True)

    item: ActionItem
    meeting_id: str
    meeting_title: str
    date: str
    attendees: list[Speaker] = Field(default_factory=list)


@dataclass(frozen=True)
class SearchCandidate:
    """A scored result plus the facts the filter engine needs but the result does not expose."""

    result: SearchResult
    participant_ids: frozenset[str] = frozenset()
    meeting_status: str | None = None


@dataclass
class _FieldScorer:
    terms: list[str]
    context_length: int
    score: float = 0.0
    contexts: list[MatchContext] = field(default_factory=list)

    def add(self, name: str, text: str | None, weight: float) -> bool:
        match = match_field(text, self.terms)
        if match is None:
            return False
        self.score += weight * match.strength
        snippet = extract_context(
            text, match.first_index, self.context_length, match.matched_length
        )
        self.contexts.append(MatchContext(field=name, match=snippet))
        return True

    def matched(self) -> bool:
        return bool(self.contexts)


def flatten_action_items(minutes: Iterable[Minutes]) -> Iterator[ActionItemRecord]:
    for m in minutes:
        for item in m.action_items:
            yield ActionItemRecord(
                item=item,
                meeting_id=m.meeting_id,
                meeting_title=m.title,
                date=m.date,
                attendees=m.attendees,
            )


def score_meeting(
    meeting: Meeting,
    terms: list[str],
    weights: FieldWeights,
    context_length: int,
    has_minutes: bool = False,
) -> SearchCandidate | None:
    scorer = _FieldScorer(terms, context_length)
    scorer.add("title", meeting.title, weights.title)
    scorer.add("host", meeting.host.name, weights.speaker)
    scorer.add("meetingNo", meeting.meeting_no, weights.content)
    if not scorer.matched():
        return None

    result = MeetingSearchResult(
        id=meeting.id,
        title=meeting.title,
        date=meeting.start_time.isoformat(),
        host_name=meeting.host.name,
        participant_count=meeting.participant_count,
        has_minutes=has_minutes,
        contexts=scorer.contexts[: MAX_CONTEXTS["meeting"]],
        score=scorer.score,
    )
    return SearchCandidate(
        result=result,
        participant_ids=frozenset({meeting.host.id}),
        meeting_status=meeting.status,
    )


def score_minutes(
    minutes: Minutes, terms: list[str], weights: FieldWeights, context_length: int
) -> SearchCandidate | None:
    scorer = _FieldScorer(terms, context_length)
    scorer.add("title", minutes.title, weights.title)
    scorer.add("summary", minutes.summary, weights.summary)
    for topic in minutes.topics:
        scorer.add("topic.title", topic.title, weights.content)
        scorer.add("topic.summary", topic.summary, weights.content)
        for point in topic.key_points:
            scorer.add("topic.keyPoint", point, weights.content)
    for decision in minutes.decisions:
        scorer.add("decision", decision.content, weights.content)
    if not scorer.matched():
        return None

    result = MinutesSearchResult(
        id=minutes.id,
        meeting_id=minutes.meeting_id,
        title=minutes.title,
        date=minutes.date,
        summary_snippet=_truncate(minutes.summary, SUMMARY_SNIPPET_LENGTH),
        contexts=scorer.contexts[: MAX_CONTEXTS["minutes"]],
        score=scorer.score,
    )
    return SearchCandidate(
        result=result,
        participant_ids=frozenset(a.id for a in minutes.attendees),
    )


def score_transcript(
    transcript: Transcript,
    terms: list[str],
    weights: FieldWeights,
    context_length: int,
    meeting: Meeting | None = None,
) -> SearchCandidate | None:
    """Fold every matching segment of one transcript into a single result."""
    scorer = _FieldScorer(terms, context_length)
    segment_ids: list[str] = []
    speaker_names: list[str] = []
    timestamp: int | None = None
    seen_speakers: set[str] = set()
    matched_speakers: set[str] = set()

    for segment in transcript.segments:
        hit = scorer.add("segment", segment.text, weights.content)
        # Speaker names count once per transcript, not once per utterance.
        speaker = segment.speaker
        if speaker.id not in seen_speakers:
            seen_speakers.add(speaker.id)
            if scorer.add("speaker", speaker.name, weights.speaker):
                matched_speakers.add(speaker.id)
        if not (hit or speaker.id in matched_speakers):
            continue
        segment_ids.append(segment.id)
        if segment.speaker.name not in speaker_names:
            speaker_names.append(segment.speaker.name)
        if timestamp is None:
            timestamp = segment.start_time

    if not scorer.matched():
        return None

    if meeting is None:
        logger.debug("No meeting %s for transcript; using creation date", transcript.meeting_id)
        date = transcript.created_at
        meeting_title = ""
        meeting_status = None
    else:
        date = meeting.start_time.isoformat()
        meeting_title = meeting.title
        meeting_status = meeting.status

    result = TranscriptSearchResult(
        id=transcript.meeting_id,
        meeting_id=transcript.meeting_id,
        meeting_title=meeting_title,
        language=transcript.language,
        segment_ids=segment_ids,
        speaker_names=speaker_names,
        timestamp=timestamp or 0,
        date=date,
        contexts=scorer.contexts[: MAX_CONTEXTS["transcript"]],
        score=scorer.score,
    )
    return SearchCandidate(
        result=result,
        participant_ids=frozenset(s.speaker.id for s in transcript.segments),
        meeting_status=meeting_status,
    )


def score_action_item(
    record: ActionItemRecord, terms: list[str], weights: FieldWeights, context_length: int
) -> SearchCandidate | None:
    item = record.item
    scorer = _FieldScorer(terms, context_length)
    scorer.add("content", item.content, weights.content)
    if item.assignee is not None:
        scorer.add("assignee", item.assignee.name, weights.speaker)
    if not scorer.matched():
        return None

    result = ActionItemSearchResult(
        id=item.id,
        meeting_id=record.meeting_id,
        meeting_title=record.meeting_title,
        content=item.content,
        assignee_name=item.assignee.name if item.assignee else None,
        assignee_id=item.assignee.id if item.assignee else None,
        due_date=item.due_date,
        priority=item.priority,
        status=item.status,
        date=record.date,
        contexts=scorer.contexts[: MAX_CONTEXTS["action_item"]],
        score=scorer.score,
    )
    return SearchCandidate(
        result=result,
        participant_ids=frozenset(a.id for a in record.attendees),
    )


def _truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."
