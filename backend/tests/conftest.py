"""Shared test fixtures."""

from datetime import UTC, datetime, timedelta

import pytest

from meeting_search.models.meeting import Meeting, MeetingUser
from meeting_search.models.minutes import Minutes
from meeting_search.models.transcript import Transcript
from meeting_search.services.search_service import SearchDataSources, create_search_service

JOHN = {"id": "speaker-1", "name": "John Doe"}
JANE = {"id": "speaker-2", "name": "Jane Smith"}


def make_meeting(**overrides) -> Meeting:
    data = {
        "id": "meeting-1",
        "title": "Weekly Team Meeting",
        "meeting_no": "MTG-001",
        "start_time": datetime(2025, 1, 15, 10, 0, tzinfo=UTC),
        "end_time": datetime(2025, 1, 15, 11, 0, tzinfo=UTC),
        "duration_minutes": 60,
        "status": "ended",
        "type": "regular",
        "host": MeetingUser(id="speaker-1", name="John Doe"),
        "participant_count": 5,
        "has_recording": True,
        "minutes_status": "approved",
    }
    data.update(overrides)
    return Meeting(**data)


def make_minutes(**overrides) -> Minutes:
    data = {
        "id": "minutes-1",
        "meeting_id": "meeting-1",
        "title": "Weekly Team Meeting",
        "date": "2025-01-15",
        "duration": 3_600_000,
        "summary": "Discussed project updates and next steps for the quarter.",
        "topics": [
            {
                "id": "topic-1",
                "title": "Project Alpha Updates",
                "start_time": 0,
                "end_time": 1_800_000,
                "summary": "Reviewed progress on Project Alpha.",
                "key_points": ["Development is on track", "Testing phase starts next week"],
                "speakers": [JOHN],
            }
        ],
        "decisions": [
            {
                "id": "decision-1",
                "content": "Move forward with the proposed architecture",
                "context": "After reviewing alternatives",
                "decided_at": 900_000,
            }
        ],
        "action_items": [
            {
                "id": "action-1",
                "content": "Complete the API documentation",
                "assignee": JOHN,
                "due_date": "2025-01-22",
                "priority": "high",
                "status": "pending",
            },
            {
                "id": "action-2",
                "content": "Review security requirements",
                "assignee": JANE,
                "priority": "medium",
                "status": "in_progress",
            },
        ],
        "attendees": [JOHN, JANE],
    }
    data.update(overrides)
    return Minutes(**data)


def make_transcript(**overrides) -> Transcript:
    data = {
        "meeting_id": "meeting-1",
        "language": "en",
        "segments": [
            {
                "id": "segment-1",
                "start_time": 0,
                "end_time": 15_000,
                "speaker": JOHN,
                "text": "Let me start with the project update.",
                "confidence": 0.95,
            },
            {
                "id": "segment-2",
                "start_time": 15_000,
                "end_time": 30_000,
                "speaker": JANE,
                "text": "The development phase is progressing well.",
                "confidence": 0.92,
            },
        ],
        "total_duration": 3_600_000,
        "created_at": "2025-01-15T11:00:00Z",
    }
    data.update(overrides)
    return Transcript(**data)


def make_project_meetings(count: int = 30) -> list[Meeting]:
    base = datetime(2025, 1, 1, 9, 0, tzinfo=UTC)
    return [
        make_meeting(
            id=f"meeting-{i}",
            title=f"Project Sync {i}",
            meeting_no=f"MTG-{i:03d}",
            start_time=base + timedelta(days=i),
            end_time=base + timedelta(days=i, hours=1),
        )
        for i in range(count)
    ]


@pytest.fixture
def data_sources() -> SearchDataSources:
    return SearchDataSources(
        meetings=[make_meeting()],
        minutes=[make_minutes()],
        transcripts=[make_transcript()],
    )


@pytest.fixture
def service(data_sources):
    return create_search_service(data_sources)
