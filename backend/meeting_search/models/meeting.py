from __future__ import annotations

from datetime import datetime
from typing import Literal

from meeting_search.models.base import RecordModel

MeetingStatus = Literal["scheduled", "in_progress", "ended", "cancelled"]
MeetingType = Literal["regular", "adhoc", "one_on_one", "all_hands"]
MinutesStatus = Literal["not_created", "draft", "pending_approval", "approved"]


class MeetingUser(RecordModel):
    id: str
    name: str
    avatar_url: str | None = None
    email: str | None = None


class Meeting(RecordModel):
    id: str
    title: str
    meeting_no: str = ""
    start_time: datetime
    end_time: datetime
    duration_minutes: int = 0
    status: MeetingStatus = "ended"
    type: MeetingType = "regular"
    host: MeetingUser
    participant_count: int = 0
    has_recording: bool = False
    recording_url: str | None = None
    minutes_status: MinutesStatus = "not_created"
    created_at: datetime | None = None
    updated_at: datetime | None = None
