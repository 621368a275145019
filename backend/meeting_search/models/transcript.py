from __future__ import annotations

from pydantic import Field

from meeting_search.models.base import RecordModel
from meeting_search.models.minutes import Speaker


class TranscriptSegment(RecordModel):
    id: str
    start_time: int
    end_time: int
    speaker: Speaker
    text: str
    confidence: float = Field(default=1.0, ge=0, le=1)


class Transcript(RecordModel):
    meeting_id: str
    language: str = "en"
    segments: list[TranscriptSegment] = Field(default_factory=list)
    total_duration: int = 0
    created_at: str
