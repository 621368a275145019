from meeting_search.models.meeting import Meeting, MeetingUser
from meeting_search.models.minutes import (
    ActionItem,
    DecisionItem,
    Minutes,
    MinutesMetadata,
    Speaker,
    TopicSegment,
)
from meeting_search.models.transcript import Transcript, TranscriptSegment

__all__ = [
    "Meeting",
    "MeetingUser",
    "Minutes",
    "MinutesMetadata",
    "TopicSegment",
    "DecisionItem",
    "ActionItem",
    "Speaker",
    "Transcript",
    "TranscriptSegment",
]
