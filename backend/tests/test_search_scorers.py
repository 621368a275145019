"""Tests for the per-entity scorers."""

from meeting_search.services.search_scorers import (
    FieldWeights,
    flatten_action_items,
    score_action_item,
    score_meeting,
    score_minutes,
    score_transcript,
)
from tests.conftest import JOHN, make_meeting, make_minutes, make_transcript

WEIGHTS = FieldWeights()


def test_default_weight_ordering():
    assert WEIGHTS.title > WEIGHTS.summary > WEIGHTS.content > WEIGHTS.speaker


def test_meeting_title_match():
    candidate = score_meeting(make_meeting(), ["weekly"], WEIGHTS, 50, has_minutes=True)
    assert candidate is not None
    result = candidate.result
    assert result.type == "meeting"
    assert result.score == WEIGHTS.title
    assert result.contexts[0].field == "title"
    assert "weekly" in result.contexts[0].match.lower()
    assert result.has_minutes is True
    assert result.date.startswith("2025-01-15")


def test_meeting_scores_sum_over_fields():
    meeting = make_meeting(title="John's roadmap review")
    candidate = score_meeting(meeting, ["john"], WEIGHTS, 50)
    assert candidate is not None
    assert candidate.result.score == WEIGHTS.title + WEIGHTS.speaker
    assert [c.field for c in candidate.result.contexts] == ["title", "host"]


def test_meeting_partial_term_match_scales_score():
    candidate = score_meeting(make_meeting(), ["weekly", "budget"], WEIGHTS, 50)
    assert candidate is not None
    assert candidate.result.score == WEIGHTS.title * 0.5


def test_meeting_without_match_is_dropped():
    assert score_meeting(make_meeting(), ["budget"], WEIGHTS, 50) is None


def test_minutes_topic_contexts_attach_to_parent():
    candidate = score_minutes(make_minutes(), ["alpha"], WEIGHTS, 50)
    assert candidate is not None
    result = candidate.result
    assert result.type == "minutes"
    assert result.id == "minutes-1"
    assert {c.field for c in result.contexts} == {"topic.title", "topic.summary"}
    assert result.score == 2 * WEIGHTS.content


def test_minutes_summary_outranks_content():
    summary_hit = score_minutes(make_minutes(), ["quarter"], WEIGHTS, 50)
    decision_hit = score_minutes(make_minutes(), ["architecture"], WEIGHTS, 50)
    assert summary_hit.result.score > decision_hit.result.score
    assert decision_hit.result.contexts[0].field == "decision"


def test_minutes_key_points_are_searched():
    candidate = score_minutes(make_minutes(), ["testing"], WEIGHTS, 50)
    assert candidate is not None
    assert candidate.result.contexts[0].field == "topic.keyPoint"


def test_minutes_summary_snippet_truncated():
    minutes = make_minutes(summary="project " * 40)
    candidate = score_minutes(minutes, ["project"], WEIGHTS, 50)
    assert len(candidate.result.summary_snippet) == 150
    assert candidate.result.summary_snippet.endswith("...")


def test_transcript_segments_fold_into_one_result():
    transcript = make_transcript(
        segments=[
            {"id": "s1", "start_time": 0, "end_time": 10, "speaker": JOHN, "text": "The project is late."},
            {"id": "s2", "start_time": 10, "end_time": 20, "speaker": JOHN, "text": "Nothing to add."},
            {"id": "s3", "start_time": 20, "end_time": 30, "speaker": JOHN, "text": "Back to the project plan."},
        ]
    )
    candidate = score_transcript(transcript, ["project"], WEIGHTS, 50, meeting=make_meeting())
    assert candidate is not None
    result = candidate.result
    assert result.type == "transcript"
    assert result.id == "meeting-1"
    assert result.segment_ids == ["s1", "s3"]
    assert result.timestamp == 0
    assert result.meeting_title == "Weekly Team Meeting"
    assert result.score == 2 * WEIGHTS.content


def test_transcript_speaker_counted_once():
    transcript = make_transcript(
        segments=[
            {"id": f"s{i}", "start_time": i, "end_time": i + 1, "speaker": JOHN, "text": "Okay."}
            for i in range(5)
        ]
    )
    candidate = score_transcript(transcript, ["john"], WEIGHTS, 50, meeting=make_meeting())
    assert candidate is not None
    assert [c.field for c in candidate.result.contexts] == ["speaker"]
    assert candidate.result.score == WEIGHTS.speaker
    assert candidate.result.speaker_names == ["John Doe"]
    assert len(candidate.result.segment_ids) == 5


def test_transcript_without_meeting_uses_created_at():
    candidate = score_transcript(make_transcript(), ["project"], WEIGHTS, 50, meeting=None)
    assert candidate is not None
    assert candidate.result.date == "2025-01-15T11:00:00Z"
    assert candidate.result.meeting_title == ""
    assert candidate.meeting_status is None


def test_flatten_action_items_carries_parent_context():
    records = list(flatten_action_items([make_minutes()]))
    assert [r.item.id for r in records] == ["action-1", "action-2"]
    assert all(r.meeting_id == "meeting-1" for r in records)
    assert all(r.date == "2025-01-15" for r in records)


def test_action_item_content_match():
    record = next(flatten_action_items([make_minutes()]))
    candidate = score_action_item(record, ["documentation"], WEIGHTS, 50)
    assert candidate is not None
    result = candidate.result
    assert result.type == "action_item"
    assert result.priority == "high"
    assert result.assignee_id == "speaker-1"
    assert result.date == "2025-01-15"
    assert result.contexts[0].field == "content"


def test_action_item_assignee_match():
    records = list(flatten_action_items([make_minutes()]))
    candidate = score_action_item(records[1], ["jane"], WEIGHTS, 50)
    assert candidate is not None
    assert candidate.result.contexts[0].field == "assignee"
    assert candidate.result.score == WEIGHTS.speaker


def test_custom_weights_change_scores():
    weights = FieldWeights(title=3.0)
    candidate = score_meeting(make_meeting(), ["weekly"], weights, 50)
    assert candidate.result.score == 3.0
    assert weights.summary == 1.2
