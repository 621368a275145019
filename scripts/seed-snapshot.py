"""Write a sample search snapshot for development testing."""

import json
import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

from meeting_search.config import settings
from meeting_search.services.search_service import SearchDataSources

PEOPLE = {
    "sarah": {"id": "u-sarah", "name": "Sarah Chen"},
    "mike": {"id": "u-mike", "name": "Mike Johnson"},
    "lisa": {"id": "u-lisa", "name": "Lisa Park"},
    "david": {"id": "u-david", "name": "David Kim"},
}

SAMPLE_MEETINGS = [
    {
        "title": "Q1 Product Roadmap Planning",
        "days_ago": 14,
        "duration": 60,
        "host": "sarah",
        "attendees": ["sarah", "mike", "lisa"],
        "summary": "Planned Q1 roadmap focusing on search and performance. Sarah leads the search spec, Mike handles load testing.",
        "topics": [
            {
                "title": "Search improvements",
                "summary": "Search takes priority over the dashboard redesign for January.",
                "key_points": ["Search spec due Friday", "Dashboard moves to February"],
            },
            {
                "title": "API performance",
                "summary": "Mike raised concerns about API performance under load.",
                "key_points": ["Run a load test before scaling"],
            },
        ],
        "decisions": ["Prioritize search over dashboard for January"],
        "action_items": [
            {"assignee": "sarah", "content": "Create detailed search improvements spec", "priority": "high", "status": "in_progress"},
            {"assignee": "mike", "content": "Run load tests on current API endpoints", "priority": "medium", "status": "pending"},
        ],
        "segments": [
            ("sarah", "Let's start with the roadmap. Search is the biggest complaint from customers."),
            ("mike", "Before we scale anything I want a proper load test on the API."),
            ("lisa", "The dashboard mockups are ready whenever we pick that up again."),
        ],
    },
    {
        "title": "Acme Corp Customer Feedback",
        "days_ago": 5,
        "duration": 45,
        "host": "sarah",
        "attendees": ["sarah", "david"],
        "summary": "Acme Corp likes the notes feature but finds search confusing. Their CTO wants API access.",
        "topics": [
            {
                "title": "Search UX",
                "summary": "Results for a person's name look random to new users.",
                "key_points": ["Group results by person"],
            },
        ],
        "decisions": ["Offer Acme early access to the public API"],
        "action_items": [
            {"assignee": "sarah", "content": "Schedule follow-up search demo with David Kim", "priority": "high", "status": "pending"},
        ],
        "segments": [
            ("david", "The automatic summarization saves us probably 30 minutes per meeting."),
            ("sarah", "What about the search functionality? We've been working on improvements."),
            ("david", "Honestly, the search is a bit confusing. Is there an API we can use?"),
        ],
    },
    {
        "title": "Pricing Strategy Discussion",
        "days_ago": 1,
        "duration": 50,
        "host": "mike",
        "attendees": ["sarah", "mike"],
        "summary": "Planning tiered pricing (Starter/Pro/Enterprise). Enterprise needs SSO and audit logging.",
        "topics": [],
        "decisions": [],
        "action_items": [
            {"assignee": "sarah", "content": "Prepare pricing tier comparison for board presentation", "priority": "high", "status": "pending"},
            {"assignee": "mike", "content": "Estimate engineering effort for SSO and audit logging", "priority": "low", "status": "completed"},
        ],
        "segments": [],
    },
]


def build_snapshot(now: datetime) -> dict:
    meetings, minutes, transcripts = [], [], []

    for n, data in enumerate(SAMPLE_MEETINGS, start=1):
        meeting_id = f"meeting-{n}"
        start = now - timedelta(days=data["days_ago"])
        end = start + timedelta(minutes=data["duration"])
        meetings.append({
            "id": meeting_id,
            "title": data["title"],
            "meetingNo": f"MTG-{n:03d}",
            "startTime": start.isoformat(),
            "endTime": end.isoformat(),
            "durationMinutes": data["duration"],
            "status": "ended",
            "type": "regular",
            "host": PEOPLE[data["host"]],
            "participantCount": len(data["attendees"]),
            "minutesStatus": "approved",
        })

        minutes.append({
            "id": f"minutes-{n}",
            "meetingId": meeting_id,
            "title": data["title"],
            "date": start.date().isoformat(),
            "duration": data["duration"] * 60_000,
            "summary": data["summary"],
            "topics": [
                {
                    "id": f"topic-{n}-{i}",
                    "title": topic["title"],
                    "summary": topic["summary"],
                    "keyPoints": topic["key_points"],
                }
                for i, topic in enumerate(data["topics"], start=1)
            ],
            "decisions": [
                {"id": f"decision-{n}-{i}", "content": content}
                for i, content in enumerate(data["decisions"], start=1)
            ],
            "actionItems": [
                {
                    "id": f"action-{n}-{i}",
                    "content": item["content"],
                    "assignee": PEOPLE[item["assignee"]],
                    "priority": item["priority"],
                    "status": item["status"],
                }
                for i, item in enumerate(data["action_items"], start=1)
            ],
            "attendees": [PEOPLE[key] for key in data["attendees"]],
        })

        if data["segments"]:
            transcripts.append({
                "meetingId": meeting_id,
                "language": "en",
                "segments": [
                    {
                        "id": f"segment-{n}-{i}",
                        "startTime": i * 15_000,
                        "endTime": (i + 1) * 15_000,
                        "speaker": PEOPLE[speaker],
                        "text": text,
                        "confidence": 0.95,
                    }
                    for i, (speaker, text) in enumerate(data["segments"])
                ],
                "totalDuration": data["duration"] * 60_000,
                "createdAt": end.isoformat(),
            })

    return {"meetings": meetings, "minutes": minutes, "transcripts": transcripts}


def seed(target: Path) -> None:
    snapshot = build_snapshot(datetime.now(UTC))
    SearchDataSources.model_validate(snapshot)

    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w") as f:
        json.dump(snapshot, f, indent=2)
    print(f"Seeded {len(SAMPLE_MEETINGS)} meetings with minutes, action items, and transcripts at {target}.")


if __name__ == "__main__":
    path = sys.argv[1] if len(sys.argv) > 1 else settings.snapshot_path
    seed(Path(path).expanduser())
