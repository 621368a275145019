from __future__ import annotations

from datetime import UTC, datetime

from meeting_search.api.schemas.search import SearchFilters
from meeting_search.services.search_scorers import SearchCandidate


def parse_result_date(value: str) -> datetime | None:
    """Parse a result date (ISO instant or YYYY-MM-DD) into an aware datetime.

    Date-only values and naive instants are treated as UTC.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    return _as_utc(parsed)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def passes_filters(candidate: SearchCandidate, filters: SearchFilters | None) -> bool:
    if filters is None:
        return True
    result = candidate.result

    if filters.date_range is not None:
        lower, upper = filters.date_range.from_, filters.date_range.to
        if lower is not None or upper is not None:
            when = parse_result_date(result.date)
            if when is None:
                return False
            if lower is not None and when < _as_utc(lower):
                return False
            if upper is not None and when > _as_utc(upper):
                return False

    if filters.participants:
        wanted = {p.id for p in filters.participants}
        if wanted.isdisjoint(candidate.participant_ids):
            return False

    if filters.meeting_status is not None and candidate.meeting_status is not None:
        if candidate.meeting_status != filters.meeting_status:
            return False

    if result.type == "action_item":
        if filters.priority is not None and result.priority != filters.priority:
            return False
        if filters.status and result.status not in filters.status:
            return False
        if filters.assignee_id is not None and result.assignee_id != filters.assignee_id:
            return False

    return True


def apply_filters(
    candidates: list[SearchCandidate], filters: SearchFilters | None
) -> list[SearchCandidate]:
    if filters is None:
        return list(candidates)
    return [c for c in candidates if passes_filters(c, filters)]
