from __future__ import annotations

import math
from datetime import UTC, datetime

from meeting_search.api.schemas.search import FacetCount, SearchFacets
from meeting_search.services.search_filters import parse_result_date
from meeting_search.services.search_scorers import SearchCandidate

TYPE_LABELS = {
    "meeting": "Meetings",
    "minutes": "Minutes",
    "transcript": "Transcripts",
    "action_item": "Action items",
}

# Undated results sort as the oldest.
_EPOCH = datetime.min.replace(tzinfo=UTC)


def build_facets(candidates: list[SearchCandidate]) -> SearchFacets:
    counts: dict[str, int] = {}
    for candidate in candidates:
        kind = candidate.result.type
        counts[kind] = counts.get(kind, 0) + 1

    return SearchFacets(
        by_type=[
            FacetCount(type=kind, count=count, label=TYPE_LABELS.get(kind, kind))
            for kind, count in counts.items()
        ]
    )


def sort_candidates(
    candidates: list[SearchCandidate], sort_by: str = "relevance", sort_order: str = "desc"
) -> list[SearchCandidate]:
    """Stable sort, so equal keys keep their enumeration order in either direction."""
    descending = sort_order == "desc"
    if sort_by == "relevance":
        return sorted(candidates, key=lambda c: c.result.score, reverse=descending)
    return sorted(
        candidates,
        key=lambda c: parse_result_date(c.result.date) or _EPOCH,
        reverse=descending,
    )


def paginate(
    candidates: list[SearchCandidate], page: int, limit: int
) -> tuple[list[SearchCandidate], int, bool]:
    """Slice one page. Returns (page items, total pages, has more)."""
    total = len(candidates)
    skip = (page - 1) * limit
    total_pages = math.ceil(total / limit) if total else 0
    return candidates[skip : skip + limit], total_pages, skip + limit < total
