from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any

from pydantic import ConfigDict, Field, ValidationError

from meeting_search.api.schemas.search import SearchFacets, SearchQuery, SearchResponse
from meeting_search.models.base import CamelModel
from meeting_search.models.meeting import Meeting
from meeting_search.models.minutes import Minutes
from meeting_search.models.transcript import Transcript
from meeting_search.services.search_filters import apply_filters
from meeting_search.services.search_ranking import build_facets, paginate, sort_candidates
from meeting_search.services.search_scorers import (
    FieldWeights,
    SearchCandidate,
    flatten_action_items,
    score_action_item,
    score_meeting,
    score_minutes,
    score_transcript,
)
from meeting_search.services.text_matching import tokenize_query

logger = logging.getLogger(__name__)

ALL_TARGETS = ("meetings", "minutes", "transcripts", "action_items")


class SearchServiceError(Exception):
    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 500,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details


class SearchDataSources(CamelModel):
    """Read-only snapshot of the records a search runs over."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    meetings: list[Meeting] = Field(default_factory=list)
    minutes: list[Minutes] = Field(default_factory=list)
    transcripts: list[Transcript] = Field(default_factory=list)


class SearchServiceOptions(CamelModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    context_length: int = Field(default=50, ge=1)
    min_score_threshold: float = Field(default=0.0, ge=0)
    field_weights: FieldWeights = Field(default_factory=FieldWeights)


def empty_search_response(query: SearchQuery | None = None, execution_time_ms: float = 0.0) -> SearchResponse:
    query = query or SearchQuery()
    return SearchResponse(
        query=query.query.strip(),
        results=[],
        total=0,
        page=query.page,
        limit=query.limit,
        total_pages=0,
        has_more=False,
        facets=SearchFacets(),
        execution_time_ms=execution_time_ms,
    )


def resolve_targets(targets: list[str]) -> list[str]:
    """Expand ``all`` and de-duplicate into canonical enumeration order."""
    requested = set(targets)
    if "all" in requested:
        return list(ALL_TARGETS)
    return [t for t in ALL_TARGETS if t in requested]


class SearchService:
    def __init__(
        self,
        data_sources: SearchDataSources,
        options: SearchServiceOptions | None = None,
    ) -> None:
        self.data_sources = data_sources
        self.options = options or SearchServiceOptions()

    async def search(self, query: SearchQuery) -> SearchResponse:
        started = time.perf_counter()

        if not query.query.strip():
            return empty_search_response(query, _elapsed_ms(started))

        try:
            terms = tokenize_query(query.query)
            candidates: list[SearchCandidate] = []
            for target in resolve_targets(query.targets):
                candidates.extend(self._score_target(target, terms))

            candidates = apply_filters(candidates, query.filters)
            threshold = self.options.min_score_threshold
            candidates = [c for c in candidates if c.result.score >= threshold]

            facets = build_facets(candidates)
            ranked = sort_candidates(candidates, query.sort_by, query.sort_order)
            page_items, total_pages, has_more = paginate(ranked, query.page, query.limit)
        except SearchServiceError:
            raise
        except Exception as e:
            elapsed = _elapsed_ms(started)
            logger.exception("Search failed for query %r", query.query)
            raise SearchServiceError(
                "Search failed",
                "SEARCH_ERROR",
                500,
                {"original_error": str(e), "execution_time_ms": elapsed},
            ) from e

        elapsed = _elapsed_ms(started)
        logger.debug(
            "Search %r over %s: %d matches in %.1fms",
            query.query, ",".join(query.targets), len(candidates), elapsed,
        )
        return SearchResponse(
            query=query.query.strip(),
            results=[c.result for c in page_items],
            total=len(candidates),
            page=query.page,
            limit=query.limit,
            total_pages=total_pages,
            has_more=has_more,
            facets=facets,
            execution_time_ms=elapsed,
        )

    def _score_target(self, target: str, terms: list[str]) -> list[SearchCandidate]:
        weights = self.options.field_weights
        context_length = self.options.context_length
        sources = self.data_sources
        scored: list[SearchCandidate | None] = []

        if target == "meetings":
            with_minutes = {m.meeting_id for m in sources.minutes}
            scored = [
                score_meeting(m, terms, weights, context_length, has_minutes=m.id in with_minutes)
                for m in sources.meetings
            ]
        elif target == "minutes":
            scored = [score_minutes(m, terms, weights, context_length) for m in sources.minutes]
        elif target == "transcripts":
            meetings = {m.id: m for m in sources.meetings}
            scored = [
                score_transcript(t, terms, weights, context_length, meeting=meetings.get(t.meeting_id))
                for t in sources.transcripts
            ]
        elif target == "action_items":
            scored = [
                score_action_item(r, terms, weights, context_length)
                for r in flatten_action_items(sources.minutes)
            ]

        return [c for c in scored if c is not None]


def create_search_service(
    data_sources: SearchDataSources | Mapping[str, Any],
    options: SearchServiceOptions | Mapping[str, Any] | None = None,
) -> SearchService:
    if not isinstance(data_sources, SearchDataSources):
        try:
            data_sources = SearchDataSources.model_validate(data_sources)
        except ValidationError as e:
            raise SearchServiceError(
                "Invalid search data sources",
                "INVALID_DATA_SOURCES",
                500,
                e.errors(include_url=False, include_context=False, include_input=False),
            ) from e

    if options is not None and not isinstance(options, SearchServiceOptions):
        options = SearchServiceOptions.model_validate(options)

    return SearchService(data_sources, options)


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000
