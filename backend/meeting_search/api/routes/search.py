import json
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from meeting_search.api.dependencies import get_search_options, get_snapshot_loader
from meeting_search.api.schemas.search import SearchQuery, SearchResponse
from meeting_search.services.search_service import (
    SearchServiceError,
    SearchServiceOptions,
    create_search_service,
    empty_search_response,
)
from meeting_search.services.snapshot_service import SnapshotLoader

logger = logging.getLogger(__name__)

router = APIRouter()


def parse_query_params(request: Request) -> dict[str, Any]:
    """Map flat query-string parameters onto the SearchQuery shape."""
    qp = request.query_params
    params: dict[str, Any] = {}

    query = qp.get("q", qp.get("query"))
    if query is not None:
        params["query"] = query

    if (targets := qp.get("targets")) is not None:
        params["targets"] = [t.strip() for t in targets.split(",") if t.strip()]

    for name in ("page", "limit"):
        value = qp.get(name)
        if value is not None:
            params[name] = value

    for name in ("sortBy", "sortOrder"):
        if (value := qp.get(name)) is not None:
            params[name] = value

    filters: dict[str, Any] = {}
    date_from, date_to = qp.get("dateFrom"), qp.get("dateTo")
    if date_from is not None or date_to is not None:
        filters["dateRange"] = {"from": date_from or None, "to": date_to or None}

    status = qp.get("status", qp.get("actionItemStatus"))
    if status is not None:
        filters["status"] = [s.strip() for s in status.split(",") if s.strip()]

    for name in ("priority", "assigneeId", "meetingStatus"):
        if (value := qp.get(name)) is not None:
            filters[name] = value

    if (participants := qp.get("participants")) is not None:
        try:
            filters["participants"] = json.loads(participants)
        except json.JSONDecodeError:
            logger.debug("Ignoring malformed participants filter: %s", participants)

    if filters:
        params["filters"] = filters
    return params


def validate_search_query(params: Any) -> SearchQuery:
    try:
        return SearchQuery.model_validate(params)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        message = ", ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in errors
        )
        raise SearchServiceError(message, "INVALID_PARAMS", 400, {"validation_errors": errors}) from e


async def run_search(
    query: SearchQuery, loader: SnapshotLoader, options: SearchServiceOptions
) -> SearchResponse:
    if not query.query.strip():
        return empty_search_response(query)

    snapshot = await run_in_threadpool(loader.load)
    service = create_search_service(snapshot, options)
    return await service.search(query)


@router.get("/", response_model=SearchResponse)
async def search_get(
    request: Request,
    loader: SnapshotLoader = Depends(get_snapshot_loader),
    options: SearchServiceOptions = Depends(get_search_options),
):
    """Full-text search across meetings, minutes, transcripts and action items."""
    query = validate_search_query(parse_query_params(request))
    return await run_search(query, loader, options)


@router.post("/", response_model=SearchResponse)
async def search_post(
    payload: dict[str, Any] = Body(...),
    loader: SnapshotLoader = Depends(get_snapshot_loader),
    options: SearchServiceOptions = Depends(get_search_options),
):
    query = validate_search_query(payload)
    return await run_search(query, loader, options)
