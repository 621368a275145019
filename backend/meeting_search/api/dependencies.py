from fastapi import Request

from meeting_search.services.search_service import SearchServiceOptions
from meeting_search.services.snapshot_service import SnapshotLoader


def get_snapshot_loader(request: Request) -> SnapshotLoader:
    return request.app.state.snapshot_loader


def get_search_options(request: Request) -> SearchServiceOptions:
    return request.app.state.search_options
