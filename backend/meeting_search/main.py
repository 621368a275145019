import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from meeting_search.api.routes import search
from meeting_search.api.schemas.common import ErrorDetail, ErrorResponse
from meeting_search.config import settings
from meeting_search.services.search_service import SearchServiceError, SearchServiceOptions
from meeting_search.services.snapshot_service import SnapshotLoader

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.log_level.upper(), format="%(levelname)s %(name)s: %(message)s"
    )

    app.state.search_options = SearchServiceOptions.model_validate(settings.search_options())
    app.state.snapshot_loader = SnapshotLoader(settings.snapshot_path)
    logger.info(
        "Search service configured: snapshot=%s options=%s",
        app.state.snapshot_loader.path,
        app.state.search_options.model_dump(),
    )

    yield


app = FastAPI(
    title="Meeting Records Search",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(search.router, prefix="/api/search", tags=["search"])


@app.exception_handler(SearchServiceError)
async def search_service_error_handler(request: Request, exc: SearchServiceError):
    if exc.status_code >= 500:
        logger.error("[%s %s] %s: %s", request.method, request.url.path, exc.code, exc.message)
    body = ErrorResponse(error=ErrorDetail(code=exc.code, message=exc.message, details=exc.details))
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


@app.get("/api/health")
async def health_check():
    return {"status": "ok"}
