"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Literal

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hub_search.clients.postgrest_client import PostgrestClient
from hub_search.config import get_settings
from hub_search.logging_config import (
    REQUEST_ID_HEADER,
    clear_request_id,
    get_logger,
    resolve_request_id,
    set_request_id,
    setup_logging,
)
from hub_search.models.error import ErrorResponse
from hub_search.models.page import SearchPageResponse, SuggestionModel
from hub_search.presentation import EMPTY_STATE_SUGGESTIONS
from hub_search.retrieval.aggregator import SearchAggregator
from hub_search.services.search_service import SearchService

settings = get_settings()
setup_logging(settings.log_level)
logger = get_logger(__name__)

# Built in lifespan; tests swap search_service directly
store_client: PostgrestClient | None = None
search_service: SearchService | None = None

TabParam = Literal["all", "mentor", "match", "listing"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the store client and search service; close the client on shutdown."""
    global store_client, search_service

    logger.info(
        f"Starting {settings.api_title} v{settings.api_version}: store={settings.rest_url}, "
        f"timeout={settings.store_timeout}s, max_retries={settings.store_max_retries}"
    )
    store_client = PostgrestClient(
        base_url=settings.rest_url,
        api_key=settings.supabase_anon_key,
        timeout=settings.store_timeout,
        max_retries=settings.store_max_retries,
    )
    search_service = SearchService(SearchAggregator.from_store(store_client, settings))
    logger.info(
        f"Searching {settings.mentors_collection}, {settings.match_profiles_collection} "
        f"and {settings.listings_collection}"
    )

    try:
        yield
    finally:
        await store_client.close()
        store_client = None
        logger.info(f"{settings.api_title} stopped")


app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="Federated search over mentors, match profiles and marketplace listings",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)


def _error_response(
    status_code: int, error: str, detail: str, request_id: str
) -> JSONResponse:
    """Render an ErrorResponse carrying the request id in body and header."""
    body = ErrorResponse(
        error=error,
        detail=detail,
        timestamp=datetime.now(UTC),
        request_id=request_id,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers={REQUEST_ID_HEADER: request_id},
    )


@app.middleware("http")
async def request_middleware(request: Request, call_next):
    """Bind a request id to logs and responses; turn crashes into 500s."""
    request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
    request.state.request_id = request_id
    token = set_request_id(request_id)
    route = f"{request.method} {request.url.path}"

    try:
        logger.info(f"→ {route}")
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(f"← {route} {response.status_code}")
        return response
    except Exception as e:
        logger.error(f"Unhandled exception on {route}: {e}", exc_info=True)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", str(e), request_id
        )
    finally:
        clear_request_id(token)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report bad query parameters as a 422 ErrorResponse."""
    request_id = getattr(request.state, "request_id", None) or resolve_request_id(None)
    detail = "; ".join(
        f"{' -> '.join(str(loc) for loc in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )

    logger.warning(f"Rejected parameters: {detail}")

    return _error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY, "Validation Error", detail, request_id
    )


# API Endpoints


@app.get("/health")
async def health_check():
    """Health check endpoint.

    Returns:
        dict: Health status and the collections being searched
    """
    return {
        "status": "healthy",
        "service": settings.api_title,
        "version": settings.api_version,
        "collections": {
            "mentor": settings.mentors_collection,
            "match": settings.match_profiles_collection,
            "listing": settings.listings_collection,
        },
    }


@app.get(
    "/api/v1/search",
    response_model=SearchPageResponse,
    summary="Search mentors, people and marketplace listings",
    description="Run a federated search and return the rendered results page payload.",
)
async def search(
    q: str = Query(default="", max_length=200, description="Search query"),
    tab: TabParam = Query(default="all", alias="type", description="Category tab filter"),
) -> SearchPageResponse:
    """Search every entity category.

    A blank query returns an empty page without touching the data store.
    Unreachable sources do not fail the request; they are listed in
    ``failed_sources`` and count as zero results.

    Args:
        q: Search query
        tab: Active category tab (all, mentor, match, listing)

    Returns:
        SearchPageResponse with stats, tabs, highlighted results and suggestions

    Raises:
        HTTPException: If the search service is unavailable
    """
    if not search_service:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Search service not initialized",
        )

    page = await search_service.search_page(q, tab)
    logger.info(
        f"Search '{page.query[:100]}' ({page.active_tab}) -> state={page.state}, "
        f"{page.stats.total} results"
    )
    return page


@app.get(
    "/api/v1/search/suggestions",
    response_model=list[SuggestionModel],
    summary="Alternative searches for the empty state",
)
async def search_suggestions() -> list[SuggestionModel]:
    """Suggested searches shown when nothing matched."""
    return list(EMPTY_STATE_SUGGESTIONS)
