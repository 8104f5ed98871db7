"""FastAPI application with lifespan, health, source validation and export endpoints."""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel

from notion_ingest.config import get_settings
from notion_ingest.export import default_since, export_database, export_page_tree
from notion_ingest.logging_config import configure_logging
from notion_ingest.models.export import DatabaseExportRequest, ExportResult, PageExportRequest
from notion_ingest.notion.errors import InvalidNotionIDError
from notion_ingest.notion.ids import parse_notion_id
from notion_ingest.notion.models import SourceValidationResult
from notion_ingest.notion.validation import validate_database_source, validate_page_source


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging and load config on startup."""
    configure_logging()
    settings = get_settings()
    app.state.settings = settings
    yield


app = FastAPI(
    title="Notion Ingest",
    lifespan=lifespan,
)


class ValidateSourceRequest(BaseModel):
    """Body of the source validation endpoints."""

    id: str  # raw ID, UUID or notion.so URL


async def verify_scheduler(request: Request) -> None:
    """Verify the scheduler secret header for protected endpoints.

    Compares the X-Scheduler-Secret header against the configured secret.
    Raises HTTPException 403 if the header is missing, empty, or mismatched.
    """
    settings = get_settings()
    secret = request.headers.get("X-Scheduler-Secret", "")
    if not settings.scheduler_secret or secret != settings.scheduler_secret:
        raise HTTPException(status_code=403, detail="Invalid scheduler secret")


def _parse_id(value: str) -> str:
    try:
        return parse_notion_id(value)
    except InvalidNotionIDError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.get("/health")
async def health():
    """Health check endpoint for Cloud Run and local development."""
    return {
        "status": "ok",
        "service": "notion-ingest",
        "version": "0.1.0",
    }


@app.post("/sources/notion-db/validate")
async def validate_database_endpoint(body: ValidateSourceRequest) -> SourceValidationResult:
    """Check that a database ID or URL is usable as a source."""
    return await validate_database_source(body.id)


@app.post("/sources/notion-page/validate")
async def validate_page_endpoint(body: ValidateSourceRequest) -> SourceValidationResult:
    """Check that a page ID or URL is usable as a source."""
    return await validate_page_source(body.id)


@app.post("/export/database")
async def export_database_endpoint(
    body: DatabaseExportRequest,
    _: None = Depends(verify_scheduler),
) -> ExportResult:
    """Render recently edited pages of a database to Markdown."""
    database_id = _parse_id(body.database_id)
    since = body.since or default_since()
    return await export_database(database_id, since, max_pages=body.max_pages)


@app.post("/export/page")
async def export_page_endpoint(
    body: PageExportRequest,
    _: None = Depends(verify_scheduler),
) -> ExportResult:
    """Render a page and its recently edited descendants to Markdown."""
    settings = get_settings()
    page_id = _parse_id(body.page_id)
    since = body.since or default_since()
    recursive = settings.crawl_recursive if body.recursive is None else body.recursive
    max_depth = settings.crawl_max_depth if body.max_depth is None else body.max_depth
    return await export_page_tree(
        page_id,
        since,
        recursive=recursive,
        max_depth=max_depth,
        max_pages=body.max_pages,
    )
