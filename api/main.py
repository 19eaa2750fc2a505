"""FastAPI server for the content inventory."""

from pathlib import Path
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.schemas import AssessmentPayload, ErrorResponse, TraceResponse
from config.settings import Settings, settings
from inventory import __version__
from inventory.models import Entity
from inventory.persistence import (
    ReadOnlyEntityError,
    RecordNotFoundError,
    RecordStore,
    RecordValidationError,
    StorageError,
    create_file_store,
)
from inventory.tracing import get_tracer, log_event, setup_tracing

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_store(request: Request) -> RecordStore:
    """Return the store attached to the running app."""
    return request.app.state.store


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "Invalid request body: " + "; ".join(problems)


def register_error_handlers(app: FastAPI) -> None:
    """Translate store errors into ``{"error": ...}`` responses."""

    @app.exception_handler(RecordValidationError)
    async def handle_validation(request: Request, exc: RecordValidationError):
        log_event("rejected", "api", str(exc), {"path": request.url.path})
        return _error(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_bad_body(request: Request, exc: RequestValidationError):
        message = _describe_validation_error(exc)
        log_event("rejected", "api", message, {"path": request.url.path})
        return _error(400, message)

    @app.exception_handler(RecordNotFoundError)
    async def handle_not_found(request: Request, exc: RecordNotFoundError):
        return _error(404, str(exc))

    @app.exception_handler(ReadOnlyEntityError)
    async def handle_read_only(request: Request, exc: ReadOnlyEntityError):
        return _error(405, str(exc))

    @app.exception_handler(StorageError)
    async def handle_storage(request: Request, exc: StorageError):
        get_tracer().logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return _error(500, "Failed to read or write records")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        get_tracer().logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "Internal server error")


def create_app(store: RecordStore | None = None, app_settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Args:
        store: Record store to serve. Defaults to the JSON files under
            ``data_dir``.
        app_settings: Settings override, mainly for tests.
    """
    cfg = app_settings or settings
    setup_tracing(cfg.log_level, enabled=cfg.tracing_enabled)

    app = FastAPI(
        title="Content Inventory API",
        description="Assessment records and the companion RFI list",
        version=__version__,
    )
    app.state.store = store or create_file_store(cfg.data_dir)
    app.state.settings = cfg

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # ============ Health Check ============

    @app.get("/health", response_class=PlainTextResponse)
    def health():
        """Liveness check."""
        return "OK"

    # ============ Assessments ============

    @app.get("/api/assessments", responses=ERROR_RESPONSES)
    def list_assessments(store: RecordStore = Depends(get_store)) -> list[dict[str, Any]]:
        """List every assessment; an absent file is an empty list."""
        return store.list(Entity.ASSESSMENTS)

    @app.get("/api/assessments/{record_id}", responses=ERROR_RESPONSES)
    def get_assessment(record_id: str, store: RecordStore = Depends(get_store)) -> dict[str, Any]:
        """Get a single assessment by id."""
        return store.get(Entity.ASSESSMENTS, record_id)

    @app.post("/api/assessments", status_code=201, responses=ERROR_RESPONSES)
    def create_assessment(
        payload: AssessmentPayload,
        store: RecordStore = Depends(get_store),
    ) -> dict[str, Any]:
        """Create an assessment. ``processName`` and ``status`` are required."""
        return store.create(Entity.ASSESSMENTS, payload.to_record())

    @app.put("/api/assessments/{record_id}", responses=ERROR_RESPONSES)
    def update_assessment(
        record_id: str,
        payload: AssessmentPayload,
        store: RecordStore = Depends(get_store),
    ) -> dict[str, Any]:
        """Merge the body over an existing assessment."""
        return store.update(Entity.ASSESSMENTS, record_id, payload.to_record())

    # ============ RFIs ============

    @app.get("/api/rfis", responses=ERROR_RESPONSES)
    def list_rfis(store: RecordStore = Depends(get_store)) -> list[dict[str, Any]]:
        """List RFIs (read-only)."""
        return store.list(Entity.RFIS)

    # ============ Trace ============

    @app.get("/api/trace", response_model=TraceResponse)
    def get_trace(component: str | None = None):
        """Get recorded store and API events."""
        return TraceResponse(events=get_tracer().get_events(component))

    @app.delete("/api/trace")
    def clear_trace():
        """Clear recorded events."""
        get_tracer().clear()
        return {"status": "cleared"}

    # Static assets last so API routes win
    app.mount(
        "/",
        StaticFiles(directory=Path(cfg.public_dir), html=True, check_dir=False),
        name="public",
    )

    log_event("startup", "api", "Content inventory API ready",
              {"data_dir": str(cfg.data_dir), "public_dir": str(cfg.public_dir)})
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
