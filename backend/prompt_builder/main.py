"""Prompt Builder Backend: FastAPI application entry point."""

import signal
import threading
import uuid
from contextlib import asynccontextmanager

# configure_structlog must run before other app imports: structlog caches the
# processor chain on first use.
from prompt_builder.core.logging import configure_structlog
from prompt_builder.core.config import get_settings as _get_settings_early

_early_settings = _get_settings_early()
configure_structlog(
    log_level="DEBUG" if _early_settings.debug else "INFO",
    json_logs=not _early_settings.debug,
    llm_provider=_early_settings.llm_provider,
)

import structlog

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from prompt_builder.api.routes import api_router
from prompt_builder.core.config import get_settings
from prompt_builder.core.exceptions import PromptBuilderError, RateLimitExceededError
from prompt_builder.middleware.correlation import get_correlation_id, setup_correlation_middleware

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # SIGTERM flips this so /api/health returns 503 while connections drain
    app.state.shutting_down = False

    def handle_sigterm(signum, frame):
        app.state.shutting_down = True
        logger.info("sigterm_received", action="health_check_503_draining_connections")

    if threading.current_thread() is threading.main_thread():
        signal.signal(signal.SIGTERM, handle_sigterm)

    settings = get_settings()
    has_credentials = bool(
        settings.openai_api_key if settings.llm_provider == "openai" else settings.anthropic_api_key
    )
    logger.info(
        "startup_complete",
        app_name=settings.app_name,
        debug=settings.debug,
        llm_provider=settings.llm_provider,
        provider_credentials=has_credentials,
    )

    yield

    logger.info("shutdown_complete")


def _error_response(status_code: int, error: str, message: str | None, debug_id: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": message, "debug_id": debug_id},
        headers=headers,
    )


async def prompt_builder_exception_handler(request: Request, exc: PromptBuilderError) -> JSONResponse:
    """Map domain errors to {error, message, debug_id} with their own status code."""
    debug_id = str(uuid.uuid4())

    logger.warning(
        "request_failed",
        error=exc.code,
        status_code=exc.status_code,
        debug_id=debug_id,
        correlation_id=get_correlation_id(),
        path=request.url.path,
        method=request.method,
        detail=exc.message,
    )

    headers = None
    if isinstance(exc, RateLimitExceededError):
        headers = {"Retry-After": str(max(1, round(exc.retry_after)))}

    return _error_response(exc.status_code, exc.code, exc.message, debug_id, headers)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Global handler for HTTPException with debug_id tracking."""
    debug_id = str(uuid.uuid4())

    logger.error(
        "http_exception",
        status_code=exc.status_code,
        debug_id=debug_id,
        correlation_id=get_correlation_id(),
        path=request.url.path,
        method=request.method,
        detail=exc.detail,
    )

    return _error_response(exc.status_code, "HTTP_ERROR", str(exc.detail), debug_id, exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies get the same error shape as everything else."""
    debug_id = str(uuid.uuid4())
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{location}: {first.get('msg')}" if location else first.get("msg", "Invalid request")

    logger.info("request_validation_failed", debug_id=debug_id, path=request.url.path, detail=message)

    return _error_response(422, "VALIDATION_ERROR", message, debug_id)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global handler for unhandled errors. Logs the traceback, returns a generic 500."""
    debug_id = str(uuid.uuid4())

    logger.error(
        "unhandled_exception",
        debug_id=debug_id,
        correlation_id=get_correlation_id(),
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=True,
    )

    return _error_response(500, "INTERNAL_ERROR", "Internal server error", debug_id)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Compose, analyze and generate prompts for language models",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_origin_regex=settings.allowed_origin_regex,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    )

    # Added last so it wraps CORS and runs first on incoming requests
    setup_correlation_middleware(app)

    app.exception_handler(PromptBuilderError)(prompt_builder_exception_handler)
    app.exception_handler(HTTPException)(http_exception_handler)
    app.exception_handler(RequestValidationError)(validation_exception_handler)
    app.exception_handler(Exception)(generic_exception_handler)

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "prompt_builder.main:app",
        host="0.0.0.0",
        port=get_settings().port,
        reload=_early_settings.debug,
    )
