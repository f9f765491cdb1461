"""
BoiBritto - book community API
Main application entry point.
"""

import contextlib
import time
import traceback
from datetime import datetime, timezone

import uuid6
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware

from boibritto import __version__
from boibritto.errors import BoiBrittoError, InternalError
from boibritto.logger import bind_request_context, clear_request_context, configure_logging, logger
from boibritto.providers import get_storage_provider
from boibritto.responses import send_error
from boibritto.routers import (
    auth_router,
    blogs_router,
    chapters_router,
    collections_router,
    comments_router,
    discussions_router,
    profile_router,
    reading_list_router,
    reports_router,
    user_books_router,
)
from boibritto.settings import FRONTEND_URL


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan event handler for FastAPI.
    Handles startup and shutdown events.
    """
    # Re-configure logging to ensure it survives uvicorn's setup
    configure_logging()

    logger.info("Starting up...")
    get_storage_provider()

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title="BoiBritto",
    description="Book community API: user books, discussions, collections and reading lists",
    version=__version__,
    lifespan=lifespan,
)

allowed_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
if FRONTEND_URL:
    allowed_origins.append(FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


REQUEST_ID_HEADER = "X-Request-ID"


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Log each request's start, completion or failure with its duration.

    The request id (taken from ``X-Request-ID`` or freshly generated) is bound
    to every log line of the request and echoed back in the response header.
    """

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid6.uuid7())

        clear_request_context()
        bind_request_context(request_id=request_id, method=request.method, path=request.url.path)
        logger.info(
            "request_started",
            query_params=str(request.query_params),
            client_host=request.client.host if request.client else "unknown",
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            logger.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration * 1000, 2),
            )
            logger.error(traceback.format_exc())
            response = send_error(InternalError.default_message, InternalError.status_code)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response

        duration = time.time() - start_time
        logger.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


app.add_middleware(LoggingMiddleware)


@app.exception_handler(BoiBrittoError)
async def boibritto_exception_handler(request: Request, exc: BoiBrittoError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__}: {request.method} {request.url.path}", extra={"error": exc.message})
    return send_error(exc.message, exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed payloads and query parameters are a 400, like every other validation failure."""
    errors = exc.errors()
    message = "Invalid request data"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path", "data"))
        message = f"Invalid value for {field}: {first.get('msg')}" if field else f"Invalid request data: {first.get('msg')}"
    return send_error(message, 400)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return send_error(str(exc.detail), exc.status_code)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {request.method} {request.url.path}")
    logger.error(traceback.format_exc())
    return send_error(InternalError.default_message, InternalError.status_code)


# ============================================================================
# Include all routers
# ============================================================================

app.include_router(auth_router, prefix="/api")
app.include_router(profile_router, prefix="/api")

# Writing
app.include_router(user_books_router, prefix="/api")
app.include_router(chapters_router, prefix="/api")

# Community
app.include_router(discussions_router, prefix="/api")
app.include_router(comments_router, prefix="/api")
app.include_router(blogs_router, prefix="/api")
app.include_router(reports_router, prefix="/api")

# Library
app.include_router(collections_router, prefix="/api")
app.include_router(reading_list_router, prefix="/api")


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
    }
