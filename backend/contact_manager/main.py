"""
Contact Manager - FastAPI application.
CORS, /api routes, health check, error handling. The MongoDB handle is injected
at construction or opened by the lifespan from MONGODB_URI.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request as StarletteRequest

from contact_manager.api.routes import api_router
from contact_manager.core.config import Settings, get_settings
from contact_manager.db.mongo import create_mongo_client, get_database, ping

_log_handler = logging.StreamHandler(sys.stdout)
_log_handler.setFormatter(logging.Formatter("%(levelname)s:     %(message)s"))
logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Send contact_manager.* logs to stdout at the configured level."""
    root = logging.getLogger("contact_manager")
    root.setLevel(level)
    _log_handler.setLevel(level)
    if _log_handler not in root.handlers:
        root.addHandler(_log_handler)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request (method + path + status)."""

    async def dispatch(self, request: StarletteRequest, call_next: Callable) -> Response:
        response = await call_next(request)
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Opens the MongoDB client unless a database was injected."""
    settings: Settings = app.state.settings
    logger.info("Starting Contact Manager API")
    client = None
    if app.state.database is None:
        if settings.mongodb_uri:
            client = create_mongo_client(settings)
            await ping(client)
            app.state.database = get_database(client, settings)
        else:
            logger.error("MONGODB_URI is not set; contact requests will fail")
    yield
    if client is not None:
        client.close()
        app.state.database = None
    logger.info("Shutting down")


def create_app(database: Any = None, settings: Settings | None = None) -> FastAPI:
    """
    Build the application. Pass `database` (a motor database or compatible async
    handle) to skip connecting at startup, e.g. in tests.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    if settings.is_production:
        settings.validate_for_production()

    app = FastAPI(
        title="Contact Manager API",
        version="1.0.0",
        description="Contact form submissions stored in MongoDB.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials="*" not in settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Error handling middleware
    @app.middleware("http")
    async def catch_exceptions(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled error: %s", exc)
            return JSONResponse(
                status_code=500,
                content={"error": "Server error"},
            )

    @app.get("/")
    def root():
        return {
            "message": "Contact Manager API",
            "version": "1.0.0",
            "docs": "/docs",
            "endpoints": {"contacts": "/api/contacts"},
        }

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    app.include_router(api_router, prefix="/api")
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("contact_manager.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
