"""
Translator bot FastAPI application.

Main application entry point with route registration and lifecycle management.
"""

import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from translator import __version__
from translator.api.routers import health, history, interactions
from translator.core.config import is_development, is_production, is_testing, settings
from translator.core.logging import clear_context, get_logger, set_request_id
from translator.services.discord_client import create_discord_client
from translator.services.history_store import HistoryStore
from translator.services.interaction_handler import InteractionHandler
from translator.services.model_client import create_model_client
from translator.services.translation_service import TranslationService

logger = get_logger(__name__)


# =============================================================================
# Application Lifecycle
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Builds the history store and services on startup and closes the
    connection pool on shutdown.
    """
    logger.info("Starting translator bot...")

    if settings.auto_migrate:
        try:
            logger.info("Checking database migration status...")
            from translator.core.migrations import upgrade_database

            upgrade_database(settings.database_url)
        except Exception as e:
            logger.warning(f"Database migration check/run failed: {e}", exc_info=True)

    store = HistoryStore(settings.database_url)
    store.initialize()
    if not store.ping():
        logger.warning("Database is not reachable; translations will not be cached until it is")

    discord_client = create_discord_client()
    translation_service = TranslationService(store, create_model_client())

    app.state.store = store
    app.state.interaction_handler = InteractionHandler(translation_service, discord_client)

    if settings.register_commands_on_startup and not is_testing():
        try:
            await discord_client.register_commands()
        except Exception as e:
            logger.error(f"Failed to register commands: {e}", exc_info=True)

    yield

    logger.info("Shutting down translator bot...")
    store.close()
    logger.info("Application shutdown complete")


# =============================================================================
# Application Instance
# =============================================================================

app = FastAPI(
    title="Translator Bot",
    description="Discord message translation with a shared translation cache",
    version=__version__,
    lifespan=lifespan,
)


# =============================================================================
# Middleware
# =============================================================================

@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """Tag every log line of a request with its request ID."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    set_request_id(request_id)
    try:
        response = await call_next(request)
    finally:
        clear_context()
    response.headers["X-Request-ID"] = request_id
    return response


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """
    Global exception handler.

    Catches all unhandled exceptions and returns a proper error response.
    """
    logger.error(
        f"Unhandled exception: {exc}",
        exc_info=True,
        extra={"path": request.url.path, "method": request.method},
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "type": type(exc).__name__,
            "message": str(exc) if settings.debug and not is_production() else "An error occurred",
        },
    )


# =============================================================================
# Route Registration
# =============================================================================

# Discord interactions webhook
app.include_router(interactions.router)

# Health check endpoints
app.include_router(health.router)

# History administration endpoints
app.include_router(history.router)


# =============================================================================
# Development Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "translator.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.auto_reload and is_development(),
        log_level=settings.log_level.lower(),
    )
