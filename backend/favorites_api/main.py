"""Favorites API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map FavoritesError → structured JSON responses
    - CORS is the outermost user middleware, so error responses carry CORS headers too
    - CORS allows the configured origins, GET/POST/PUT/DELETE, and Content-Type on every route
    - The DatabaseSessionManager is built once in lifespan and kept on app.state
    - An unreachable database at startup aborts the process

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - run() wraps uvicorn so the console script honours host/port from settings
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from favorites_api.api.error_handlers import register_error_handlers
from favorites_api.api.routes import favorites, health
from favorites_api.core.errors import StorageFailureError
from favorites_api.infrastructure.database import DatabaseSessionManager
from favorites_api.infrastructure.observability import setup_logging
from favorites_api.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    try:
        await db_manager.verify_connection()
    except Exception as e:
        detail = e.detail if isinstance(e, StorageFailureError) else repr(e)
        logger.critical(f"Cannot reach database at startup: {detail}")
        await db_manager.dispose()
        raise
    app.state.db_manager = db_manager
    logger.info(f"Favorites API started on port {settings.port}")
    yield
    logger.info("Favorites API shutting down")
    await db_manager.dispose()
    app.state.db_manager = None


app = FastAPI(
    title="Favorites API", version=health.SERVICE_VERSION, lifespan=lifespan,
)

# Registered before CORS: the unhandled-error middleware must sit inside it
register_error_handlers(app)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type"],
)

app.include_router(health.router)
app.include_router(favorites.router)


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured port."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
