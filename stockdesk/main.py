"""Main application entry point with app factory and lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from stockdesk.api.app import create_api_app
from stockdesk.core.config import settings
from stockdesk.core.logging import get_logger, setup_logging


logger = get_logger("main")


def create_app() -> FastAPI:
    """Create the main FastAPI application with the API mounted at /api."""
    api_app = create_api_app()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")
        logger.info(f"Environment: {settings.environment}")

        # Mounted apps get no lifespan events of their own
        async with api_app.router.lifespan_context(api_app):
            yield

        logger.info("Shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.mount("/api", api_app)

    @app.get("/")
    async def root():
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/api/docs" if settings.debug else None,
            "health": "/api/health",
        }

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "stockdesk.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
