"""API application factory."""

from __future__ import annotations

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from stockdesk.core.config import settings
from stockdesk.core.exceptions import register_exception_handlers
from stockdesk.core.logging import get_logger, request_id_var
from stockdesk.schemas.common import ErrorResponse
from stockdesk.services.openai import close_client_manager
from stockdesk.simulation import SimulationController
from stockdesk.simulation.loop import start_tick_loop, stop_tick_loop

from .routes import assessments, health, notifications, portfolio, simulation, stocks


logger = get_logger("api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run the tick loop for the app's controller and release the OpenAI pool."""
    task = None
    if settings.tick_enabled:
        task = start_tick_loop(app.state.controller, settings.tick_interval_seconds)

    yield

    await stop_tick_loop(task)
    try:
        await close_client_manager()
    except Exception as e:
        logger.warning(f"OpenAI client cleanup failed: {e}")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Add request ID to all requests for tracing."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        request_id_var.set(request_id)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.monotonic()

        response = await call_next(request)

        duration = time.monotonic() - start_time
        path = request.url.path

        logger.info(
            f"{request.method} {path} -> {response.status_code} ({duration:.3f}s)",
            extra={
                "extra_fields": {
                    "method": request.method,
                    "path": path,
                    "status_code": response.status_code,
                    "duration_ms": int(duration * 1000),
                }
            },
        )

        return response


def create_api_app(controller: SimulationController | None = None) -> FastAPI:
    """Create and configure the API application.

    A fresh simulation session is created unless ``controller`` is given.
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Simulated portfolio dashboard with AI assessments and price signals",
        root_path=settings.root_path,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        responses={
            404: {"model": ErrorResponse, "description": "Not Found"},
            409: {"model": ErrorResponse, "description": "Conflict"},
            422: {"model": ErrorResponse, "description": "Validation Error"},
            500: {"model": ErrorResponse, "description": "Internal Server Error"},
            502: {"model": ErrorResponse, "description": "Bad Gateway"},
            503: {"model": ErrorResponse, "description": "Service Unavailable"},
        },
    )
    app.state.controller = controller or SimulationController()

    # Add middlewares (order matters - first added is outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
        max_age=600,
    )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(stocks.router, prefix="/stocks", tags=["Stocks"])
    app.include_router(assessments.router, prefix="/stocks", tags=["Assessments"])
    app.include_router(portfolio.router, prefix="/portfolio", tags=["Portfolio"])
    app.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])
    app.include_router(simulation.router, prefix="/simulation", tags=["Simulation"])

    return app
