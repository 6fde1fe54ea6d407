"""
Task Service - API Application.

============================================================
RESPONSIBILITY
============================================================
Builds the FastAPI application and wires its collaborators.

- One TaskRegistry, MetricsAggregator and HealthChecker per app
- Collaborators live on app.state and reach handlers via Depends
- Service errors are rendered as {"error": "<message>"}

============================================================
USAGE
============================================================
    uvicorn api.main:create_app --factory

============================================================
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routers import health, metrics, tasks
from core.clock import ClockProtocol, SystemClock
from core.config import AppConfig, get_config
from core.exceptions import TaskServiceError
from core.logging_setup import configure_logging
from monitoring.health_checks import HealthChecker
from monitoring.metrics import MetricsAggregator
from task_registry.registry import TaskRegistry

logger = logging.getLogger(__name__)

SERVICE_VERSION = "1.0.0"


# ============================================================
# Exception Handlers
# ============================================================

async def handle_service_error(request: Request, exc: TaskServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.to_dict()}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_response_body())


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


# ============================================================
# Application Factory
# ============================================================

def create_app(
    config: Optional[AppConfig] = None,
    registry: Optional[TaskRegistry] = None,
    metrics_aggregator: Optional[MetricsAggregator] = None,
    clock: Optional[ClockProtocol] = None,
) -> FastAPI:
    """
    Build the task service application.

    Args:
        config: Application configuration (defaults to environment)
        registry: Task registry to serve (defaults to a fresh one)
        metrics_aggregator: Metrics aggregator (defaults to a fresh one)
        clock: Clock for task timestamps and uptime

    Returns:
        Configured FastAPI application
    """
    config = config or get_config()
    clock = clock or SystemClock()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # No-op when run_server.py already configured the root logger.
        configure_logging(config)
        logger.info(f"Server ready: {config.app_name} on {config.host}:{config.port}")
        yield
        logger.info("Server shutting down")

    app = FastAPI(
        title="Task Tracker API",
        description="Create, list, update and delete tasks; health, readiness and metrics probes.",
        version=SERVICE_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.config = config
    app.state.task_registry = registry or TaskRegistry(clock=clock)
    app.state.metrics = metrics_aggregator or MetricsAggregator()
    app.state.health_checker = HealthChecker(config, clock=clock)

    app.add_exception_handler(TaskServiceError, handle_service_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)

    app.include_router(tasks.router)
    # Path used by the browser client.
    app.include_router(tasks.router, prefix="/api")
    app.include_router(health.router)
    app.include_router(metrics.router)

    @app.get("/", tags=["Root"])
    def root():
        """Root endpoint."""
        return {
            "service": config.app_name,
            "version": SERVICE_VERSION,
            "docs": "/docs",
        }

    return app
