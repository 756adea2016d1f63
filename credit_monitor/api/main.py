"""FastAPI application factory"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from credit_monitor.api.middleware import MetricsMiddleware, RequestIDMiddleware
from credit_monitor.api.v1 import analytics, applications, filters
from credit_monitor.config import Settings, settings
from credit_monitor.infrastructure.feed import LiveUpdateFeed
from credit_monitor.infrastructure.observability.logging import setup_logging
from credit_monitor.infrastructure.store.session import MonitorSession

# Setup structured logging
setup_logging(settings.log_level)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application with its own monitor session"""
    app_settings = app_settings or settings
    monitor = MonitorSession.from_settings(app_settings)
    feed = LiveUpdateFeed(monitor, app_settings.feed_interval_seconds)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app_settings.feed_enabled:
            feed.start()
        try:
            yield
        finally:
            await feed.stop()
            monitor.close()

    app = FastAPI(
        title="Credit Application Monitor",
        description="Live credit application store with filtering and analytics",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.monitor = monitor
    app.state.feed = feed

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {
            "status": "ok",
            "service": app_settings.service_name,
            "feed_running": feed.running,
        }

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(applications.router, prefix="/v1", tags=["applications"])
    app.include_router(filters.router, prefix="/v1", tags=["filters"])
    app.include_router(analytics.router, prefix="/v1", tags=["analytics"])

    return app


app = create_app()
