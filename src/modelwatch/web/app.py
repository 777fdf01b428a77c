"""HTTP front door for modelwatch.

Routes:
    GET  /         static info page
    GET  /monitor  run one cycle and return its summary
    GET  /status   per-source configuration and snapshot state
    POST /clear    delete every stored snapshot
    GET  /health   liveness probe
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..core.types import utc_now_iso
from ..services.container import ServiceContainer
from ..services.scheduler import MonitorScheduler
from .pages import INDEX_HTML


def _json(content: dict[str, Any], status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        content=content,
        status_code=status_code,
        headers={"Cache-Control": "no-cache"},
    )


def create_app(container: ServiceContainer, *, schedule_interval: float = 0) -> FastAPI:
    """Build the FastAPI application around a service container.

    Args:
        container: Provides the orchestrator, status service and store.
        schedule_interval: Seconds between scheduled cycles while the app
            runs; 0 disables the scheduler.

    Returns:
        Configured FastAPI application. Its lifespan connects the container,
        starts the scheduler, and closes both on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        container.connect()
        scheduler = None
        if schedule_interval > 0:
            scheduler = MonitorScheduler(container.orchestrator.run, schedule_interval)
            scheduler.start()
        app.state.scheduler = scheduler
        try:
            yield
        finally:
            if scheduler is not None:
                await scheduler.stop()
            await container.close()

    app = FastAPI(
        title="LLM Models Monitor",
        description="Monitor the model list changes of LLM providers",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = container

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        """Static info page."""
        return HTMLResponse(INDEX_HTML)

    @app.get("/monitor")
    async def monitor() -> JSONResponse:
        """Run one monitoring cycle."""
        result = await container.orchestrator.run()
        return _json(
            {
                "success": True,
                "timestamp": utc_now_iso(),
                "summary": result.summary(),
                "results": [outcome.to_dict() for outcome in result.outcomes],
            }
        )

    @app.get("/status")
    async def status() -> JSONResponse:
        """Per-source monitoring status."""
        return _json(
            {
                "success": True,
                "timestamp": utc_now_iso(),
                "providers": container.status.get_status(),
            }
        )

    @app.post("/clear")
    async def clear() -> JSONResponse:
        """Delete all stored snapshots."""
        removed = container.orchestrator.clear()
        return _json(
            {
                "success": True,
                "message": "All cached data cleared",
                "cleared": removed,
                "timestamp": utc_now_iso(),
            }
        )

    @app.get("/health")
    async def health() -> JSONResponse:
        """Liveness probe."""
        return _json({"status": "healthy", "timestamp": utc_now_iso(), "version": __version__})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code in (404, 405):
            return _json(
                {"error": "Not Found", "message": "The requested endpoint does not exist"},
                status_code=404,
            )
        return _json({"error": str(exc.detail)}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
        return _json(
            {"error": "Internal Server Error", "message": str(exc)},
            status_code=500,
        )

    return app
