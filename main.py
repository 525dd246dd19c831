"""
Main API module for Aerolinks Analytics.

Responsibilities:
    - Expose the ingestion endpoint that validates and appends events
    - Expose the stats endpoint that rescans the log into a dashboard summary
    - Health check for deploy health checks

Architecture:
    - App Factory pattern (create_app) for test isolation and DI.
    - JSONL file storage by default; memory and Postgres selectable by env.
    - Validation happens before any store interaction; normalization happens
      at aggregation time so the raw values stay in the log.
    - Internal error detail is logged, never returned to clients.

LLM Prompt Example:
    "Explain how to structure a FastAPI service with an application factory,
    injected dependencies, and a clean separation between API and business logic."
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from aerolinks_analytics.analytics.analytics import Analytics
from aerolinks_analytics.config import settings
from aerolinks_analytics.events.schemas import parse_event
from aerolinks_analytics.storage.base import BaseStorage
from aerolinks_analytics.storage.storage_factory import get_storage

INVALID_PAYLOAD = {"error": "Invalid payload"}
INTERNAL_ERROR = {"error": "Internal server error"}


def create_app(storage: Optional[BaseStorage] = None) -> FastAPI:
    """
    Factory function to build and configure a new FastAPI app instance.

    Args:
        storage (Optional[BaseStorage]): Event log to use. When omitted the
            backend is chosen by `get_storage()` from the environment.

    Returns:
        FastAPI: A fully configured application instance with its own
                 storage and analytics instances.

    Why an app factory?
        - Enables per-test isolation in pytest (e.g. a log under tmp_path).
        - Encourages dependency injection and easy swapping of implementations.
        - Avoids accidental global state across workers/processes.
    """
    app = FastAPI(
        title="Aerolinks Analytics",
        description="Append-only event ingestion and on-demand stats for the banner page",
        docs_url="/docs",
    )
    log = logging.getLogger("aerolinks")

    if not logging.getLogger().handlers:
        logging.basicConfig(level=settings.LOG_LEVEL)

    if storage is None:
        storage = get_storage()
    analytics = Analytics(storage=storage)
    log.info("Aerolinks storage backend: %s", type(storage).__name__)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # ----------------------------------------------------------------
    # Routes
    # ----------------------------------------------------------------
    @app.post("/api/event")
    async def ingest_event(request: Request) -> JSONResponse:
        """
        Validate one inbound event and append it to the log.

        Returns:
            200 {"ok": true} once the event is durably appended.
            400 {"error": "Invalid payload"} for malformed JSON or a body that
                matches neither event shape. The store is not touched.
            500 {"error": "Internal server error"} if the append fails.
        """
        try:
            payload = await request.json()
            event = parse_event(payload)
        except ValueError:
            # malformed JSON and InvalidEventError are both ValueErrors
            return JSONResponse(INVALID_PAYLOAD, status_code=400)

        try:
            await run_in_threadpool(analytics.record, event)
        except Exception:
            log.exception("Failed to append event")
            return JSONResponse(INTERNAL_ERROR, status_code=500)
        return JSONResponse({"ok": True})

    @app.get("/api/stats")
    def stats() -> JSONResponse:
        """
        Recompute the summary from the full log.

        Returns:
            200 StatsSummary JSON (camelCase keys), never cached.
            500 {"error": "Internal server error"} if the log can't be read.
        """
        try:
            summary = analytics.summary()
        except Exception:
            log.exception("Failed to compute stats")
            return JSONResponse(INTERNAL_ERROR, status_code=500)
        return JSONResponse(summary.to_json_dict(), headers={"Cache-Control": "no-store"})

    return app


# Backward compatibility for uvicorn and legacy imports:
# `uvicorn main:app --reload` and `from main import app` continue to work.
app = create_app()
