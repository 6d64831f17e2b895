"""
Ghana Facility Insights API Server

FastAPI REST API that serves the cleaned facility dataset, its summary
statistics, the regional medical-desert risk table and the data-quality
report to the dashboard frontend.

Run:
    uvicorn api.server:app --host 0.0.0.0 --port 8000 --reload
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Dict

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware

# Ensure project root is on sys.path
PROJECT_ROOT = str(Path(__file__).parent.parent)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from api.data_router import router as data_router
from src.facility_insights.config import CORS_ORIGINS, LOG_FORMAT, LOG_LEVEL
from src.facility_insights.pipeline import DatasetStore, LoadState

# Configure logging
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


# ── Lifecycle ───────────────────────────────────────────────────────────────


def create_app(store: DatasetStore | None = None) -> FastAPI:
    """Build the app around a DatasetStore (a store for the configured CSV by default)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Load the dataset once on startup; a failed load leaves the API up in error state."""
        logger.info("🚀 Starting Ghana Facility Insights API")
        state = app.state.store.load()
        if state == LoadState.READY:
            logger.info(f"✅ Dataset ready: {app.state.store.status()['facilities']} facilities")
        else:
            logger.error(f"❌ Dataset unavailable: {app.state.store.error}")
        yield

    app = FastAPI(
        title="Ghana Facility Insights API",
        description="Cleaned facility records, coverage statistics and medical-desert risk by region",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.store = store or DatasetStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(data_router)

    @app.get("/health", status_code=status.HTTP_200_OK)
    async def health_check() -> Dict[str, str]:
        """Health check endpoint for monitoring and load balancers."""
        return {"status": "healthy", "service": "ghana-facility-insights", "dataset": app.state.store.state.value}

    return app


app = create_app()
