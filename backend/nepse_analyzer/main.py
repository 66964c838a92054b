"""
NEPSE Analyzer Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nepse_analyzer.core.config import settings
from nepse_analyzer.api.v1 import router as api_v1_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    from nepse_analyzer.services.data_ingestion import get_snapshot_source
    source = get_snapshot_source()
    latest = await source.get_latest()
    if latest is not None:
        logger.info(f"Snapshot source ready, latest trading day {latest.date}")
    else:
        logger.warning("Snapshot source is empty")

    yield

    # Shutdown
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    NEPSE Analyzer API

    ## Architecture
    - **Series Extraction**: Daily snapshots -> clean per-symbol price/volume series
    - **Indicator Engine**: SMA / EMA, Wilder RSI, MACD (pure Python/NumPy)
    - **Scoring**: Rule-based score centered at 50 with STRONG BUY .. STRONG SELL
    - **Tier Redaction**: Guests see price and RSI, pro viewers the full verdict
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "NEPSE Analyzer API",
        "docs": "/docs",
        "health": "/health",
    }
