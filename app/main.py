"""
FastAPI Backend Application
===========================
Main entry point for the Chartflow API.

This file sets up:
- Structured logging
- FastAPI app with CORS middleware
- Request timing middleware
- API route registration
- Health check endpoint
"""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import charts, nodes
from app.core.config import get_settings
from app.core.middleware import RequestTimingMiddleware
from charts.types import ChartType

settings = get_settings()

logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = structlog.get_logger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    """
    # ----- STARTUP -----
    logger.info("Starting up Chartflow API...", chart_types=len(ChartType))

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info("Shutdown complete!")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Chart data processing and workflow input nodes",
    version=VERSION,
    lifespan=lifespan,
)

# ----- Middleware -----

app.add_middleware(RequestTimingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ----- Health Check -----
@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring.
    """
    return {
        "status": "healthy",
        "services": {
            "api": "up",
            "charts": len(ChartType),
        },
        "version": VERSION,
    }


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "docs": "/docs",
        "health": "/health",
        "version": VERSION,
    }


# ----- API Routes -----
app.include_router(charts.router, prefix="/api/v1", tags=["charts"])
app.include_router(nodes.router, prefix="/api/v1", tags=["nodes"])
