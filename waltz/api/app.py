"""
Main FastAPI application for the Waltz overlay diagram service

This module creates and configures the FastAPI application with:
- CORS middleware for frontend integration
- Overlay diagram routes
- Health check endpoint
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from waltz.api.models import HealthResponse
from waltz.api.routes import aggregate_overlay_diagram
from waltz.config.constants import API_PREFIX, SERVICE_NAME
from waltz.config.settings import settings
from waltz.utils.logging import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan events

    Startup and shutdown logging only; the database connects lazily on the
    first request.
    """
    logger.info(f"🚀 {settings.api_title} starting...")
    logger.info(f"📚 Overlay diagram endpoints under {API_PREFIX}")

    yield

    logger.info("🛑 FastAPI application shutting down...")


app = FastAPI(
    title=settings.api_title,
    description="""
    Aggregated overlay diagram data for the Waltz architecture catalogue.

    ## Widgets

    * **App count** - in-scope applications per cell, now and on a target date
    * **Target app cost** - latest application costs per cell, now and on a target date
    * **App cost** - application costs per cell, optionally split by an allocation scheme
    * **App assessment** - in-scope applications per cell and assessment rating
    * **Backing entity** - the named entities behind each cell

    ## Example

    ```bash
    curl -X POST http://localhost:8000/api/aggregate-overlay-diagram/diagram-id/1/app-count-widget \\
         -H "Content-Type: application/json" \\
         -d '{"idSelectionOptions": {"selection": "all"}, "overlayParameters": {"target_date": "2030-01-01"}}'
    ```
    """,
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(aggregate_overlay_diagram.router)


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """
    Health check endpoint

    Returns:
        HealthResponse with service status
    """
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        version=settings.api_version
    )
