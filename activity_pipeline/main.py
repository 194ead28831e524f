"""
Activity Pipeline Service - FastAPI Application
Main entry point with all routes configured.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from activity_pipeline import __version__
from activity_pipeline.config import settings
from activity_pipeline.core.logging import configure_logging
from activity_pipeline.database import init_db

# Import all API routers
from activity_pipeline.api import pipeline, follow_ups

# Import models to ensure they are registered with SQLModel
from activity_pipeline.models import Activity, ActivityFollowUp


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    configure_logging(settings.LOG_LEVEL)
    await init_db()
    yield
    # Shutdown


app = FastAPI(
    title="Activity Pipeline API",
    description="Reconstructs the full lineage of customer-relationship activities",
    version=__version__,
    lifespan=lifespan
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include all routers
app.include_router(pipeline.router)
app.include_router(follow_ups.router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "message": "Activity Pipeline API is running",
        "version": __version__,
        "docs": "/docs"
    }


@app.get("/health")
async def health():
    """Detailed health check."""
    return {
        "status": "healthy",
        "version": __version__
    }
