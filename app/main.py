"""
FastAPI application factory.

Creates and configures the FastAPI application instance.  The app is a
thin stateless wrapper around :mod:`app.asf`; it owns no storage.
"""

from fastapi import FastAPI

from app.core.config import settings
from app.core.logging import configure_logging
from app.api.v1.router import api_router

configure_logging()

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Adaptive signal fusion and protocol gating engine.",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json")

# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {
        "message": "ASF API",
        "version": settings.VERSION,
        "status": "healthy"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "service": "asf-api",
        "version": settings.VERSION
    }


@app.get("/info")
async def info():
    return {
        "project name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "authors": settings.AUTHORS,
        "project url": settings.PROJECT_URL
    }
