"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import analytics, journal, scoring

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    scoring.router, prefix="/scoring", tags=["Domain scoring"]
)
api_router.include_router(
    journal.router, prefix="/journal", tags=["Journal"]
)
api_router.include_router(
    analytics.router, prefix="/analytics", tags=["Analytics"]
)
