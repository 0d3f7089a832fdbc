"""API v1 router aggregation.

Includes all endpoint modules with consistent tags. All routes use
dependencies from app.api.v1.dependencies (no manual repo/service construction).
Routes are served from the root path (/upload, /documents, /dl/{id}).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import documents, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(documents.router, tags=["documents"])
