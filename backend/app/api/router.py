"""
API router aggregator.
Includes all route modules.
"""
from fastapi import APIRouter
from app.api import health, upload, view

api_router = APIRouter()

# Include route modules
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(upload.router, prefix="/upload", tags=["upload"])
api_router.include_router(view.router, prefix="/view", tags=["view"])
