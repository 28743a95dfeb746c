"""
Health check endpoint.
Reports whether object storage is configured and which link store is active.
"""
from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_resume_service
from app.services.resume_service import ResumeService

router = APIRouter()


@router.get("")
async def health_check(service: ResumeService = Depends(get_resume_service)):
    """
    Health check endpoint.
    Returns 503 if uploads cannot work because storage is not configured.
    """
    health_status = {
        "status": "healthy",
        "storage": "configured" if service.storage.is_configured else "not configured",
        "link_store": type(service.links).__name__
    }

    if not service.storage.is_configured:
        health_status["status"] = "unhealthy"
        raise HTTPException(status_code=503, detail=health_status)

    return health_status
