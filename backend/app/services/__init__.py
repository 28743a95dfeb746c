"""
Business logic services.
"""
from app.services.qr_service import QrEncoder
from app.services.resume_service import ResumeService

__all__ = [
    "QrEncoder",
    "ResumeService",
]
