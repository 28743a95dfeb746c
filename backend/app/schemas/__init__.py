"""
Pydantic schemas for API request/response validation.
"""
from app.schemas.upload import UploadResponse

__all__ = [
    "UploadResponse",
]
