"""
Pydantic schemas for the upload endpoint.
"""
from pydantic import BaseModel, Field
from typing import Optional


class UploadResponse(BaseModel):
    """Response body for POST /api/upload (success and failure)."""
    success: bool = Field(..., description="Whether the upload succeeded")
    resumeUrl: Optional[str] = Field(None, description="Shareable URL encoded in the QR code")
    qrCode: Optional[str] = Field(None, description="QR code as a PNG data URI")
    profileLink: Optional[str] = Field(None, description="Profile link echoed back to the client")
    uniqueId: Optional[str] = Field(None, description="Generated id embedded in resumeUrl")
    error: Optional[str] = Field(None, description="Error message when success is false")

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "resumeUrl": "https://resume-qr.example.com/api/view/3f2b6c0e9a1d4e7f8b5c2a1d0e9f8a7b",
                "qrCode": "data:image/png;base64,iVBORw0KGgo...",
                "profileLink": "https://example.com/me",
                "uniqueId": "3f2b6c0e9a1d4e7f8b5c2a1d0e9f8a7b"
            }
        }

    @classmethod
    def failure(cls, error: str) -> "UploadResponse":
        return cls(success=False, error=error)
