"""
Error kinds raised by the upload and view workflows.

Each error carries the HTTP status and the user-facing message that route
handlers turn into a response. None of them are retried.
"""
from typing import Optional


class ResumeQRError(Exception):
    """Base class for all handled service errors."""

    status_code: int = 500
    message: str = "Request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


# Upload errors

class MissingFile(ResumeQRError):
    status_code = 400
    message = "No PDF uploaded"


class UnsupportedContentType(ResumeQRError):
    status_code = 400
    message = "Only PDF files are accepted"


class StorageUploadFailed(ResumeQRError):
    """Object storage rejected the write. The provider error is the __cause__."""
    status_code = 500
    message = "Failed to upload PDF"


class PublicUrlUnavailable(ResumeQRError):
    status_code = 500
    message = "Failed to get public URL"


class QrEncodingFailed(ResumeQRError):
    status_code = 500
    message = "Failed to generate QR code"


# View errors

class UnknownIdentifier(ResumeQRError):
    status_code = 404
    message = "Resume not found"


class InvalidStorageKey(ResumeQRError):
    status_code = 400
    message = "Invalid file parameter"


class ObjectNotFound(ResumeQRError):
    status_code = 404
    message = "PDF not found"


class PublicUrlResolutionFailed(ResumeQRError):
    status_code = 500
    message = "Failed to resolve resume URL"
