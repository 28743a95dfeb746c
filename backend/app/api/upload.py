"""
Upload endpoint.

POST /upload (mounted under /api) takes a multipart form:
- pdf: the resume file (required)
- profileLink: optional profile URL, echoed back

and returns the shareable view URL plus its QR code.
Errors come back as {"success": false, "error": "..."} with a 4xx/5xx status.
"""
import logging
import time
from typing import Union

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from app.dependencies import get_resume_service
from app.exceptions import MissingFile, ResumeQRError
from app.schemas.upload import UploadResponse
from app.services.resume_service import ResumeService
from app.utils.logging import log_upload_failed
from app.utils.metrics import resume_uploads_total

logger = logging.getLogger(__name__)

router = APIRouter()


def _failure(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=UploadResponse.failure(error).model_dump(exclude_none=True),
    )


@router.post("", response_model=UploadResponse, response_model_exclude_none=True)
async def upload_resume(
    request: Request,
    pdf: Union[UploadFile, str, None] = File(None),
    profileLink: str = Form(""),
    service: ResumeService = Depends(get_resume_service),
):
    """
    Upload a PDF resume and generate its QR code.

    Flow:
    1. Store the PDF in object storage under a unique key
    2. Register a generated id for it
    3. Encode {base_url}/api/view/{id} as a QR code

    Responses:
    - 200: {success, resumeUrl, qrCode, profileLink, uniqueId}
    - 400: no file / not a PDF
    - 500: storage or QR encoding failure
    """
    start = time.perf_counter()

    try:
        # A plain text field named pdf is not a file part
        if pdf is None or isinstance(pdf, str) or not pdf.filename:
            raise MissingFile()

        file_content = await pdf.read()
        result = await service.upload_resume(
            file_content=file_content,
            file_name=pdf.filename,
            content_type=pdf.content_type,
            profile_link=profileLink,
            request_base_url=str(request.base_url),
        )
    except ResumeQRError as e:
        resume_uploads_total.labels(status=type(e).__name__).inc()
        log_upload_failed(
            logger,
            error=e.message,
            duration_ms=(time.perf_counter() - start) * 1000,
            error_type=type(e).__name__,
        )
        return _failure(e.status_code, e.message)
    except Exception as e:
        resume_uploads_total.labels(status="unexpected").inc()
        log_upload_failed(
            logger,
            error=str(e),
            duration_ms=(time.perf_counter() - start) * 1000,
            include_traceback=True,
        )
        return _failure(500, "Upload failed")

    resume_uploads_total.labels(status="success").inc()
    return result
