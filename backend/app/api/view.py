"""
View endpoints.

Both redirect (302) the browser to the stored PDF:
- GET /view/{unique_id}     - id issued by the upload endpoint (QR codes point here)
- GET /view?file=<key>      - raw storage key, for links that embed the key directly

Errors are returned as plain text; nothing escapes to the framework error page.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse, RedirectResponse

from app.dependencies import get_resume_service
from app.exceptions import PublicUrlResolutionFailed, ResumeQRError
from app.services.resume_service import ResumeService
from app.utils.logging import log_link_resolved, log_link_resolution_failed
from app.utils.metrics import view_requests_total

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def view_by_key(
    file: Optional[str] = Query(None, description="URL-encoded storage key"),
    service: ResumeService = Depends(get_resume_service),
):
    """
    Redirect to the public URL of a storage key.

    - 302: redirect to the PDF
    - 400: missing or invalid key
    - 404: no such PDF
    - 500: storage could not be queried
    """
    try:
        public_url, storage_key = await service.resolve_storage_key(file)
    except ResumeQRError as e:
        view_requests_total.labels(variant="key", outcome=type(e).__name__).inc()
        log_link_resolution_failed(logger, variant="key", reason=type(e).__name__, storage_key=file)
        return PlainTextResponse(e.message, status_code=e.status_code)
    except Exception:
        view_requests_total.labels(variant="key", outcome="unexpected").inc()
        log_link_resolution_failed(logger, variant="key", reason="unexpected", storage_key=file, include_traceback=True)
        return PlainTextResponse(PublicUrlResolutionFailed.message, status_code=500)

    view_requests_total.labels(variant="key", outcome="redirect").inc()
    log_link_resolved(logger, variant="key", storage_key=storage_key)
    return RedirectResponse(public_url, status_code=302)


@router.get("/{unique_id}")
async def view_by_id(
    unique_id: str,
    service: ResumeService = Depends(get_resume_service),
):
    """
    Redirect to the PDF registered under a generated id.

    - 302: redirect to the PDF
    - 404: unknown id
    - 500: id known but no URL could be produced
    """
    try:
        public_url, storage_key = await service.resolve_unique_id(unique_id)
    except ResumeQRError as e:
        view_requests_total.labels(variant="id", outcome=type(e).__name__).inc()
        log_link_resolution_failed(logger, variant="id", reason=type(e).__name__, unique_id=unique_id)
        return PlainTextResponse(e.message, status_code=e.status_code)
    except Exception:
        view_requests_total.labels(variant="id", outcome="unexpected").inc()
        log_link_resolution_failed(logger, variant="id", reason="unexpected", unique_id=unique_id, include_traceback=True)
        return PlainTextResponse(PublicUrlResolutionFailed.message, status_code=500)

    view_requests_total.labels(variant="id", outcome="redirect").inc()
    log_link_resolved(logger, variant="id", storage_key=storage_key, unique_id=unique_id)
    return RedirectResponse(public_url, status_code=302)
