"""
Service wiring.

The resume service and its collaborators are built once per application
lifetime (see main.lifespan) and kept on app.state. Routes get them through
Depends(get_resume_service); tests swap them with dependency_overrides.
"""
import logging
from typing import Optional

from fastapi import Request

from app.config import Settings, settings as default_settings
from app.repositories.link_repository import (
    InMemoryLinkRepository,
    LinkRepository,
    StorageLinkRepository,
)
from app.services.qr_service import QrEncoder
from app.services.resume_service import ResumeService
from app.storage.s3_client import ObjectStorageClient

logger = logging.getLogger(__name__)


def build_link_repository(config: Settings, storage: ObjectStorageClient) -> LinkRepository:
    """Pick the identifier mapping backend from LINK_STORE."""
    store = config.link_store.lower()
    if store == "memory":
        return InMemoryLinkRepository()
    if store == "storage":
        return StorageLinkRepository(storage, prefix=config.link_prefix)
    raise ValueError(f"Unknown LINK_STORE: {config.link_store}. Must be 'memory' or 'storage'")


def build_resume_service(
    config: Optional[Settings] = None,
    storage: Optional[ObjectStorageClient] = None,
) -> ResumeService:
    """
    Build a ResumeService from settings.

    Args:
        config: Settings (defaults to global settings)
        storage: Pre-built storage client (defaults to one built from config)
    """
    config = config or default_settings
    storage = storage or ObjectStorageClient(config)

    links = build_link_repository(config, storage)
    logger.info(f"Link store: {type(links).__name__}")

    return ResumeService(
        storage=storage,
        links=links,
        qr_encoder=QrEncoder(
            box_size=config.qr_box_size,
            border=config.qr_border,
            error_correction=config.qr_error_correction,
        ),
        key_prefix=config.storage_key_prefix,
        public_base_url=config.public_base_url,
    )


def get_resume_service(request: Request) -> ResumeService:
    """
    Dependency for FastAPI routes to get the resume service.
    Usage: service: ResumeService = Depends(get_resume_service)
    """
    service = getattr(request.app.state, "resume_service", None)
    if service is None:
        # Lifespan did not run (e.g. app mounted without startup events)
        service = build_resume_service()
        request.app.state.resume_service = service
    return service
