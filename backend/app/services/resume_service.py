"""
Resume service for the upload and view workflows.

Upload:
1. Validate the file part
2. Store the PDF under a fresh storage key
3. Check that storage can hand out a URL for it
4. Register a generated id -> storage key mapping
5. Encode the view URL (which embeds the id) as a QR code

View:
- By id: id -> storage key -> public URL
- By key: storage key -> public URL (legacy links)

Nothing is rolled back: if a later step fails the stored PDF stays in the bucket.
"""
import logging
import time
from typing import Optional
from urllib.parse import unquote

from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool

from app.exceptions import (
    InvalidStorageKey,
    MissingFile,
    ObjectNotFound,
    PublicUrlResolutionFailed,
    PublicUrlUnavailable,
    StorageUploadFailed,
    UnknownIdentifier,
    UnsupportedContentType,
)
from app.models.link_record import LinkRecord, generate_unique_id
from app.repositories.link_repository import CorruptLinkRecord, LinkRepository
from app.schemas.upload import UploadResponse
from app.services.qr_service import QrEncoder
from app.storage.keys import generate_storage_key, is_safe_storage_key
from app.storage.s3_client import ObjectStorageClient, StorageNotConfigured
from app.utils.logging import log_resume_uploaded, log_storage_failure
from app.utils.metrics import resume_upload_bytes

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
GENERIC_CONTENT_TYPES = ("", "application/octet-stream")

STORAGE_ERRORS = (StorageNotConfigured, ClientError, BotoCoreError)
LINK_LOOKUP_ERRORS = STORAGE_ERRORS + (CorruptLinkRecord,)


class ResumeService:
    """Service for resume upload and link resolution."""

    def __init__(
        self,
        storage: ObjectStorageClient,
        links: LinkRepository,
        qr_encoder: QrEncoder,
        key_prefix: str = "resumes/",
        public_base_url: Optional[str] = None,
    ):
        """
        Args:
            storage: Object storage client
            links: Identifier mapping repository
            qr_encoder: QR renderer
            key_prefix: Prefix for stored PDF keys
            public_base_url: Base URL for view links (request base URL is used when None)
        """
        self.storage = storage
        self.links = links
        self.qr_encoder = qr_encoder
        self.key_prefix = key_prefix
        self.public_base_url = public_base_url

    @staticmethod
    def validate_upload(file_name: Optional[str], content_type: Optional[str]) -> None:
        """
        Check the file part before anything is written.

        A generic content type is accepted when the filename says .pdf.

        Raises:
            MissingFile: no file part / empty filename
            UnsupportedContentType: not declared as a PDF
        """
        if not file_name:
            raise MissingFile()

        declared = (content_type or "").split(";")[0].strip().lower()
        if declared == PDF_CONTENT_TYPE:
            return
        if declared in GENERIC_CONTENT_TYPES and file_name.lower().endswith(".pdf"):
            return
        raise UnsupportedContentType()

    def build_view_url(self, unique_id: str, request_base_url: str = "") -> str:
        """Build the shareable URL that the QR code points at."""
        base = (self.public_base_url or request_base_url).rstrip("/")
        return f"{base}/api/view/{unique_id}"

    async def upload_resume(
        self,
        file_content: bytes,
        file_name: Optional[str],
        content_type: Optional[str],
        profile_link: str = "",
        request_base_url: str = "",
    ) -> UploadResponse:
        """
        Store a PDF and issue a QR code for its share link.

        Args:
            file_content: PDF bytes
            file_name: Original filename from the client
            content_type: Declared MIME type of the file part
            profile_link: Optional profile URL, echoed back unchanged
            request_base_url: Fallback base for the view URL

        Returns:
            Successful UploadResponse

        Raises:
            MissingFile, UnsupportedContentType, StorageUploadFailed,
            PublicUrlUnavailable, QrEncodingFailed
        """
        start = time.perf_counter()
        self.validate_upload(file_name, content_type)

        storage_key = generate_storage_key(file_name, prefix=self.key_prefix)
        logger.info(f"Uploading PDF with key: {storage_key}")

        try:
            await run_in_threadpool(
                self.storage.put_object, storage_key, file_content, PDF_CONTENT_TYPE
            )
        except STORAGE_ERRORS as e:
            log_storage_failure(logger, operation="put", error=str(e), storage_key=storage_key)
            raise StorageUploadFailed() from e

        public_url = await run_in_threadpool(self.storage.get_public_url, storage_key)
        if not public_url:
            raise PublicUrlUnavailable()

        record = LinkRecord(unique_id=generate_unique_id(), storage_key=storage_key)
        try:
            await run_in_threadpool(self.links.add, record)
        except STORAGE_ERRORS as e:
            log_storage_failure(logger, operation="link_add", error=str(e), storage_key=storage_key)
            raise StorageUploadFailed("Failed to register resume link") from e

        resume_url = self.build_view_url(record.unique_id, request_base_url)
        qr_code = await run_in_threadpool(self.qr_encoder.to_data_uri, resume_url)

        resume_upload_bytes.observe(len(file_content))
        log_resume_uploaded(
            logger,
            unique_id=record.unique_id,
            storage_key=storage_key,
            size_bytes=len(file_content),
            duration_ms=(time.perf_counter() - start) * 1000,
        )

        return UploadResponse(
            success=True,
            resumeUrl=resume_url,
            qrCode=qr_code,
            profileLink=profile_link,
            uniqueId=record.unique_id,
        )

    async def resolve_unique_id(self, unique_id: str) -> tuple[str, str]:
        """
        Resolve a generated id to the current public URL of its PDF.

        Returns:
            (public_url, storage_key) tuple

        Raises:
            UnknownIdentifier: id was never issued (or not by this store)
            PublicUrlResolutionFailed: id known but storage cannot produce a URL,
                or the mapping itself could not be read
        """
        try:
            record = await run_in_threadpool(self.links.get, unique_id)
        except LINK_LOOKUP_ERRORS as e:
            log_storage_failure(logger, operation="link_get", error=str(e))
            raise PublicUrlResolutionFailed() from e

        if record is None:
            raise UnknownIdentifier()

        public_url = await run_in_threadpool(self.storage.get_public_url, record.storage_key)
        if not public_url:
            raise PublicUrlResolutionFailed()

        return public_url, record.storage_key

    async def resolve_storage_key(self, raw_key: Optional[str]) -> tuple[str, str]:
        """
        Resolve a storage key passed directly in a view URL.

        Returns:
            (public_url, storage_key) tuple

        Raises:
            InvalidStorageKey: missing, empty or unsafe key
            ObjectNotFound: no such object, or no URL for it
            PublicUrlResolutionFailed: storage could not be queried
        """
        if not raw_key:
            raise InvalidStorageKey("Missing file parameter")

        storage_key = unquote(raw_key)
        if not is_safe_storage_key(storage_key):
            raise InvalidStorageKey()

        try:
            exists = await run_in_threadpool(self.storage.check_object_exists, storage_key)
        except STORAGE_ERRORS as e:
            log_storage_failure(logger, operation="head", storage_key=storage_key, error=str(e))
            raise PublicUrlResolutionFailed() from e

        if not exists:
            raise ObjectNotFound()

        public_url = await run_in_threadpool(self.storage.get_public_url, storage_key)
        if not public_url:
            raise ObjectNotFound()

        return public_url, storage_key
