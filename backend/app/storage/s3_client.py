"""
S3-compatible object storage client.

Uses boto3 with the S3 API, so it works against Cloudflare R2, MinIO,
Supabase Storage (S3 protocol) or AWS S3.

Public URLs:
- If STORAGE_PUBLIC_URL is set (public bucket / custom domain), the URL is
  that base joined with the quoted object key. No network call is made.
- Otherwise a presigned GET URL is issued, valid for
  STORAGE_PRESIGN_EXPIRATION seconds.
"""
import json
import logging
from typing import Any, Optional
from urllib.parse import quote

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from app.config import Settings, settings as default_settings
from app.utils.metrics import storage_operations_total

logger = logging.getLogger(__name__)


class StorageNotConfigured(RuntimeError):
    """Raised when a write is attempted without storage credentials."""


class ObjectStorageClient:
    """
    Thin wrapper around a boto3 S3 client bound to one bucket.

    Writes raise on failure so callers can attach the provider error.
    get_public_url returns None instead of raising. Existence and JSON
    lookups report a missing object as False/None and raise on other errors.
    """

    def __init__(self, config: Optional[Settings] = None, client: Any = None):
        """
        Initialize the storage client.

        Args:
            config: Settings to read storage configuration from (defaults to global settings)
            client: Pre-built boto3 S3 client (tests inject a mock here)
        """
        self._settings = config or default_settings
        self._client = client
        self._configured = client is not None

        if self._client is not None:
            return

        # Check if storage is configured
        if not all([
            self._settings.storage_endpoint,
            self._settings.storage_access_key,
            self._settings.storage_secret_key
        ]):
            logger.warning(
                "Object storage not configured. "
                "Set STORAGE_ENDPOINT, STORAGE_ACCESS_KEY, and STORAGE_SECRET_KEY."
            )
            return

        try:
            self._client = boto3.client(
                's3',
                endpoint_url=self._settings.storage_endpoint,
                aws_access_key_id=self._settings.storage_access_key,
                aws_secret_access_key=self._settings.storage_secret_key,
                region_name=self._settings.storage_region,
                config=Config(
                    signature_version='s3v4',
                    s3={'addressing_style': 'path'}
                )
            )
            self._configured = True
            logger.info(f"Storage client initialized for bucket: {self.bucket}")

        except NoCredentialsError:
            logger.error("Storage credentials not found or invalid")
        except Exception as e:
            logger.error(f"Failed to initialize storage client: {e}")

    @property
    def is_configured(self) -> bool:
        """Check if the client is properly configured."""
        return self._configured and self._client is not None

    @property
    def bucket(self) -> str:
        """Get configured bucket name."""
        return self._settings.storage_bucket

    def put_object(self, object_key: str, body: bytes, content_type: str) -> None:
        """
        Store bytes under object_key.

        Raises:
            StorageNotConfigured: if no client is available
            ClientError / BotoCoreError: provider errors, unchanged
        """
        if not self.is_configured:
            storage_operations_total.labels(operation="put", status="not_configured").inc()
            raise StorageNotConfigured("Object storage is not configured")

        try:
            self._client.put_object(
                Bucket=self.bucket,
                Key=object_key,
                Body=body,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError):
            storage_operations_total.labels(operation="put", status="error").inc()
            raise

        storage_operations_total.labels(operation="put", status="ok").inc()
        logger.debug(f"Stored {object_key} ({len(body)} bytes)")

    def get_public_url(self, object_key: str) -> Optional[str]:
        """
        Get a fetchable URL for an object.

        Args:
            object_key: The S3 object key

        Returns:
            URL string, or None if one cannot be produced
        """
        public_base = self._settings.storage_public_url
        if public_base:
            return f"{public_base.rstrip('/')}/{quote(object_key)}"

        if not self.is_configured:
            logger.error("Cannot generate public URL: storage not configured")
            return None

        try:
            url = self._client.generate_presigned_url(
                ClientMethod='get_object',
                Params={
                    'Bucket': self.bucket,
                    'Key': object_key,
                    'ResponseContentType': 'application/pdf',
                },
                ExpiresIn=self._settings.storage_presign_expiration
            )
            return url or None

        except ClientError as e:
            logger.error(f"Failed to generate public URL for {object_key}: {e}")
            return None
        except Exception as e:
            logger.error(f"Unexpected error generating public URL for {object_key}: {e}")
            return None

    def check_object_exists(self, object_key: str) -> bool:
        """
        Check if an object exists in the bucket.

        Args:
            object_key: The S3 object key to check

        Returns:
            True if object exists, False if it does not or storage is not configured

        Raises:
            ClientError / BotoCoreError: provider or transport errors other than a missing key
        """
        if not self.is_configured:
            return False

        try:
            self._client.head_object(Bucket=self.bucket, Key=object_key)
        except ClientError as e:
            if e.response['Error']['Code'] in ('404', 'NoSuchKey', 'NotFound'):
                return False
            storage_operations_total.labels(operation="head", status="error").inc()
            logger.error(f"Error checking object existence for {object_key}: {e}")
            raise
        except BotoCoreError as e:
            storage_operations_total.labels(operation="head", status="error").inc()
            logger.error(f"Storage unreachable while checking {object_key}: {e}")
            raise

        return True

    def put_json(self, object_key: str, payload: dict) -> None:
        """Store a small JSON document. Raises like put_object."""
        body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        self.put_object(object_key, body, "application/json")

    def get_json(self, object_key: str) -> Optional[dict]:
        """
        Read a JSON document written by put_json.

        Returns:
            The decoded document, or None if the object does not exist

        Raises:
            StorageNotConfigured: if no client is available
            ClientError: for provider errors other than a missing key
        """
        if not self.is_configured:
            raise StorageNotConfigured("Object storage is not configured")

        try:
            response = self._client.get_object(Bucket=self.bucket, Key=object_key)
        except ClientError as e:
            if e.response['Error']['Code'] in ('404', 'NoSuchKey', 'NotFound'):
                return None
            storage_operations_total.labels(operation="get", status="error").inc()
            raise

        storage_operations_total.labels(operation="get", status="ok").inc()
        return json.loads(response['Body'].read())
