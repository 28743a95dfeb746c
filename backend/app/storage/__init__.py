"""
Storage module for S3-compatible object storage.

Holds the boto3 client wrapper and the storage key policy.
"""
from app.storage.s3_client import ObjectStorageClient, StorageNotConfigured
from app.storage.keys import generate_storage_key, is_safe_storage_key, sanitize_filename

__all__ = [
    "ObjectStorageClient",
    "StorageNotConfigured",
    "generate_storage_key",
    "is_safe_storage_key",
    "sanitize_filename",
]
