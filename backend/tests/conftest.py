"""
Test configuration and fixtures.
Object storage is replaced with an in-memory fake; no bucket is needed.
"""
import os

# Set test environment before any imports
os.environ["ENVIRONMENT"] = "test"
os.environ["LINK_STORE"] = "memory"
os.environ.pop("PUBLIC_BASE_URL", None)
os.environ.pop("STORAGE_PUBLIC_URL", None)

import json
import pytest
from typing import AsyncGenerator, Dict, Optional
from urllib.parse import quote

from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from app.repositories.link_repository import InMemoryLinkRepository
from app.services.qr_service import QrEncoder
from app.services.resume_service import ResumeService
from app.storage.s3_client import StorageNotConfigured

PUBLIC_BASE = "https://cdn.test/resumes-bucket"
SAMPLE_PDF = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n<< /Root 1 0 R >>\n%%EOF\n"


class FakeStorageClient:
    """In-memory stand-in for ObjectStorageClient."""

    def __init__(self, configured: bool = True, public_urls: bool = True):
        self.objects: Dict[str, bytes] = {}
        self.content_types: Dict[str, str] = {}
        self.put_calls = 0
        self.configured = configured
        self.public_urls = public_urls
        self.fail_put: Optional[Exception] = None

    @property
    def is_configured(self) -> bool:
        return self.configured

    @property
    def bucket(self) -> str:
        return "resumes-bucket"

    def put_object(self, object_key: str, body: bytes, content_type: str) -> None:
        self.put_calls += 1
        if not self.configured:
            raise StorageNotConfigured("Object storage is not configured")
        if self.fail_put is not None:
            raise self.fail_put
        self.objects[object_key] = body
        self.content_types[object_key] = content_type

    def get_public_url(self, object_key: str) -> Optional[str]:
        if not self.public_urls:
            return None
        return f"{PUBLIC_BASE}/{quote(object_key)}"

    def check_object_exists(self, object_key: str) -> bool:
        return object_key in self.objects

    def put_json(self, object_key: str, payload: dict) -> None:
        self.put_object(object_key, json.dumps(payload).encode("utf-8"), "application/json")

    def get_json(self, object_key: str) -> Optional[dict]:
        if object_key not in self.objects:
            return None
        return json.loads(self.objects[object_key])

    def fetch(self, public_url: str) -> bytes:
        """Resolve a URL issued by get_public_url back to the stored bytes."""
        from urllib.parse import unquote
        return self.objects[unquote(public_url[len(PUBLIC_BASE) + 1:])]


@pytest.fixture
def fake_storage() -> FakeStorageClient:
    return FakeStorageClient()


@pytest.fixture
def link_repository() -> InMemoryLinkRepository:
    return InMemoryLinkRepository()


@pytest.fixture
def qr_encoder() -> QrEncoder:
    return QrEncoder(box_size=4, border=4, error_correction="M")


@pytest.fixture
def resume_service(fake_storage, link_repository, qr_encoder) -> ResumeService:
    return ResumeService(
        storage=fake_storage,
        links=link_repository,
        qr_encoder=qr_encoder,
        key_prefix="resumes/",
        public_base_url="https://resume-qr.test",
    )


def get_test_app(service: ResumeService) -> FastAPI:
    """Return the FastAPI app with the resume service overridden."""
    from app.main import app
    from app.dependencies import get_resume_service

    app.dependency_overrides[get_resume_service] = lambda: service
    return app


@pytest.fixture
async def client(resume_service: ResumeService) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    app = get_test_app(resume_service)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Clean up overrides
    app.dependency_overrides.clear()
