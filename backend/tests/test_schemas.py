"""
Tests for Pydantic schemas and app wiring.
"""
import pytest
from pydantic import ValidationError

from app.config import Settings
from app.dependencies import build_link_repository, build_resume_service
from app.middleware.metrics_middleware import normalize_path
from app.repositories.link_repository import InMemoryLinkRepository, StorageLinkRepository
from app.schemas.upload import UploadResponse
from tests.conftest import FakeStorageClient


class TestUploadResponse:
    """Tests for UploadResponse."""

    def test_success_response(self):
        schema = UploadResponse(
            success=True,
            resumeUrl="https://resume-qr.test/api/view/abc",
            qrCode="data:image/png;base64,AAAA",
            profileLink="",
            uniqueId="abc"
        )
        data = schema.model_dump(exclude_none=True)

        assert data["success"] is True
        assert data["profileLink"] == ""
        assert "error" not in data

    def test_failure_response(self):
        data = UploadResponse.failure("No PDF uploaded").model_dump(exclude_none=True)
        assert data == {"success": False, "error": "No PDF uploaded"}

    def test_success_required(self):
        with pytest.raises(ValidationError):
            UploadResponse()


class TestWiring:
    """Tests for settings-driven construction."""

    def test_memory_link_store(self):
        repo = build_link_repository(Settings(link_store="memory"), FakeStorageClient())
        assert isinstance(repo, InMemoryLinkRepository)

    def test_storage_link_store(self):
        storage = FakeStorageClient()
        repo = build_link_repository(Settings(link_store="Storage", link_prefix="l/"), storage)

        assert isinstance(repo, StorageLinkRepository)
        assert repo.prefix == "l/"
        assert repo.storage is storage

    def test_unknown_link_store(self):
        with pytest.raises(ValueError):
            build_link_repository(Settings(link_store="redis"), FakeStorageClient())

    def test_build_resume_service(self):
        config = Settings(public_base_url="https://qr.example.com", storage_key_prefix="cv/", qr_box_size=6)
        service = build_resume_service(config, storage=FakeStorageClient())

        assert service.public_base_url == "https://qr.example.com"
        assert service.key_prefix == "cv/"
        assert service.qr_encoder.box_size == 6
        assert service.build_view_url("abc") == "https://qr.example.com/api/view/abc"

    def test_allowed_origins_list(self):
        config = Settings(allowed_origins="http://localhost:5173, https://app.example.com")
        assert config.allowed_origins_list == ["http://localhost:5173", "https://app.example.com"]


class TestNormalizePath:
    """Tests for metrics path normalization."""

    @pytest.mark.parametrize("path, expected", [
        ("/api/view/0123456789abcdef0123456789abcdef", "/api/view/{id}"),
        ("/api/view/550e8400-e29b-41d4-a716-446655440000", "/api/view/{id}"),
        ("/api/view/not-an-id", "/api/view/{id}"),
        ("/api/view/a/b", "/api/view/{id}"),
        ("/api/view", "/api/view"),
        ("/api/items/42", "/api/items/{id}"),
        ("/api/upload", "/api/upload"),
    ])
    def test_normalize(self, path, expected):
        assert normalize_path(path) == expected
