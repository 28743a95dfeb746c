"""
Application configuration using Pydantic Settings.
All environment variables are loaded here with sensible defaults.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Environment
    environment: str = "dev"
    log_level: str = "INFO"
    port: int = 5000

    # Base URL used to build shareable view links (e.g., https://resume-qr.example.com)
    # Falls back to the incoming request's base URL when unset
    public_base_url: Optional[str] = None

    # CORS (comma separated list of origins, "*" allows any)
    allowed_origins: str = "*"

    # S3-compatible object storage (Cloudflare R2, MinIO, Supabase S3, AWS S3)
    storage_endpoint: Optional[str] = None  # e.g., https://<account_id>.r2.cloudflarestorage.com
    storage_bucket: str = "resumes"
    storage_access_key: Optional[str] = None
    storage_secret_key: Optional[str] = None
    storage_region: str = "auto"
    storage_public_url: Optional[str] = None  # Public bucket domain, preferred over presigned URLs
    storage_presign_expiration: int = 604800  # 7 days, the S3 SigV4 maximum
    storage_key_prefix: str = "resumes/"

    # Identifier mapping backend: "memory" (process lifetime) or "storage" (bucket objects)
    link_store: str = "memory"
    link_prefix: str = "links/"

    # QR rendering
    qr_box_size: int = 10
    qr_border: int = 4
    qr_error_correction: str = "M"  # L, M, Q or H

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def allowed_origins_list(self) -> list[str]:
        """CORS origins as a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
