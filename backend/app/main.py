"""
FastAPI application entry point.
Sets up the API with lifespan events for logging and service initialization.
"""
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from app.config import settings
from app.api.router import api_router
from app.dependencies import build_resume_service
from app.middleware.metrics_middleware import MetricsMiddleware
from app.utils.logging import configure_logging

STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    - Startup: configure logging, build the resume service
    - Shutdown: nothing to release, the in-memory link store goes with the process
    """
    configure_logging('resume-qr-api', settings.log_level)

    app.state.resume_service = build_resume_service(settings)

    yield


# Create FastAPI app
app = FastAPI(
    title="Resume QR API",
    description="Upload a PDF resume and share it through a QR code",
    version="0.1.0",
    lifespan=lifespan
)

# CORS middleware (frontend may be hosted separately)
allowed_origins = settings.allowed_origins_list
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials="*" not in allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Metrics middleware (must be after CORS to track all requests)
app.add_middleware(MetricsMiddleware)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Resume QR API",
        "version": "0.1.0",
        "environment": settings.environment
    }


@app.get("/ui", include_in_schema=False)
async def ui():
    """Browser client for the upload endpoint."""
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def run():
    """Run the API with uvicorn on the configured port."""
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
