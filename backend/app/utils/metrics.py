"""
Prometheus metrics definitions for the API.
All metrics are registered here and can be imported by other modules.
"""
from prometheus_client import Counter, Histogram

# HTTP request metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'path', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'path'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# Error metrics
errors_total = Counter(
    'errors_total',
    'Total errors',
    ['error_type']
)

# Upload metrics
resume_uploads_total = Counter(
    'resume_uploads_total',
    'Total resume uploads',
    ['status']
)

resume_upload_bytes = Histogram(
    'resume_upload_bytes',
    'Size of uploaded resumes in bytes',
    buckets=[10_000, 50_000, 100_000, 250_000, 500_000, 1_000_000, 5_000_000, 10_000_000]
)

qr_codes_generated_total = Counter(
    'qr_codes_generated_total',
    'Total QR codes generated'
)

# View metrics
view_requests_total = Counter(
    'view_requests_total',
    'Total view/resolve requests',
    ['variant', 'outcome']
)

# Object storage metrics
storage_operations_total = Counter(
    'storage_operations_total',
    'Total object storage operations',
    ['operation', 'status']
)
