"""
Domain models.
"""
from app.models.link_record import LinkRecord, generate_unique_id, is_valid_unique_id

__all__ = [
    "LinkRecord",
    "generate_unique_id",
    "is_valid_unique_id",
]
