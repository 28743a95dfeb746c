"""
Repository layer for the identifier mapping.
"""
from app.repositories.link_repository import (
    CorruptLinkRecord,
    InMemoryLinkRepository,
    LinkRepository,
    StorageLinkRepository,
)

__all__ = ["LinkRepository", "InMemoryLinkRepository", "StorageLinkRepository", "CorruptLinkRecord"]
