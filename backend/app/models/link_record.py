"""
LinkRecord model mapping a generated id to a stored résumé.

Records are created once at upload time and never updated.
"""
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

UNIQUE_ID_RE = re.compile(r"^[0-9a-f]{32}$")


def generate_unique_id() -> str:
    """Generate a random, opaque id for a share link."""
    return uuid.uuid4().hex


def is_valid_unique_id(value: str) -> bool:
    """Check that value has the shape of a generated id."""
    return bool(UNIQUE_ID_RE.match(value or ""))


@dataclass(frozen=True)
class LinkRecord:
    """
    Identifier mapping entry.

    Attributes:
        unique_id: Generated id embedded in the view URL
        storage_key: Object key of the uploaded PDF
        created_at: When the link was issued (UTC)
    """
    unique_id: str
    storage_key: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "unique_id": self.unique_id,
            "storage_key": self.storage_key,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LinkRecord":
        return cls(
            unique_id=data["unique_id"],
            storage_key=data["storage_key"],
            created_at=datetime.fromisoformat(data["created_at"]),
        )
