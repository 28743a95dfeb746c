"""
Storage key generation and validation.

Keys look like ``resumes/1718000000000-1a2b3c4d-My_Resume.pdf``:
a millisecond timestamp plus a random token keeps two uploads of the same
file apart, and the sanitized filename keeps the key readable.
"""
import re
import time
import unicodedata
import uuid
from typing import Optional

DEFAULT_FILENAME = "resume.pdf"
MAX_STEM_LENGTH = 100

_WHITESPACE_RE = re.compile(r"\s+")
_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9._-]")


def _is_control(char: str) -> bool:
    return unicodedata.category(char).startswith("C")


def sanitize_filename(filename: Optional[str]) -> str:
    """
    Reduce an uploaded filename to a safe single path segment ending in .pdf.

    Path components are dropped, control characters removed, whitespace runs
    become underscores and anything outside [A-Za-z0-9._-] is replaced.
    """
    if not filename:
        return DEFAULT_FILENAME

    # Keep the last path segment only (browsers on Windows send backslashes)
    name = re.split(r"[\\/]", filename)[-1]
    name = _WHITESPACE_RE.sub("_", name.strip())
    name = "".join(ch for ch in name if not _is_control(ch))
    name = _UNSAFE_CHARS_RE.sub("_", name)
    name = name.lstrip("._")

    stem, dot, ext = name.rpartition(".")
    if not dot:
        stem, ext = name, ""
    if ext.lower() == "pdf":
        name = stem
    name = re.sub(r"\.{2,}", ".", name)[:MAX_STEM_LENGTH].rstrip("._")

    if not name:
        return DEFAULT_FILENAME
    return f"{name}.pdf"


def generate_storage_key(filename: Optional[str], prefix: str = "") -> str:
    """Build a unique storage key for an uploaded file."""
    timestamp = int(time.time() * 1000)
    token = uuid.uuid4().hex[:8]
    return f"{prefix}{timestamp}-{token}-{sanitize_filename(filename)}"


def is_safe_storage_key(object_key: str) -> bool:
    """
    Check a caller-supplied key before it is used in a storage lookup.

    Rejects traversal sequences, absolute paths, backslashes and control characters.
    """
    if not object_key or object_key.startswith("/"):
        return False
    if "\\" in object_key:
        return False
    if any(_is_control(ch) for ch in object_key):
        return False
    return ".." not in object_key
