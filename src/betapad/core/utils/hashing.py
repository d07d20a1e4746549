"""SHA-256 content hashing for resource change detection"""

import hashlib


def sha256(content: str) -> str:
    """Hex SHA-256 of UTF-8 content; stored in Resource.hash to skip unchanged imports."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()
