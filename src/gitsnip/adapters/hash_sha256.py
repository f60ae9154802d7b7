"""SHA256 digest adapter."""

import hashlib

DEFAULT_WIDTH = 8


class Sha256Adapter:
    """Truncated SHA256 implementation of HashPort."""

    def __init__(self, width: int = DEFAULT_WIDTH):
        if not 0 < width <= 64:
            raise ValueError(f"Digest width must be between 1 and 64, got {width}")
        self.width = width

    def digest(self, text: str) -> str:
        """Return the first ``width`` hex characters of SHA256(text)."""
        return hashlib.sha256(text.encode("utf-8")).hexdigest()[: self.width]
