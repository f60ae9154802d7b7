"""Hash port interface."""

from typing import Protocol


class HashPort(Protocol):
    """Port for the digest function used to build cache keys."""

    def digest(self, text: str) -> str:
        """Return a short, fixed-width hex fingerprint of text."""
        ...
