"""Cache key derivation."""

from pathlib import PurePosixPath

from ..ports import HashPort

UNKNOWN_NAME = "unknown"


class KeyDeriver:
    """Derive stable cache-key prefixes from request coordinates.

    The prefix has the form ``{H(url)}-{H(kind-value)}-{H(path)}-{basename}``
    and does not depend on the resolved commit.
    """

    def __init__(self, hasher: HashPort):
        self.hasher = hasher

    def hash_url(self, git_url: str) -> str:
        return self.hasher.digest(git_url)

    def hash_selector(self, kind: str, value: str) -> str:
        return self.hasher.digest(f"{kind}-{value}")

    def hash_path(self, path: str) -> str:
        return self.hasher.digest(path)

    def derive(self, git_url: str, kind: str, value: str, path: str) -> str:
        """Build the cache-key prefix for a request."""
        base_name = PurePosixPath(path).name or UNKNOWN_NAME
        return "-".join(
            (
                self.hash_url(git_url),
                self.hash_selector(kind, value),
                self.hash_path(path),
                base_name,
            )
        )
