"""Core domain errors."""


class GitSnipError(Exception):
    """Base error for gitsnip."""

    stage = "snippet"


class ValidationError(GitSnipError):
    """Request arguments are inconsistent or malformed."""

    stage = "validate"


class TransportError(GitSnipError):
    """The remote could not be reached or refused the operation."""

    stage = "transport"


class ResolutionError(GitSnipError):
    """A selector could not be resolved to a commit."""

    stage = "resolve"

    def __init__(self, message: str, selector: object | None = None):
        super().__init__(message)
        self.selector = selector


class FetchError(GitSnipError):
    """The commit could not be fetched or checked out."""

    stage = "fetch"


class PathNotFoundError(GitSnipError, FileNotFoundError):
    """Requested path does not exist in the checked-out tree."""

    stage = "read"


class StorageError(GitSnipError):
    """Reading or writing the snippet store failed."""

    stage = "store"
